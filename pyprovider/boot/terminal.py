import asyncio

from .app_runner import AppRunner

GRAY = "\x1b[90m"
YELLOW = "\x1b[33m"
RED = "\x1b[31m"
RESET = "\x1b[0m"

HELP = (
    f"{GRAY}Commands:{RESET} {YELLOW}click [target]{RESET}, {YELLOW}:targets{RESET}, "
    f"{YELLOW}:tree{RESET}, {YELLOW}:trace{RESET}, {YELLOW}:q{RESET}"
)


def handle_command(app: AppRunner, line: str) -> bool:
    """Run one terminal command against ``app``. Returns False when the loop should stop.

    Commands:
      - click [target] | c [target]  → app.click(target) and print the new view
      - :targets                     → list clickable node ids
      - :tree                        → app.print_vnode_tree()
      - :trace                       → app.print_render_trace()
      - :q|:quit|:exit               → quit
    """
    s = (line or "").strip()
    if not s:
        return True

    if s.startswith(":") or s.startswith("/"):
        cmd = s[1:].strip()
        if cmd in ("q", "quit", "exit"):
            return False
        if cmd == "tree":
            app.print_vnode_tree()
        elif cmd == "trace":
            app.print_render_trace()
        elif cmd == "targets":
            for target in app.targets():
                print(f"{GRAY}-{RESET} {YELLOW}{target}{RESET}")
        else:
            print(HELP)
        return True

    parts = s.split(None, 1)
    if parts[0] in ("click", "c"):
        target = parts[1].strip() if len(parts) > 1 else None
        try:
            print(app.click(target))
        except KeyError as exc:
            print(f"{RED}[error]{RESET} {exc.args[0] if exc.args else exc}")
        return True

    print(HELP)
    return True


async def read_terminal_and_invoke(app: AppRunner, *, prompt: str = ">> "):
    """Minimal async loop that reads lines from stdin and forwards them to ``handle_command``.

    - Reading happens via run_in_executor to avoid blocking the event loop.
    - Stop the loop by sending :q / :quit / :exit or Ctrl+C.
    """
    loop = asyncio.get_running_loop()
    print(app.text())
    print(HELP)
    try:
        while True:
            txt = await loop.run_in_executor(None, input, prompt)
            if not handle_command(app, txt):
                break
    except (KeyboardInterrupt, EOFError):
        pass
