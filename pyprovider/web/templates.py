from __future__ import annotations

BODY_MARKER = "<!--pyprovider:body-->"

BASE_HTML = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>The Provider Pattern</title>
    <style>
      body { font-family: system-ui, sans-serif; margin: 2rem; }
      .toggle-btn { min-width: 4rem; padding: .4rem .8rem; border-radius: 1rem; border: 1px solid #6b7280; cursor: pointer; }
      .toggle-btn-on { background: #16a34a; color: #f3f4f6; }
      .toggle-btn-off { background: #e5e7eb; color: #000000; }
    </style>
  </head>
  <body>
    <main id="root"><!--pyprovider:body--></main>
    <script>
      (function () {
        const root = document.getElementById("root");
        const proto = location.protocol === "https:" ? "wss://" : "ws://";
        const ws = new WebSocket(proto + location.host + "/ws");
        ws.onmessage = (ev) => {
          const msg = JSON.parse(ev.data);
          if (msg.type === "html") root.innerHTML = msg.html;
          if (msg.type === "error") console.error(msg.error);
        };
        root.addEventListener("click", (ev) => {
          const el = ev.target.closest("[data-pr-on~=click]");
          if (!el) return;
          ws.send(JSON.stringify({ t: "click", id: el.dataset.prId }));
        });
      })();
    </script>
  </body>
</html>
"""


def render_page(body_html: str) -> str:
    return BASE_HTML.replace(BODY_MARKER, body_html)
