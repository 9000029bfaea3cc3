import asyncio
import inspect
import threading
import time
from typing import Callable, List, Optional

from pyprovider.core.hook import HookContext
from pyprovider.core.runtime import has_pending_renders, mount, run_renders
from pyprovider.input.bus import Event, InputBus
from pyprovider.input.dispatch import dispatch, iter_targets
from pyprovider.web.renderer import render_to_html, render_to_text


class AppRunner:
    """Background runner that owns the component tree and its render loop.

    Every touch of the tree happens on the runner's own event loop thread;
    public methods marshal onto it and block for the result.

    Usage:
        app = AppRunner(Usage)
        app.click()
        ...
        app.shutdown()
    """

    def __init__(
        self,
        app_component_fn,
        *,
        props: Optional[dict] = None,
        fps: int = 20,
        trace: bool = True,
    ):
        self._app_component_fn = app_component_fn
        self._props: dict = dict(props or {})
        self._fps: int = max(1, int(fps))
        self._trace: bool = trace
        self._loop: asyncio.AbstractEventLoop = asyncio.new_event_loop()
        self._thread: threading.Thread = threading.Thread(
            target=self._thread_main, name="pyprovider-app-loop", daemon=True
        )
        self._stopping: bool = False
        self._ready: threading.Event = threading.Event()
        self._error: Optional[BaseException] = None

        # Set on loop thread during startup
        self._root_ctx: Optional[HookContext] = None
        self._bus: InputBus = InputBus()
        self._last_html: Optional[str] = None

        # Web bridge callback (set by server): executed from runner thread
        self._on_html: Optional[Callable[[str], None]] = None

        self._thread.start()
        # Wait until the loop thread mounted the app
        self._ready.wait()
        if self._error is not None:
            self._thread.join(timeout=2.0)
            raise self._error

    # -------------------------------
    # Public API
    # -------------------------------
    @property
    def bus(self) -> InputBus:
        return self._bus

    def click(self, target: Optional[str] = None, *, timeout: Optional[float] = 2.0) -> str:
        """Click ``target`` (default: the first clickable node) and return the new text view.

        ``KeyError`` for an unknown target and any render error are re-raised here.
        """
        return self._call(self._click(target, "term"), timeout=timeout)

    def dispatch(self, target: str, *, source: str = "web", timeout: Optional[float] = 2.0) -> str:
        """Like ``click`` but for an explicit target; returns the new HTML."""
        self._call(self._click(target, source), timeout=timeout)
        return self.html()

    def text(self) -> str:
        return self._call(self._snapshot(render_to_text))

    def html(self) -> str:
        return self._call(self._snapshot(render_to_html))

    def targets(self) -> List[str]:
        async def _task():
            return [path for path, _ctx in iter_targets(self._root_ctx)]

        return self._call(_task())

    def print_vnode_tree(self) -> None:
        async def _task():
            self._root_ctx.render_tree()

        self._call(_task(), timeout=1.0)

    def print_render_trace(self) -> None:
        async def _task():
            from pyprovider.core.debug import print_last_trace

            print_last_trace()

        self._call(_task(), timeout=1.0)

    def attach_web_bridge(
        self,
        *,
        on_html: Optional[Callable[[str], object]] = None,
        target_loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """Attach a callback for HTML updates.
        If ``target_loop`` is provided, the callback is marshaled to that loop:
        - coroutine callbacks → scheduled with asyncio.run_coroutine_threadsafe
        - regular callbacks → scheduled with loop.call_soon_threadsafe
        Otherwise, it is invoked directly on the runner thread.
        """
        if on_html is None or target_loop is None:
            self._on_html = on_html
            return

        if inspect.iscoroutinefunction(on_html):

            def _call(html: str) -> None:
                asyncio.run_coroutine_threadsafe(on_html(html), target_loop)

        else:

            def _call(html: str) -> None:
                target_loop.call_soon_threadsafe(on_html, html)

        self._on_html = _call

    def shutdown(self) -> None:
        """Stop render loop and background thread; unmounts the tree."""
        if self._stopping:
            return
        self._stopping = True

        # Nudge the loop so the sleep wakes up promptly
        def _noop():
            return None

        if not self._loop.is_closed():
            self._loop.call_soon_threadsafe(_noop)
        # Wait loop thread to exit
        self._thread.join(timeout=2.0)

    def __enter__(self) -> "AppRunner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    # -------------------------------
    # Internal: loop thread
    # -------------------------------
    def _call(self, coro, *, timeout: Optional[float] = 2.0):
        if self._error is not None:
            coro.close()
            raise self._error
        if self._stopping:
            coro.close()
            raise RuntimeError("AppRunner is shut down")
        fut = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return fut.result(timeout=timeout)

    async def _snapshot(self, render_fn):
        return render_fn(self._root_ctx)

    async def _click(self, target: Optional[str], source: str) -> str:
        if target is None:
            target = next((path for path, _ctx in iter_targets(self._root_ctx)), None)
            if target is None:
                raise KeyError("nothing to click")
        ev: Event = {"type": "click", "target": target, "source": source, "ts": time.time()}
        self._bus.emit(ev)
        await self._commit()
        return render_to_text(self._root_ctx)

    def _on_event(self, ev: Event) -> None:
        dispatch(self._root_ctx, ev.get("target", ""), ev.get("type", "click"))

    async def _commit(self) -> None:
        await run_renders()
        html_now = render_to_html(self._root_ctx)
        if html_now != self._last_html:
            self._last_html = html_now
            if self._on_html is not None:
                self._on_html(html_now)

    def _thread_main(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._loop_main())
        finally:
            self._loop.close()

    async def _loop_main(self) -> None:
        from pyprovider.core.debug import clear_traces, enable_tracing

        if self._trace:
            clear_traces()
            enable_tracing()

        try:
            self._root_ctx = await mount(self._app_component_fn, **self._props)
            self._last_html = render_to_html(self._root_ctx)
        except BaseException as exc:
            self._error = exc
            return
        finally:
            self._ready.set()

        unsubscribe = self._bus.subscribe(self._on_event)

        interval = 1.0 / max(1, self._fps)
        try:
            while not self._stopping:
                if has_pending_renders():
                    try:
                        await self._commit()
                    except Exception as exc:
                        # surfaced on the next public call
                        self._error = exc
                        break
                await asyncio.sleep(interval)
        finally:
            unsubscribe()
            # Graceful unmount
            if self._root_ctx is not None:
                self._root_ctx.unmount()


def run_app(app_component_fn, *, fps: int = 20, **props) -> AppRunner:
    """Create and start an AppRunner for the given root component."""
    return AppRunner(app_component_fn, props=props, fps=fps)
