from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from .state import ServerState
from .templates import render_page
from .ws_endpoint import ChannelName, register_ws_routes


def create_fastapi_app(runner) -> FastAPI:
    """Create the FastAPI app serving ``runner`` (an ``AppRunner``).

    HTML updates committed by the runner are pushed to every ``/ws`` client;
    clicks arrive either over the socket (``{"t": "click", "id": ...}``) or
    as ``POST /events/{target}/click``. The runner is shut down with the app.
    """
    state = ServerState()

    async def _dispatch(target: str) -> str:
        # AppRunner methods block on the runner thread
        try:
            return await run_in_threadpool(runner.dispatch, target)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc.args[0] if exc.args else exc))

    # ---------- lifespan (startup/shutdown) ----------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        server_loop = asyncio.get_running_loop()

        async def publish_html(html: str) -> None:
            state.latest_html = html
            await state.broadcast.publish(ChannelName.HTML, {"type": "html", "html": html})

        runner.attach_web_bridge(on_html=publish_html, target_loop=server_loop)
        state.latest_html = await run_in_threadpool(runner.html)

        # Store state in app for access by routes
        app.state.server_state = state
        app.state.app_runner = runner
        try:
            yield
        finally:
            runner.attach_web_bridge(on_html=None)
            await run_in_threadpool(runner.shutdown)

    app = FastAPI(lifespan=lifespan)

    async def _initial() -> Optional[dict]:
        html = await run_in_threadpool(runner.html)
        return {"type": "html", "html": html}

    async def _handle_message(msg: dict) -> Optional[dict]:
        if msg.get("t") == "click":
            try:
                await _dispatch(str(msg.get("id", "")))
            except HTTPException as exc:
                return {"type": "error", "error": exc.detail}
            return None
        return {"type": "error", "error": f"unknown message {msg.get('t')!r}"}

    register_ws_routes(
        app,
        broadcast=state.broadcast,
        channels_to_forward=[ChannelName.HTML],
        handle_message=_handle_message,
        initial_message=_initial,
    )

    @app.get("/favicon.ico")
    async def favicon():
        return Response(status_code=204, media_type="image/x-icon")

    @app.get("/html")
    async def html_fragment():
        return HTMLResponse(await run_in_threadpool(runner.html))

    @app.get("/targets")
    async def targets():
        return {"targets": await run_in_threadpool(runner.targets)}

    @app.post("/events/{target}/click")
    async def click(target: str):
        return {"html": await _dispatch(target)}

    @app.get("/")
    async def index():
        return HTMLResponse(render_page(await run_in_threadpool(runner.html)))

    return app
