from typing import Optional

from .config import Settings


def run_web(
    app_component_fn, *, settings: Optional[Settings] = None, reload=False, **uvicorn_kwargs
):
    import uvicorn
    from pyprovider.boot.bootstrap import bootstrap
    from pyprovider.web.server import create_fastapi_app

    settings = settings or Settings.from_env()
    app = bootstrap(app_component_fn, settings=settings)
    fastapi_app = create_fastapi_app(app)
    uvicorn.run(
        fastapi_app, host=settings.host, port=settings.port, reload=reload, **uvicorn_kwargs
    )
