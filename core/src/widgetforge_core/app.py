from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from widgetforge_core import i18n
from widgetforge_core.config import ToolkitConfig, load_toolkit_config
from widgetforge_core.exceptions import WidgetForgeError
from widgetforge_core.logs import configure_logging
from widgetforge_core.ui.router import get_page_names
from widgetforge_core.ui.router import router as ui_router
from widgetforge_core.widgets.widget import set_base_stylesheet

logger = logging.getLogger(__name__)


def create_app(config: ToolkitConfig | None = None) -> FastAPI:
    toolkit_config = config or load_toolkit_config()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        configure_logging(toolkit_config.logging)
        i18n.init(toolkit_config.i18n)
        set_base_stylesheet(toolkit_config.resources.base_stylesheet)
        logger.info("WidgetForge starting up")
        logger.info("Registered pages: %s", ", ".join(get_page_names()) or "(none)")
        yield

    app = FastAPI(title="WidgetForge", version="0.1.0", lifespan=_lifespan)
    app.state.toolkit_config = toolkit_config

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(WidgetForgeError)
    async def _widget_error_handler(request: Request, exc: WidgetForgeError) -> JSONResponse:
        # Tree assembly errors are programming errors; keep details in the log.
        logger.exception("Widget error while handling %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"ok": False, "error": {"code": "widget_error", "message": "Internal server error"}},
        )

    app.include_router(ui_router)

    @app.get("/")
    async def root() -> RedirectResponse:
        names = get_page_names()
        target = f"/ui/{names[0]}" if names else "/healthz"
        return RedirectResponse(url=target, status_code=302)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
