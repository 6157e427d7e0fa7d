import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.config import Settings
from todo_api.errors import TodoError
from todo_api.responses import render, render_error
from todo_api.router import ResourceRouter

logger = logging.getLogger("request_logger")

ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def configure_logging(settings: Settings, force: bool = False):
    """Install root handlers. With force, replace any already installed."""
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=force,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Todo API")
    router = ResourceRouter(settings.todo_file, lock_timeout=settings.lock_timeout)
    app.state.settings = settings
    app.state.router = router

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client_ip = request.client.host if request.client else "unknown"
        logger.info(f"[REQUEST] {client_ip} {request.method} {request.url.path}")
        return await call_next(request)

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError):
        logger.error(f"{request.url}: {request.method}: {exc.status_code}: {exc}")
        return render_error(exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.error(f"{request.url}: {request.method}: {exc.status_code}: {exc.detail}")
        return render_error(exc.status_code)

    async def root(request: Request):
        return PlainTextResponse("Our API is live")

    # Plain starlette route: no method list, so every verb is answered.
    app.add_route("/", root)

    async def route_todo(request: Request, remainder: str):
        body = await request.body()
        # The router blocks on the file lock and file I/O, keep it off the event loop.
        reply = await asyncio.to_thread(
            router.handle, request.method, remainder, request.query_params, body
        )
        return render(reply)

    @app.api_route("/todo", methods=ROUTED_METHODS)
    async def todo_collection(request: Request):
        return await route_todo(request, "")

    @app.api_route("/todo/{remainder:path}", methods=ROUTED_METHODS)
    async def todo_item(request: Request, remainder: str):
        return await route_todo(request, remainder)

    return app


_settings = Settings.from_env()
configure_logging(_settings)
app = create_app(_settings)
