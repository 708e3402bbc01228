import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from event_finder.core import config
from event_finder.core.logging_config import configure_logging
from event_finder.routes import events, health
from event_finder.services.events import EventStore
from event_finder.services.sample_events import SAMPLE_EVENTS

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    content = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = tuple(err.get("loc", ()))
    if loc == ("body",) and err.get("type") == "missing":
        return "Request body is required"
    # loc is ("body", field) with the union member appended for union fields
    field = str(loc[1]) if len(loc) > 1 else ""
    if field:
        return f"Invalid value for {field}: {err.get('msg')}"
    return str(err.get("msg"))


def _internal_error(exc: Exception) -> JSONResponse:
    detail = str(exc) if config.is_development() else "Something went wrong"
    return _error(500, "Internal server error", detail)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return _error(404, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))


def create_app(store: Optional[EventStore] = None, seed: Optional[bool] = None) -> FastAPI:
    store = store or EventStore()
    if seed is None:
        seed = config.seed_sample_events()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if seed and store.count() == 0:
            store.seed(SAMPLE_EVENTS)
        logger.info("Event Finder API running on port %d", config.PORT)
        logger.info("Currently managing %d events", store.count())
        logger.info("API Health: http://localhost:%d/api/health", config.PORT)
        yield

    app = FastAPI(title="Event Finder API", lifespan=lifespan)
    app.state.store = store

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            # Unhandled route errors stop here and never reach ServerErrorMiddleware
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = _internal_error(e)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_exception_handlers(app)

    # Include the routers
    app.include_router(events.router)
    app.include_router(health.router)
    return app


configure_logging()
app = create_app()
