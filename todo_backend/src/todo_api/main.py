from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from . import __version__
from .exceptions import FieldValidationError, StoreError
from .health import router as health_router
from .logging_config import setup_logging
from .middleware import RequestLoggerMiddleware
from .paths import ensure_writable, resolve_data_path
from .repositories import FileTodoRepository
from .routers import todos as todos_router
from .services import TodoService
from .settings import Settings, get_settings
from .store import DataStore

log = structlog.get_logger()

openapi_tags = [
    {"name": "health", "description": "Filesystem health of the data store."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items with filtering, sorting, and pagination.",
    },
]


def _validation_body(errors: Dict[str, List[str]]) -> dict:
    return {"error": "ValidationError", "message": "Validation failed.", "errors": errors}


def _field_name(loc: tuple) -> str:
    # ("body", "title") -> "title"; ("query", "pageSize") -> "pageSize"
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts) or "request"


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The data store is constructed in the lifespan handler, so an unreadable or
    corrupt data file aborts startup instead of serving requests. One store is
    shared by every request through app.state.
    """
    cfg = settings or get_settings()
    setup_logging(cfg.log_level, cfg.log_format, cfg.log_file)
    data_path = resolve_data_path(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("Starting Todo API", data_path=data_path)
        ensure_writable(data_path)
        store = DataStore(data_path)
        app.state.store = store
        app.state.todo_service = TodoService(FileTodoRepository(store))
        log.info("Todo API started")
        yield
        log.info("Todo API stopped")

    app = FastAPI(
        title="Todo API",
        description="A RESTful API for managing todo items with filtering, sorting, and pagination support.",
        version=__version__,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.data_path = data_path

    allow_all = cfg.cors_allow_origins == ["*"] or len(cfg.cors_allow_origins) == 0
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else cfg.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Map FastAPI/pydantic request errors to the field-keyed 400 format.

        Response format:
            {
                "error": "ValidationError",
                "message": "Validation failed.",
                "errors": {"title": ["Field required"], ...}
            }
        """
        errors: Dict[str, List[str]] = {}
        for err in exc.errors():
            errors.setdefault(_field_name(tuple(err.get("loc", ()))), []).append(err.get("msg", "Invalid value"))
        log.warning("Request validation failed", errors=errors)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_validation_body(errors))

    @app.exception_handler(FieldValidationError)
    async def field_validation_handler(request: Request, exc: FieldValidationError) -> JSONResponse:
        log.warning("Validation failed", errors=exc.errors)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_validation_body(exc.errors))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        log.error("Data store failure", error=str(exc), path=exc.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "ServerError", "message": "Unexpected error."},
        )

    @app.get("/", include_in_schema=False)
    def root() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    app.include_router(health_router)
    app.include_router(todos_router.router)
    return app


# PUBLIC_INTERFACE
def run() -> None:
    """Entry point for the `todo-api` console script."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
