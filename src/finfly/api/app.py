"""FastAPI application factory.

API layer:
- Validates inputs, reads/writes DB through the domain modules
- Renders every failure as {"error": message}
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finfly import __version__, config
from finfly.db.session import init_db

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging once from LOG_LEVEL."""
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    """Flatten the first validation error into a readable message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info(
            "request_validation_failed method=%s path=%s message=%s",
            request.method,
            request.url.path,
            message,
        )
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
        """Return a JSON 500 response for unhandled exceptions."""
        logger.exception(
            "unhandled_exception method=%s path=%s exception_type=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc_info=exc,
        )
        content = {"error": "Internal server error"}
        if config.debug_enabled():
            content["detail"] = f"{type(exc).__name__}: {exc}"
        return JSONResponse(status_code=500, content=content)


def create_app(database_url: str | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        database_url: Optional SQLAlchemy URL; defaults to configuration.

    Returns:
        Configured FastAPI application.
    """
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(database_url)
        logger.info("database_ready app_env=%s", config.app_env())
        yield

    app = FastAPI(
        title="Finfly API",
        description="Personal finance tracker",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database_url = database_url

    allow_origins = config.cors_allow_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Disposition"],
    )

    @app.middleware("http")
    async def log_http_requests(request: Request, call_next):
        """Log each request with its response status."""
        response = await call_next(request)
        logger.info(
            "http_request method=%s path=%s status_code=%s",
            request.method,
            request.url.path,
            response.status_code,
        )
        return response

    _install_error_handlers(app)

    # Include routes
    from finfly.api.routes import auth, export, layout, summary, transactions

    app.include_router(auth.router, prefix="/auth", tags=["Auth"])
    # Export must be registered before /transactions/{transaction_id}
    app.include_router(export.router, tags=["Export"])
    app.include_router(transactions.router, prefix="/transactions", tags=["Transactions"])
    app.include_router(summary.router, prefix="/summary", tags=["Summary"])
    app.include_router(layout.router, prefix="/layout", tags=["Layout"])

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    return app


# Default app instance
app = create_app()
