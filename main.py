"""
MealHub FastAPI Application
Main entry point: configuration, middleware, exception handlers and routers
"""

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import health, meals
from adapters import mongo_adapter
from app.config import settings
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    app_exception_handler,
    general_exception_handler,
)
from app.exceptions import MealHubError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("mealhub.main")


def _connect_mongo():
    db = mongo_adapter.connect(
        settings.mongo_uri,
        settings.mongo_db_name,
        timeout_ms=settings.mongo_server_selection_timeout_ms,
    )
    mongo_adapter.ensure_indexes(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Connect to MongoDB on startup and close the client on shutdown.
    If every connection attempt fails the error propagates and the server exits.
    """
    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            await anyio.to_thread.run_sync(_connect_mongo)
            _logger.info("MongoDB connection established")
            break
        except Exception as exc:
            _logger.warning(
                "MongoDB connection attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error("MongoDB connection failed after %d attempts", attempt)
                raise

    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        mongo_adapter.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=(
            f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
        ),
        docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
        redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
    )

    # Last added runs outermost: CORS wraps the logging middleware and its 500s
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(MealHubError, app_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(meals.router, prefix=settings.api_prefix)
    app.include_router(health.router, prefix=settings.api_prefix)

    @app.get("/", status_code=status.HTTP_200_OK, tags=["Health"])
    def root():
        return {"message": "Server is running and DB connected!"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
