# backend/spotbnb/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import is_running_tests, settings
from .core.constants import API_DESCRIPTION, API_PREFIX, API_TITLE, API_VERSION, BRAND_NAME
from .core.request_context import install_log_filter
from .database import init_db
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .middleware.request_context_asgi import RequestContextMiddlewareASGI
from .routes import health, prometheus
from .routes.v1 import bookings, images, reviews, session, spots, users
from .schemas.base_responses import ErrorResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s user=%(user_id)s] %(message)s",
)
install_log_filter()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")

    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    if settings.auto_create_tables:
        init_db()

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")


def create_app() -> FastAPI:
    """Build the ASGI application: middleware, error envelope and routers."""
    application = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    register_error_handlers(application)

    application.add_middleware(PrometheusMiddleware)
    application.add_middleware(RequestContextMiddlewareASGI)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    logger.debug("CORS allow_origins=%s", settings.cors_origins)

    api = APIRouter(
        prefix=API_PREFIX,
        responses={
            400: {"model": ErrorResponse, "description": "Validation failed"},
            401: {"model": ErrorResponse, "description": "Authentication required"},
            403: {"model": ErrorResponse, "description": "Forbidden"},
            404: {"model": ErrorResponse, "description": "Resource couldn't be found"},
        },
    )
    api.include_router(users.router)
    api.include_router(session.router)
    api.include_router(spots.router)
    api.include_router(reviews.router)
    api.include_router(bookings.router)
    api.include_router(images.router)
    application.include_router(api)

    application.include_router(health.router)
    application.include_router(prometheus.router)
    return application


app = create_app()
