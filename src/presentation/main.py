"""FastAPI Application Entry Point"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.infrastructure.config import get_settings
from src.presentation.api.routes import chime_routes, health_routes
from src.presentation.middleware.error_handler import error_handlers
from src.presentation.middleware.logging import LoggingMiddleware

logger = structlog.get_logger()


def configure_logging(log_level: str = "INFO") -> None:
    """構造化ログを設定"""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """アプリケーションのライフサイクル管理"""
    settings = get_settings()
    logger.info(
        "application_starting",
        service=settings.service_name,
        environment=settings.environment,
        region=settings.aws_region or None,
    )
    missing = settings.missing_settings()
    if missing:
        logger.warning("configuration_incomplete", missing=missing)
    yield
    logger.info("application_shutting_down")


def create_app() -> FastAPI:
    """FastAPI アプリケーションを作成"""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Chime Integration API",
        description="Meeting and messaging sessions powered by the Amazon Chime SDK",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Error Handlers
    for exception_class, handler in error_handlers.items():
        app.add_exception_handler(exception_class, handler)

    # Routes
    app.include_router(health_routes.router, tags=["Health"])
    app.include_router(
        chime_routes.router, prefix="/chime-integration", tags=["Chime Integration"]
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
