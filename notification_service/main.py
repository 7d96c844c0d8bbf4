import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notification_service.config import get_settings
from notification_service.infrastructure.database import engine, initialize_database
from notification_service.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
)
from notification_service.interfaces.api.errors import register_exception_handlers
from notification_service.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup and release pooled connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="Order Status Notifications", lifespan=lifespan)
    # One fanout per application instance, handed to handlers via ``app.state``.
    app.state.notification_publisher = NotificationPublisher(NotificationConnectionManager())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app
