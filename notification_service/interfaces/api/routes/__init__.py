from fastapi import FastAPI

from .delivery_notifications import router as delivery_notifications_router
from .health import router as health_router
from .notifications import router as notifications_router
from .order_lifecycle import router as order_lifecycle_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(delivery_notifications_router)
    app.include_router(notifications_router)
    app.include_router(order_lifecycle_router)
