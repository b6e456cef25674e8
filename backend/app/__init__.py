from fastapi import FastAPI

from .context import create_app
from .lifecycle import app_lifespan
from .routes import (
    analytics_router,
    auth_router,
    dashboard_router,
    system_router,
)


def build_app() -> FastAPI:
    app = create_app(lifespan=app_lifespan)
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(analytics_router)
    app.include_router(system_router)
    return app


app = build_app()

__all__ = ["app", "build_app"]
