from .analytics import router as analytics_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .system import router as system_router

__all__ = [
    "analytics_router",
    "auth_router",
    "dashboard_router",
    "system_router",
]
