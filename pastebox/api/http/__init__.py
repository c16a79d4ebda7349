from pastebox.api.http.health import router as health_router
from pastebox.api.http.site import router as site_router
from pastebox.api.http.auth import router as auth_router
from pastebox.api.http.documents import router as documents_router
from pastebox.api.http.favorites import router as favorites_router

__all__ = [
    "health_router",
    "site_router",
    "auth_router",
    "documents_router",
    "favorites_router"
]
