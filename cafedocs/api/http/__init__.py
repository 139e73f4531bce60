from cafedocs.api.http.health import router as health_router
from cafedocs.api.http.auth import router as auth_router
from cafedocs.api.http.employees import router as employees_router
from cafedocs.api.http.documents import router as documents_router
from cafedocs.api.http.logs import router as logs_router

__all__ = [
    "health_router",
    "auth_router",
    "employees_router",
    "documents_router",
    "logs_router"
]
