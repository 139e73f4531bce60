import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cafedocs.api.http import (
    health_router, auth_router, employees_router, documents_router, logs_router
)
from cafedocs.core.config import settings
from cafedocs.core.db import SessionLocal, init_db
from cafedocs.core.errors import AppError, InternalError
from cafedocs.core.log import configure_logging
from cafedocs.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)

# Fallback messages for unexpected failures, by endpoint
FAILURE_MESSAGES = {
    "login": "Login failed",
    "register": "Registration failed",
    "reset_password": "Failed to reset password",
    "upload_document": "Failed to upload document",
    "batch_upload_documents": "Failed to batch upload documents",
    "get_documents": "Failed to fetch documents",
    "search_documents": "Failed to search documents",
    "view_document": "Failed to view document",
    "download_document": "Failed to download document",
    "get_document": "Failed to fetch document",
    "delete_document": "Failed to delete document",
    "get_employees": "Failed to fetch employees",
    "add_employee": "Failed to add employee",
    "update_employee": "Failed to update employee",
    "delete_employee": "Failed to delete employee",
    "block_employee": "Failed to block employee",
    "unblock_employee": "Failed to unblock employee",
    "log_activity": "Failed to log activity",
    "get_activity_logs": "Failed to fetch activity logs",
    "get_dashboard_stats": "Failed to fetch dashboard stats",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    await init_db()

    async with SessionLocal() as session:
        await IdentityService(session).ensure_admin()

    yield


app = FastAPI(
    title="CafeDocs",
    description="Document management for cafe staff",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = sorted({
        str(error["loc"][-1]) for error in exc.errors() if error.get("loc")
    })
    message = "Invalid request"
    if fields:
        message = f"Invalid or missing fields: {', '.join(fields)}"
    return _error_response(400, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    endpoint = getattr(request.scope.get("endpoint"), "__name__", "")
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = InternalError(FAILURE_MESSAGES.get(endpoint))
    return _error_response(error.status_code, error.message)


app.include_router(health_router)
app.include_router(auth_router)
app.include_router(employees_router)
app.include_router(documents_router)
app.include_router(logs_router)


def run() -> None:
    """Console entry point"""
    import uvicorn

    uvicorn.run("cafedocs.main:app", host=settings.host, port=settings.port)
