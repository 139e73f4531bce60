from cafedocs.client.api import ApiError, CafeDocsClient
from cafedocs.client.dashboards import (
    AdminDashboard, EmployeeDashboard, PendingFile, UploadResult,
    login, logout, open_dashboard, reset_password, restore_session
)
from cafedocs.client.filters import DocumentFilters, filter_documents, paginate, page_count, preview
from cafedocs.client.session import SessionStore

__all__ = [
    "ApiError", "CafeDocsClient",
    "AdminDashboard", "EmployeeDashboard", "PendingFile", "UploadResult",
    "login", "logout", "open_dashboard", "reset_password", "restore_session",
    "DocumentFilters", "filter_documents", "paginate", "page_count", "preview",
    "SessionStore"
]
