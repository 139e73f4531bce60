import asyncio
import base64
import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from cafedocs.client.api import ApiError, CafeDocsClient
from cafedocs.client.filters import DocumentFilters, filter_documents, paginate, preview
from cafedocs.client.session import SessionStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class PendingFile:
    """File queued for upload with its title and description"""

    def __init__(
        self,
        filename: str,
        content: bytes,
        file_type: Optional[str] = None,
        title: str = "",
        description: str = ""
    ):
        self.id = str(uuid.uuid4())
        self.filename = filename
        self.content = content
        self.file_type = file_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self.title = title
        self.description = description

    @property
    def size(self) -> int:
        return len(self.content)

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.file_type};base64,{encoded}"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "fileType": self.file_type,
            "size": self.size,
            "title": self.title,
            "description": self.description,
            "fileData": self.to_data_url(),
        }

    @classmethod
    def from_path(cls, path, title: str = "", description: str = "") -> "PendingFile":
        path = Path(path)
        return cls(filename=path.name, content=path.read_bytes(), title=title, description=description)


class UploadResult:
    def __init__(self, documents: List[Dict[str, Any]], warnings: List[str]):
        self.documents = documents
        self.warnings = warnings


class DocumentDashboard:
    """Document list, filters and upload queue shared by both dashboards"""

    def __init__(self, client: CafeDocsClient, user: Dict[str, Any]):
        self.client = client
        self.user = user
        self.documents: List[Dict[str, Any]] = []
        self.pending_files: List[PendingFile] = []
        self.filters = DocumentFilters()
        self.show_more = False
        self.submitting = False

    # Filtering and pagination

    def set_filters(self, **values) -> None:
        self.filters = DocumentFilters(**{**self.filters.model_dump(), **values})

    def clear_filters(self) -> None:
        self.filters = DocumentFilters()

    def filtered_documents(self) -> List[Dict[str, Any]]:
        return filter_documents(self.documents, self.filters)

    def visible_documents(self) -> List[Dict[str, Any]]:
        """What the document panel shows: a short preview unless expanded"""
        return preview(self.filtered_documents(), self.show_more)

    def page(self, page: int, per_page: int = 10) -> List[Dict[str, Any]]:
        return paginate(self.filtered_documents(), page, per_page)

    # Upload queue

    def add_pending_file(self, pending: PendingFile) -> PendingFile:
        self.pending_files.append(pending)
        return pending

    def update_pending_file(self, pending_id: str, **fields) -> None:
        for pending in self.pending_files:
            if pending.id == pending_id:
                for name, value in fields.items():
                    if name not in ("title", "description"):
                        raise AttributeError(f"Cannot update {name}")
                    setattr(pending, name, value)

    def remove_pending_file(self, pending_id: str) -> None:
        self.pending_files = [pf for pf in self.pending_files if pf.id != pending_id]

    async def submit_all(self, category: str = "general") -> UploadResult:
        """Upload every queued file in one batch"""
        if not self.pending_files:
            raise ValueError("Please select at least one file")

        if any(not pf.title.strip() for pf in self.pending_files):
            raise ValueError("Please add a title for all selected documents")

        self.submitting = True
        try:
            data = await self.client.batch_upload(
                [pf.to_payload() for pf in self.pending_files],
                user_id=self.user["id"],
                user_name=self.user["name"],
                category=category
            )
        finally:
            self.submitting = False

        uploaded = data.get("documents", [])
        self.documents = uploaded + self.documents
        self.pending_files = []

        await self._log_upload(len(uploaded))

        warnings = data.get("errors") or []
        if warnings:
            logger.warning(f"Some files failed: {', '.join(warnings)}")

        return UploadResult(uploaded, warnings)

    async def _log_upload(self, count: int) -> None:
        # A failed log entry never fails the upload
        try:
            await self.client.log_activity(
                user_id=self.user["id"],
                user_name=self.user["name"],
                action="upload",
                document_name=f"{count} documents"
            )
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"Failed to log activity: {e}")

    # Document actions

    async def delete_document(self, document_id: str) -> None:
        await self.client.delete_document(document_id, role=self.user.get("role"))
        self.documents = [doc for doc in self.documents if doc["id"] != document_id]

    async def download_document(self, document: Dict[str, Any], directory) -> Path:
        """Save a document's bytes under its original filename"""
        content = await self.client.download_document(document["id"])
        target = Path(directory) / Path(document["filename"]).name
        target.write_bytes(content)
        return target


class AdminDashboard(DocumentDashboard):
    """Employees, statistics and every uploaded document"""

    def __init__(self, client: CafeDocsClient, user: Dict[str, Any]):
        if user.get("role") != "admin":
            raise PermissionError("Admin dashboard requires the admin role")
        super().__init__(client, user)
        self.employees: List[Dict[str, Any]] = []
        self.stats: Optional[Dict[str, Any]] = None

    async def load(self) -> None:
        employees, stats, documents = await asyncio.gather(
            self.client.list_employees(),
            self.client.get_dashboard_stats(),
            self.client.list_documents(role="admin"),
        )
        self.employees = employees
        self.stats = stats
        self.documents = documents

    async def refresh_stats(self) -> Dict[str, Any]:
        self.stats = await self.client.get_dashboard_stats()
        return self.stats

    @property
    def active_employee_count(self) -> int:
        return sum(1 for employee in self.employees if employee["isActive"])

    async def add_employee(self, email: str, name: str, password: str) -> Dict[str, Any]:
        employee = await self.client.add_employee(email, name, password)
        self.employees = [employee] + self.employees
        return employee

    async def set_employee_active(self, employee_id: str, is_active: bool) -> Dict[str, Any]:
        if is_active:
            employee = await self.client.unblock_employee(employee_id)
        else:
            employee = await self.client.block_employee(employee_id)
        self._replace_employee(employee)
        return employee

    async def rename_employee(self, employee_id: str, name: str) -> Dict[str, Any]:
        employee = await self.client.update_employee(employee_id, name=name)
        self._replace_employee(employee)
        return employee

    async def delete_employee(self, employee_id: str) -> None:
        await self.client.delete_employee(employee_id)
        self.employees = [employee for employee in self.employees if employee["id"] != employee_id]

    def _replace_employee(self, updated: Dict[str, Any]) -> None:
        self.employees = [updated if e["id"] == updated["id"] else e for e in self.employees]


class EmployeeDashboard(DocumentDashboard):
    """An employee's own uploads"""

    async def load(self) -> None:
        self.documents = await self.client.list_documents(role=self.user.get("role"), user_id=self.user["id"])


async def login(client: CafeDocsClient, store: SessionStore, email: str, password: str) -> Dict[str, Any]:
    """Sign in and persist the session locally"""
    data = await client.login(email, password)
    store.save(data["user"], data["token"])
    return data["user"]


async def restore_session(client: CafeDocsClient, store: SessionStore) -> Optional[Dict[str, Any]]:
    """Reuse a stored session if the server still accepts its token"""
    session = store.load()
    if not session:
        return None

    client.token = session["token"]
    try:
        data = await client.verify()
    except ApiError:
        client.token = None
        store.clear()
        return None
    return data["user"]


async def logout(client: CafeDocsClient, store: SessionStore) -> None:
    try:
        await client.logout()
    finally:
        store.clear()


async def reset_password(client: CafeDocsClient, email: str, current_password: str, new_password: str) -> str:
    """Validate locally, then change the password on the server"""
    if not current_password or not new_password:
        raise ValueError("All fields are required")

    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")

    data = await client.reset_password(email, current_password, new_password)
    return data.get("message", "Password reset successfully")


def open_dashboard(client: CafeDocsClient, user: Dict[str, Any]) -> DocumentDashboard:
    """Dashboard matching the user's role"""
    if user.get("role") == "admin":
        return AdminDashboard(client, user)
    return EmployeeDashboard(client, user)
