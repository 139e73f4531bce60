import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the CafeDocs API"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class CafeDocsClient:
    """Async HTTP client for the CafeDocs API"""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0
    ):
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "CafeDocsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers.setdefault("Authorization", f"Bearer {self.token}")

        response = await self._http.request(method, path, headers=headers, **kwargs)

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None

            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            else:
                message = response.text or response.reason_phrase
            raise ApiError(response.status_code, message)

        return response

    async def _json(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        response = await self._request(method, path, **kwargs)
        return response.json()

    # Authentication

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._json("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = data.get("token")
        return data

    async def logout(self) -> Dict[str, Any]:
        data = await self._json("POST", "/api/auth/logout")
        self.token = None
        self._http.cookies.clear()
        return data

    async def register(self, email: str, password: str, name: str) -> Dict[str, Any]:
        data = await self._json(
            "POST", "/api/auth/register", json={"email": email, "password": password, "name": name}
        )
        self.token = data.get("token")
        return data

    async def verify(self) -> Dict[str, Any]:
        return await self._json("GET", "/api/auth/verify")

    async def reset_password(self, email: str, current_password: str, new_password: str) -> Dict[str, Any]:
        return await self._json(
            "POST",
            "/api/auth/reset-password",
            json={"email": email, "currentPassword": current_password, "newPassword": new_password}
        )

    # Employees

    async def list_employees(self) -> List[Dict[str, Any]]:
        data = await self._json("GET", "/api/employees")
        return data.get("employees", [])

    async def add_employee(self, email: str, name: str, password: str) -> Dict[str, Any]:
        data = await self._json("POST", "/api/employees", json={"email": email, "name": name, "password": password})
        return data["employee"]

    async def update_employee(
        self,
        employee_id: str,
        name: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"id": employee_id}
        if name is not None:
            body["name"] = name
        if is_active is not None:
            body["isActive"] = is_active
        data = await self._json("PUT", "/api/employees", json=body)
        return data["employee"]

    async def delete_employee(self, employee_id: str) -> None:
        await self._json("DELETE", f"/api/employees/{employee_id}")

    async def block_employee(self, employee_id: str) -> Dict[str, Any]:
        data = await self._json("PATCH", f"/api/employees/{employee_id}/block")
        return data["employee"]

    async def unblock_employee(self, employee_id: str) -> Dict[str, Any]:
        data = await self._json("PATCH", f"/api/employees/{employee_id}/unblock")
        return data["employee"]

    # Documents

    async def upload_document(self, document: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._json("POST", "/api/documents/upload", json=document)
        return data["document"]

    async def batch_upload(
        self,
        documents: List[Dict[str, Any]],
        user_id: str,
        user_name: str,
        category: str = "general"
    ) -> Dict[str, Any]:
        return await self._json(
            "POST",
            "/api/documents/batch-upload",
            json={"documents": documents, "userId": user_id, "userName": user_name, "category": category}
        )

    async def list_documents(self, role: Optional[str] = None, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {key: value for key, value in (("role", role), ("userId", user_id)) if value}
        data = await self._json("GET", "/api/documents", params=params)
        return data.get("documents", [])

    async def get_document(self, document_id: str) -> Dict[str, Any]:
        data = await self._json("GET", f"/api/documents/{document_id}")
        return data["document"]

    async def search_documents(self, **filters: Optional[str]) -> List[Dict[str, Any]]:
        """Server-side search; accepts query, category, startDate, endDate, role, userId"""
        params = {key: value for key, value in filters.items() if value}
        data = await self._json("GET", "/api/documents/search/query", params=params)
        return data.get("documents", [])

    async def delete_document(self, document_id: str, role: Optional[str]) -> None:
        await self._json("DELETE", f"/api/documents/{document_id}", params={"role": role or ""})

    async def view_document(self, document_id: str) -> httpx.Response:
        return await self._request("GET", f"/api/documents/view/{document_id}")

    async def download_document(self, document_id: str) -> bytes:
        response = await self._request("GET", f"/api/documents/download/{document_id}")
        return response.content

    # Activity and dashboard

    async def log_activity(
        self,
        user_id: str,
        user_name: str,
        action: str,
        document_name: Optional[str] = None,
        document_id: Optional[str] = None,
        details: Optional[str] = None
    ) -> None:
        body = {
            "userId": user_id,
            "userName": user_name,
            "action": action,
            "documentName": document_name,
            "documentId": document_id,
            "details": details,
        }
        await self._json("POST", "/api/logs/activity", json={k: v for k, v in body.items() if v is not None})

    async def get_activity_logs(self, limit: int = 50) -> List[Dict[str, Any]]:
        data = await self._json("GET", "/api/logs/activity", params={"limit": limit})
        return data.get("logs", [])

    async def get_dashboard_stats(self) -> Dict[str, Any]:
        data = await self._json("GET", "/api/dashboard/stats")
        return data["stats"]
