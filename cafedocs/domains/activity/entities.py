import uuid
from datetime import datetime
from typing import Optional

from cafedocs.core.security import utcnow

ACTION_UPLOAD = "upload"


class ActivityLog:
    """Single append-only audit entry"""

    def __init__(
        self,
        uuid: uuid.UUID,
        user_id: uuid.UUID,
        user_name: str,
        action: str,
        timestamp: Optional[datetime] = None,
        document_id: Optional[uuid.UUID] = None,
        document_name: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.uuid = uuid
        self.user_id = user_id
        self.user_name = user_name
        self.action = action
        self.timestamp = timestamp or utcnow()
        self.document_id = document_id
        self.document_name = document_name
        self.details = details

    @classmethod
    def create_entry(
        cls,
        user_id: uuid.UUID,
        user_name: str,
        action: str,
        document_id: Optional[uuid.UUID] = None,
        document_name: Optional[str] = None,
        details: Optional[str] = None
    ) -> "ActivityLog":
        return cls(
            uuid=uuid.uuid4(),
            user_id=user_id,
            user_name=user_name,
            action=action,
            document_id=document_id,
            document_name=document_name,
            details=details
        )

    def __repr__(self) -> str:
        return f"ActivityLog(user={self.user_name}, action={self.action}, timestamp={self.timestamp})"


class DashboardStats:
    """Aggregate upload statistics, recomputed on every request"""

    def __init__(
        self,
        total_uploads: int,
        today_uploads: int,
        month_uploads: int,
        total_size: int,
        active_employees: int
    ):
        self.total_uploads = total_uploads
        self.today_uploads = today_uploads
        self.month_uploads = month_uploads
        self.total_size = total_size
        self.active_employees = active_employees
