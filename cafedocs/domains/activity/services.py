import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from cafedocs.core.errors import ValidationError
from cafedocs.core.ids import parse_user_id
from cafedocs.db.repositories.activity_repository import ActivityLogRepository
from cafedocs.db.repositories.document_repository import DocumentRepository
from cafedocs.db.repositories.user_repository import EmployeeRepository
from cafedocs.domains.activity.entities import ActivityLog, DashboardStats, ACTION_UPLOAD
from cafedocs.domains.activity.schemas import ActivityLogCreate

logger = logging.getLogger(__name__)


def local_period_starts(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Local midnight and first of the local month, as naive UTC"""
    local_now = (now or datetime.now(timezone.utc)).astimezone().replace(tzinfo=None)
    # Each boundary gets the UTC offset in force at that local time
    today = local_now.replace(hour=0, minute=0, second=0, microsecond=0).astimezone()
    month_start = today.replace(day=1, tzinfo=None).astimezone()
    return (
        today.astimezone(timezone.utc).replace(tzinfo=None),
        month_start.astimezone(timezone.utc).replace(tzinfo=None),
    )


class ActivityService:
    """Activity log and dashboard statistics"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.activity_repository = ActivityLogRepository(session)
        self.document_repository = DocumentRepository(session)
        self.employee_repository = EmployeeRepository(session)

    async def log_activity(self, entry_data: ActivityLogCreate) -> ActivityLog:
        """Append an activity entry"""
        if not entry_data.user_id or not entry_data.user_name or not entry_data.action:
            raise ValidationError("Missing required fields")

        document_id = None
        if entry_data.document_id:
            try:
                document_id = uuid.UUID(entry_data.document_id)
            except ValueError:
                raise ValidationError("Invalid documentId")

        entry = ActivityLog.create_entry(
            user_id=parse_user_id(entry_data.user_id),
            user_name=entry_data.user_name,
            action=entry_data.action,
            document_id=document_id,
            document_name=entry_data.document_name,
            details=entry_data.details
        )
        return await self.activity_repository.create(entry)

    async def recent_activity(self, limit: int = 50) -> List[ActivityLog]:
        """Most recent entries first"""
        return await self.activity_repository.get_recent(limit)

    async def dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        """Aggregate upload counts, stored size and active employees"""
        today, month_start = local_period_starts(now)

        return DashboardStats(
            total_uploads=await self.activity_repository.count_by_action(ACTION_UPLOAD),
            today_uploads=await self.activity_repository.count_by_action(ACTION_UPLOAD, since=today),
            month_uploads=await self.activity_repository.count_by_action(ACTION_UPLOAD, since=month_start),
            total_size=await self.document_repository.total_size(),
            active_employees=await self.employee_repository.count_active()
        )
