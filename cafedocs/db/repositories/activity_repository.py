from datetime import datetime
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from cafedocs.db.models.activity import ActivityLog as ActivityLogModel
from cafedocs.domains.activity.entities import ActivityLog


class ActivityLogRepository:
    """Append-only repository for activity log entries"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: ActivityLog) -> ActivityLog:
        """Append a log entry"""
        db_entry = ActivityLogModel(
            uuid=entry.uuid,
            user_id=entry.user_id,
            user_name=entry.user_name,
            action=entry.action,
            document_id=entry.document_id,
            document_name=entry.document_name,
            timestamp=entry.timestamp,
            details=entry.details
        )

        self.session.add(db_entry)
        await self.session.commit()
        await self.session.refresh(db_entry)
        return self._to_domain(db_entry)

    async def get_recent(self, limit: int = 50) -> List[ActivityLog]:
        """Most recent entries first"""
        result = await self.session.execute(
            select(ActivityLogModel)
            .order_by(ActivityLogModel.timestamp.desc())
            .limit(limit)
        )
        return [self._to_domain(entry) for entry in result.scalars().all()]

    async def count_by_action(self, action: str, since: Optional[datetime] = None) -> int:
        """Count entries for an action, optionally from a point in time on"""
        query = select(func.count(ActivityLogModel.uuid)).where(ActivityLogModel.action == action)

        if since:
            query = query.where(ActivityLogModel.timestamp >= since)

        result = await self.session.execute(query)
        return result.scalar()

    def _to_domain(self, db_entry: ActivityLogModel) -> ActivityLog:
        """Map a database row to the domain entity"""
        return ActivityLog(
            uuid=db_entry.uuid,
            user_id=db_entry.user_id,
            user_name=db_entry.user_name,
            action=db_entry.action,
            timestamp=db_entry.timestamp,
            document_id=db_entry.document_id,
            document_name=db_entry.document_name,
            details=db_entry.details
        )
