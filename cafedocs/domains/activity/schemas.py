from typing import Optional, List

from cafedocs.core.schemas import ApiModel, SuccessResponse, UtcDatetime


class ActivityLogCreate(ApiModel):
    """Activity entry submitted by a client"""
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    action: Optional[str] = None
    document_id: Optional[str] = None
    document_name: Optional[str] = None
    details: Optional[str] = None


class ActivityLogResponse(ApiModel):
    id: str
    user_id: str
    user_name: str
    action: str
    document_id: Optional[str] = None
    document_name: Optional[str] = None
    timestamp: UtcDatetime
    details: Optional[str] = None

    @classmethod
    def from_entity(cls, entry) -> "ActivityLogResponse":
        return cls(
            id=str(entry.uuid),
            user_id=str(entry.user_id),
            user_name=entry.user_name,
            action=entry.action,
            document_id=str(entry.document_id) if entry.document_id else None,
            document_name=entry.document_name,
            timestamp=entry.timestamp,
            details=entry.details
        )


class ActivityLogListResponse(SuccessResponse):
    logs: List[ActivityLogResponse]


class DashboardStatsResponse(ApiModel):
    total_uploads: int
    today_uploads: int
    month_uploads: int
    total_size: int
    active_employees: int


class DashboardResponse(SuccessResponse):
    stats: DashboardStatsResponse
