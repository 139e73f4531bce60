from cafedocs.domains.activity.entities import ActivityLog, DashboardStats, ACTION_UPLOAD
from cafedocs.domains.activity.schemas import (
    ActivityLogCreate, ActivityLogResponse, ActivityLogListResponse,
    DashboardStatsResponse, DashboardResponse
)

__all__ = [
    "ActivityLog", "DashboardStats", "ACTION_UPLOAD",
    "ActivityLogCreate", "ActivityLogResponse", "ActivityLogListResponse",
    "DashboardStatsResponse", "DashboardResponse"
]
