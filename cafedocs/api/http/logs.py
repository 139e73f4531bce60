from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cafedocs.core.db import get_db
from cafedocs.core.schemas import SuccessResponse
from cafedocs.domains.activity.schemas import (
    ActivityLogCreate, ActivityLogResponse, ActivityLogListResponse,
    DashboardStatsResponse, DashboardResponse
)
from cafedocs.domains.activity.services import ActivityService

router = APIRouter(prefix="/api", tags=["activity"])


@router.post("/logs/activity", response_model=SuccessResponse)
async def log_activity(
    entry_data: ActivityLogCreate,
    db: AsyncSession = Depends(get_db)
):
    """Append an activity log entry"""
    activity_service = ActivityService(db)

    await activity_service.log_activity(entry_data)

    return SuccessResponse()


@router.get("/logs/activity", response_model=ActivityLogListResponse)
async def get_activity_logs(
    limit: int = Query(50, ge=1, le=1000),
    db: AsyncSession = Depends(get_db)
):
    """Most recent activity entries"""
    activity_service = ActivityService(db)

    logs = await activity_service.recent_activity(limit)

    return ActivityLogListResponse(logs=[ActivityLogResponse.from_entity(entry) for entry in logs])


@router.get("/dashboard/stats", response_model=DashboardResponse)
async def get_dashboard_stats(db: AsyncSession = Depends(get_db)):
    """Upload counts, stored size and active employees"""
    activity_service = ActivityService(db)

    stats = await activity_service.dashboard_stats()

    return DashboardResponse(
        stats=DashboardStatsResponse(
            total_uploads=stats.total_uploads,
            today_uploads=stats.today_uploads,
            month_uploads=stats.month_uploads,
            total_size=stats.total_size,
            active_employees=stats.active_employees
        )
    )
