from fastapi import APIRouter

from cafedocs.core.config import settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/ping")
async def ping():
    """Liveness probe"""
    return {"message": settings.ping_message}
