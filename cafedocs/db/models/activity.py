from sqlalchemy import Column, String, Text, DateTime, Uuid

from cafedocs.core.security import utcnow
from cafedocs.db.base import BaseModel


class ActivityLog(BaseModel):
    __tablename__ = "activity_logs"

    user_id = Column(Uuid, nullable=False, index=True)
    user_name = Column(String(255), nullable=False)
    action = Column(String(50), nullable=False, index=True)
    document_id = Column(Uuid, nullable=True)
    document_name = Column(String(512), nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)
    details = Column(Text, nullable=True)
