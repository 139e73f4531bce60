import uuid

from sqlalchemy import Column, DateTime, Uuid

from cafedocs.core.db import Base
from cafedocs.core.security import utcnow


class BaseModel(Base):
    __abstract__ = True

    uuid = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
