from sqlalchemy import Column, String, Text, BigInteger, DateTime, ForeignKey, Uuid

from cafedocs.core.security import utcnow
from cafedocs.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"

    filename = Column(String(512), nullable=False)
    file_type = Column(String(255), nullable=False, default="unknown")
    size = Column(BigInteger, nullable=False, default=0)
    upload_date = Column(DateTime, default=utcnow, nullable=False, index=True)
    # No FK: documents outlive their uploader's account
    uploaded_by = Column(Uuid, nullable=False, index=True)
    uploaded_by_name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, default="general")
    file_url = Column(String(1024), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")


class DocumentPayload(BaseModel):
    """Base64 file body kept apart from the queryable metadata"""
    __tablename__ = "document_payloads"

    document_id = Column(Uuid, ForeignKey("documents.uuid", ondelete="CASCADE"), unique=True, nullable=False)
    data = Column(Text, nullable=False, default="")
