from pydantic import Field
from typing import Optional, List

from cafedocs.core.schemas import ApiModel, SuccessResponse, UtcDatetime


class DocumentUpload(ApiModel):
    """Single upload request"""
    filename: Optional[str] = None
    file_type: Optional[str] = None
    size: Optional[int] = Field(default=0, ge=0)
    category: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    file_data: Optional[str] = None


class BatchFile(ApiModel):
    """One file of a batch upload"""
    filename: Optional[str] = None
    file_type: Optional[str] = None
    size: Optional[int] = Field(default=0, ge=0)
    title: Optional[str] = None
    description: Optional[str] = None
    file_data: Optional[str] = None


class BatchUpload(ApiModel):
    """Batch upload request"""
    documents: Optional[List[BatchFile]] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    category: Optional[str] = None


class DocumentResponse(ApiModel):
    """Document metadata; the payload is never echoed back"""
    id: str
    filename: str
    file_type: str
    size: int
    upload_date: UtcDatetime
    uploaded_by: str
    uploaded_by_name: str
    category: str
    file_url: str
    title: str
    description: str

    @classmethod
    def from_entity(cls, document) -> "DocumentResponse":
        return cls(
            id=str(document.uuid),
            filename=document.filename,
            file_type=document.file_type,
            size=document.size,
            upload_date=document.upload_date,
            uploaded_by=str(document.uploaded_by),
            uploaded_by_name=document.uploaded_by_name,
            category=document.category,
            file_url=document.file_url,
            title=document.title,
            description=document.description
        )


class DocumentSingleResponse(SuccessResponse):
    document: DocumentResponse


class DocumentListResponse(SuccessResponse):
    documents: List[DocumentResponse]


class BatchUploadResponse(SuccessResponse):
    documents: List[DocumentResponse]
    errors: Optional[List[str]] = None
