from cafedocs.domains.documents.entities import Document
from cafedocs.domains.documents.schemas import (
    DocumentUpload, BatchFile, BatchUpload, DocumentResponse,
    DocumentSingleResponse, DocumentListResponse, BatchUploadResponse
)

__all__ = [
    "Document",
    "DocumentUpload", "BatchFile", "BatchUpload", "DocumentResponse",
    "DocumentSingleResponse", "DocumentListResponse", "BatchUploadResponse"
]
