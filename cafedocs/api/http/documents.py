from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from urllib.parse import quote

from cafedocs.core.db import get_db
from cafedocs.core.schemas import SuccessResponse
from cafedocs.domains.documents.schemas import (
    DocumentUpload, BatchUpload, DocumentResponse,
    DocumentSingleResponse, DocumentListResponse, BatchUploadResponse
)
from cafedocs.domains.documents.services import DocumentService

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _content_disposition(filename: str) -> str:
    """Attachment header that survives non-latin filenames"""
    safe = filename.replace('"', "'")
    try:
        safe.encode("latin-1")
    except UnicodeEncodeError:
        fallback = safe.encode("ascii", "replace").decode("ascii")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    return f'attachment; filename="{safe}"'


@router.post("/upload", response_model=DocumentSingleResponse)
async def upload_document(
    upload: DocumentUpload,
    db: AsyncSession = Depends(get_db)
):
    """Upload a single document"""
    document_service = DocumentService(db)

    document = await document_service.upload_document(upload)

    return DocumentSingleResponse(document=DocumentResponse.from_entity(document))


@router.post("/batch-upload", response_model=BatchUploadResponse, response_model_exclude_none=True)
async def batch_upload_documents(
    batch: BatchUpload,
    db: AsyncSession = Depends(get_db)
):
    """Upload several documents, tolerating per-file failures"""
    document_service = DocumentService(db)

    documents, errors = await document_service.batch_upload(batch)

    return BatchUploadResponse(
        documents=[DocumentResponse.from_entity(doc) for doc in documents],
        errors=errors or None
    )


@router.get("", response_model=DocumentListResponse)
async def get_documents(
    role: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """List documents, newest first; employees see only their own"""
    document_service = DocumentService(db)

    documents = await document_service.list_documents(role=role, user_id=user_id)

    return DocumentListResponse(documents=[DocumentResponse.from_entity(doc) for doc in documents])


@router.get("/search/query", response_model=DocumentListResponse)
async def search_documents(
    query: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    role: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Search by text, category and upload date range"""
    document_service = DocumentService(db)

    documents = await document_service.search_documents(
        query=query,
        category=category,
        start_date=start_date,
        end_date=end_date,
        role=role,
        user_id=user_id
    )

    return DocumentListResponse(documents=[DocumentResponse.from_entity(doc) for doc in documents])


@router.get("/view/{document_id}")
async def view_document(
    document_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Serve the file inline"""
    document_service = DocumentService(db)

    document, content = await document_service.get_file(document_id)

    return Response(
        content=content,
        media_type=document.content_type,
        headers={"Cache-Control": "public, max-age=3600"}
    )


@router.get("/download/{document_id}")
async def download_document(
    document_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Serve the file as an attachment"""
    document_service = DocumentService(db)

    document, content = await document_service.get_file(document_id)

    return Response(
        content=content,
        media_type=document.content_type,
        headers={"Content-Disposition": _content_disposition(document.filename)}
    )


@router.get("/{document_id}", response_model=DocumentSingleResponse)
async def get_document(
    document_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Fetch document metadata"""
    document_service = DocumentService(db)

    document = await document_service.get_document(document_id)

    return DocumentSingleResponse(document=DocumentResponse.from_entity(document))


@router.delete("/{document_id}", response_model=SuccessResponse)
async def delete_document(
    document_id: str,
    role: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Delete a document; requires role=admin"""
    document_service = DocumentService(db)

    await document_service.delete_document(document_id, role)

    return SuccessResponse()
