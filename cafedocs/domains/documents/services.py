import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from cafedocs.core.config import settings
from cafedocs.core.errors import Forbidden, NotFound, PayloadTooLarge, ValidationError
from cafedocs.core.ids import parse_uuid, parse_user_id
from cafedocs.db.repositories.document_repository import DocumentRepository
from cafedocs.domains.documents.entities import Document
from cafedocs.domains.documents.schemas import BatchFile, BatchUpload, DocumentUpload
from cafedocs.domains.identity.entities import ROLE_ADMIN, ROLE_EMPLOYEE

logger = logging.getLogger(__name__)


def _megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}"


def parse_timestamp(value: Optional[str], field: str) -> Optional[datetime]:
    """Parse an ISO date or datetime query value into naive UTC"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid {field}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class DocumentService:
    """Upload, listing, search, deletion and retrieval of documents"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.max_file_size = settings.max_file_size

    async def upload_document(self, upload: DocumentUpload) -> Document:
        """Validate and store a single document"""
        if not upload.filename or not upload.user_id or not upload.user_name or not upload.title:
            raise ValidationError("Missing required fields: filename, userId, userName, title")

        size = upload.size or 0
        if size > self.max_file_size:
            raise PayloadTooLarge(
                f"File too large. Maximum size is {self.max_file_size // (1024 * 1024)} MB. "
                f"Your file is {_megabytes(size)} MB"
            )

        document = Document.create_document(
            filename=upload.filename,
            title=upload.title,
            uploaded_by=parse_user_id(upload.user_id),
            uploaded_by_name=upload.user_name,
            file_url=Document.upload_url(upload.filename),
            file_type=upload.file_type,
            size=size,
            category=upload.category,
            description=upload.description,
            file_data=upload.file_data
        )

        created = await self.document_repository.create(document)
        logger.info(f'File uploaded: "{created.title}" by {created.uploaded_by_name}')
        return created

    async def batch_upload(self, batch: BatchUpload) -> Tuple[List[Document], List[str]]:
        """Store each file independently, collecting per-file errors"""
        if not batch.documents:
            raise ValidationError("No documents provided")

        if not batch.user_id or not batch.user_name:
            raise ValidationError("Missing userId or userName")

        uploaded_by = parse_user_id(batch.user_id)
        uploaded: List[Document] = []
        errors: List[str] = []

        for file in batch.documents:
            error = self._check_batch_file(file)
            if error:
                errors.append(error)
                continue

            if not file.file_data or not file.file_data.strip():
                logger.warning(f'File "{file.filename}" uploaded without fileData by {batch.user_name}')

            document = Document.create_document(
                filename=file.filename,
                title=file.title,
                uploaded_by=uploaded_by,
                uploaded_by_name=batch.user_name,
                file_url=Document.download_url(file.filename),
                file_type=file.file_type,
                size=file.size,
                category=batch.category,
                description=file.description,
                file_data=file.file_data
            )

            try:
                uploaded.append(await self.document_repository.create(document))
            except Exception:
                logger.exception(f"Error uploading {file.filename}")
                errors.append(f"{file.filename}: Upload failed")
                continue

            logger.info(
                f'File uploaded: "{file.title}" by {batch.user_name}'
                + (" (with fileData)" if file.file_data else " (no fileData)")
            )

        if not uploaded:
            raise ValidationError(f"Failed to upload documents: {', '.join(errors)}")

        return uploaded, errors

    def _check_batch_file(self, file: BatchFile) -> Optional[str]:
        if not file.filename or not file.title:
            return f"{file.filename or 'Unknown'}: Missing title or filename"

        if (file.size or 0) > self.max_file_size:
            return f"{file.filename}: File too large ({_megabytes(file.size)} MB)"

        return None

    async def list_documents(self, role: Optional[str] = None, user_id: Optional[str] = None) -> List[Document]:
        """All documents for admins, own uploads for employees"""
        if role == ROLE_EMPLOYEE:
            owner = self._owner_or_none(user_id)
            if owner is None:
                return []
            return await self.document_repository.get_all(uploaded_by=owner)

        return await self.document_repository.get_all()

    async def search_documents(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        role: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> List[Document]:
        """Text, category and date-range search"""
        owner = None
        if role == ROLE_EMPLOYEE:
            owner = self._owner_or_none(user_id)
            if owner is None:
                return []

        return await self.document_repository.search(
            query=query,
            category=category,
            start_date=parse_timestamp(start_date, "startDate"),
            end_date=parse_timestamp(end_date, "endDate"),
            uploaded_by=owner
        )

    async def get_document(self, document_id: str, with_payload: bool = False) -> Document:
        """Fetch a document or raise NotFound"""
        document = await self.document_repository.get_by_uuid(
            parse_uuid(document_id, "Document not found"),
            with_payload=with_payload
        )

        if not document:
            raise NotFound("Document not found")

        return document

    async def delete_document(self, document_id: str, role: Optional[str]) -> None:
        """Delete a document; admins only"""
        if role != ROLE_ADMIN:
            raise Forbidden()

        deleted = await self.document_repository.delete(parse_uuid(document_id, "Document not found"))

        if not deleted:
            raise NotFound("Document not found")

        logger.info(f"Document {document_id} deleted")

    async def get_file(self, document_id: str) -> Tuple[Document, bytes]:
        """Fetch a document with its decoded payload"""
        document = await self.get_document(document_id, with_payload=True)

        if not document.has_file_data:
            logger.error(f'Document {document_id} has no fileData: "{document.filename}"')

        return document, document.decode_file_data()

    @staticmethod
    def _owner_or_none(user_id: Optional[str]) -> Optional[uuid.UUID]:
        try:
            return uuid.UUID(str(user_id)) if user_id else None
        except ValueError:
            return None
