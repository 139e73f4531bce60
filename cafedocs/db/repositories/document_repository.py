from datetime import datetime
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, or_
import uuid

from cafedocs.db.models.document import Document as DocumentModel, DocumentPayload as DocumentPayloadModel

if TYPE_CHECKING:
    from cafedocs.domains.documents.entities import Document


class DocumentRepository:
    """Repository for document metadata and payloads"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document") -> "Document":
        """Create a document and, when present, its payload"""
        db_document = DocumentModel(
            uuid=document.uuid,
            filename=document.filename,
            file_type=document.file_type,
            size=document.size,
            upload_date=document.upload_date,
            uploaded_by=document.uploaded_by,
            uploaded_by_name=document.uploaded_by_name,
            category=document.category,
            file_url=document.file_url,
            title=document.title,
            description=document.description
        )
        self.session.add(db_document)

        try:
            if document.file_data:
                await self.session.flush()
                self.session.add(DocumentPayloadModel(document_id=document.uuid, data=document.file_data))

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(db_document)
        return self._to_domain(db_document)

    async def get_by_uuid(self, document_uuid: uuid.UUID, with_payload: bool = False) -> Optional["Document"]:
        """Fetch a document by UUID, optionally with its payload"""
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.uuid == document_uuid)
        )
        db_document = result.scalar_one_or_none()
        if not db_document:
            return None

        file_data = None
        if with_payload:
            payload = await self.session.execute(
                select(DocumentPayloadModel.data).where(DocumentPayloadModel.document_id == document_uuid)
            )
            file_data = payload.scalar_one_or_none() or ""

        return self._to_domain(db_document, file_data=file_data)

    async def get_all(self, uploaded_by: Optional[uuid.UUID] = None) -> List["Document"]:
        """List documents, newest first"""
        query = select(DocumentModel)

        if uploaded_by:
            query = query.where(DocumentModel.uploaded_by == uploaded_by)

        result = await self.session.execute(query.order_by(DocumentModel.upload_date.desc()))
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def search(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        uploaded_by: Optional[uuid.UUID] = None
    ) -> List["Document"]:
        """Search documents by text, category and upload date range"""
        base_query = select(DocumentModel)

        if uploaded_by:
            base_query = base_query.where(DocumentModel.uploaded_by == uploaded_by)

        if query:
            base_query = base_query.where(
                or_(
                    DocumentModel.filename.icontains(query, autoescape=True),
                    DocumentModel.category.icontains(query, autoescape=True),
                    DocumentModel.title.icontains(query, autoescape=True)
                )
            )

        if category:
            base_query = base_query.where(DocumentModel.category == category)

        if start_date:
            base_query = base_query.where(DocumentModel.upload_date >= start_date)

        if end_date:
            base_query = base_query.where(DocumentModel.upload_date <= end_date)

        result = await self.session.execute(base_query.order_by(DocumentModel.upload_date.desc()))
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def delete(self, document_uuid: uuid.UUID) -> bool:
        """Delete a document together with its payload"""
        await self.session.execute(
            delete(DocumentPayloadModel).where(DocumentPayloadModel.document_id == document_uuid)
        )
        result = await self.session.execute(
            delete(DocumentModel).where(DocumentModel.uuid == document_uuid)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def total_size(self) -> int:
        """Sum of declared sizes of all documents"""
        result = await self.session.execute(
            select(func.coalesce(func.sum(DocumentModel.size), 0))
        )
        return int(result.scalar())

    def _to_domain(self, db_document: DocumentModel, file_data: Optional[str] = None) -> "Document":
        """Map a database row to the domain entity"""
        from cafedocs.domains.documents.entities import Document

        return Document(
            uuid=db_document.uuid,
            filename=db_document.filename,
            file_type=db_document.file_type,
            size=db_document.size,
            uploaded_by=db_document.uploaded_by,
            uploaded_by_name=db_document.uploaded_by_name,
            title=db_document.title,
            file_url=db_document.file_url,
            category=db_document.category,
            description=db_document.description,
            upload_date=db_document.upload_date,
            file_data=file_data
        )
