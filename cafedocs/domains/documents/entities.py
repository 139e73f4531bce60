import base64
import binascii
import re
import time
import uuid
from datetime import datetime
from typing import Optional

from cafedocs.core.errors import InvalidFileData, NoFileData
from cafedocs.core.security import utcnow

DEFAULT_CATEGORY = "general"
DEFAULT_FILE_TYPE = "unknown"
OCTET_STREAM = "application/octet-stream"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


class Document:
    """Uploaded file metadata with an optional base64 payload"""

    def __init__(
        self,
        uuid: uuid.UUID,
        filename: str,
        file_type: str,
        size: int,
        uploaded_by: uuid.UUID,
        uploaded_by_name: str,
        title: str,
        file_url: str,
        category: str = DEFAULT_CATEGORY,
        description: str = "",
        upload_date: Optional[datetime] = None,
        file_data: Optional[str] = None
    ):
        self.uuid = uuid
        self.filename = filename
        self.file_type = file_type
        self.size = size
        self.uploaded_by = uploaded_by
        self.uploaded_by_name = uploaded_by_name
        self.title = title
        self.file_url = file_url
        self.category = category
        self.description = description
        self.upload_date = upload_date or utcnow()
        # Only populated when the payload was explicitly loaded
        self.file_data = file_data

    @property
    def has_file_data(self) -> bool:
        return bool(self.file_data and self.file_data.strip())

    @property
    def content_type(self) -> str:
        if not self.file_type or self.file_type == DEFAULT_FILE_TYPE:
            return OCTET_STREAM
        return self.file_type

    def decode_file_data(self) -> bytes:
        """Decode the stored payload, stripping a data-URL prefix if present"""
        if not self.has_file_data:
            raise NoFileData()

        data = self.file_data.strip()
        if data.startswith("data:"):
            _, _, data = data.partition(",")

        data = "".join(data.split())
        if not data:
            raise InvalidFileData()

        # Browsers may drop trailing padding
        data += "=" * (-len(data) % 4)
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidFileData()

    @staticmethod
    def upload_url(filename: str) -> str:
        """Synthetic URL for single uploads"""
        return f"/uploads/{int(time.time() * 1000)}-{filename}"

    @staticmethod
    def download_url(filename: str) -> str:
        """Synthetic URL for batch uploads"""
        safe_name = _UNSAFE_FILENAME_CHARS.sub("-", filename)
        return f"/api/documents/download/{int(time.time() * 1000)}-{safe_name}"

    @classmethod
    def create_document(
        cls,
        filename: str,
        title: str,
        uploaded_by: uuid.UUID,
        uploaded_by_name: str,
        file_url: str,
        file_type: Optional[str] = None,
        size: Optional[int] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        file_data: Optional[str] = None
    ) -> "Document":
        """Create a new document, filling in defaults for optional fields"""
        return cls(
            uuid=uuid.uuid4(),
            filename=filename,
            file_type=file_type or DEFAULT_FILE_TYPE,
            size=size or 0,
            uploaded_by=uploaded_by,
            uploaded_by_name=uploaded_by_name,
            title=title,
            file_url=file_url,
            category=category or DEFAULT_CATEGORY,
            description=description or "",
            file_data=file_data or ""
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Document(uuid={self.uuid}, filename={self.filename}, size={self.size})"
