from cafedocs.db.models.user import User, Employee
from cafedocs.db.models.document import Document, DocumentPayload
from cafedocs.db.models.activity import ActivityLog

__all__ = [
    "User",
    "Employee",
    "Document",
    "DocumentPayload",
    "ActivityLog"
]
