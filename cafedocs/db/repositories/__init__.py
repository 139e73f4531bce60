from cafedocs.db.repositories.user_repository import UserRepository, EmployeeRepository
from cafedocs.db.repositories.document_repository import DocumentRepository
from cafedocs.db.repositories.activity_repository import ActivityLogRepository

__all__ = [
    "UserRepository",
    "EmployeeRepository",
    "DocumentRepository",
    "ActivityLogRepository"
]
