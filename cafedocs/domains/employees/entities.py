import uuid
from datetime import datetime
from typing import Optional

from cafedocs.core.security import utcnow
from cafedocs.domains.identity.entities import ROLE_EMPLOYEE


class Employee:
    """Staff profile paired with a user account"""

    def __init__(
        self,
        uuid: uuid.UUID,
        email: str,
        name: str,
        user_id: uuid.UUID,
        role: str = ROLE_EMPLOYEE,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        documents_count: int = 0
    ):
        self.uuid = uuid
        self.email = email
        self.name = name
        self.user_id = user_id
        self.role = role
        self.is_active = is_active
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()
        # Derived at read time, never persisted
        self.documents_count = documents_count

    def update_profile(self, name: Optional[str] = None, is_active: Optional[bool] = None) -> None:
        """Partial update of name and active flag"""
        if name:
            self.name = name
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = utcnow()

    def block(self) -> None:
        self.update_profile(is_active=False)

    def unblock(self) -> None:
        self.update_profile(is_active=True)

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    @classmethod
    def create_employee(
        cls,
        email: str,
        name: str,
        user_id: uuid.UUID,
        role: str = ROLE_EMPLOYEE
    ) -> "Employee":
        """Create a new active employee profile"""
        return cls(
            uuid=uuid.uuid4(),
            email=cls.normalize_email(email),
            name=name,
            user_id=user_id,
            role=role,
            is_active=True
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Employee):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Employee(uuid={self.uuid}, email={self.email}, is_active={self.is_active})"
