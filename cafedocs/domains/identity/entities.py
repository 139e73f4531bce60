import uuid
from datetime import datetime
from typing import Optional

from cafedocs.core.security import get_password_hash, utcnow, verify_password

ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"


class User:
    """Account of a person who can sign in"""

    def __init__(
        self,
        uuid: uuid.UUID,
        email: str,
        name: str,
        password_hash: str,
        role: str = ROLE_EMPLOYEE,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.email = email
        self.name = name
        self.password_hash = password_hash
        self.role = role
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def authenticate(self, password: str) -> bool:
        """Check the supplied password against the stored one"""
        return verify_password(password, self.password_hash)

    def set_password(self, password: str) -> None:
        """Replace the stored password"""
        self.password_hash = get_password_hash(password)
        self.updated_at = utcnow()

    def token_claims(self) -> dict:
        """Claims embedded in the access token"""
        return {
            "id": str(self.uuid),
            "email": self.email,
            "role": self.role,
        }

    @classmethod
    def create_user(cls, email: str, name: str, password: str, role: str = ROLE_EMPLOYEE) -> "User":
        """Create a new user with a hashed password"""
        return cls(
            uuid=uuid.uuid4(),
            email=email,
            name=name,
            password_hash=get_password_hash(password),
            role=role
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, email={self.email}, role={self.role})"
