from pydantic import Field
from typing import Optional

from cafedocs.core.schemas import ApiModel, SuccessResponse


class UserLogin(ApiModel):
    """Login request"""
    email: str = ""
    password: str = ""


class UserRegister(ApiModel):
    """Self-registration request"""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = ""


class PasswordReset(ApiModel):
    """Password reset request"""
    email: str = ""
    current_password: str = ""
    new_password: str = ""


class UserResponse(ApiModel):
    """Public part of a user account"""
    id: str
    email: str
    name: str
    role: str

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        return cls(id=str(user.uuid), email=user.email, name=user.name, role=user.role)


class AuthResponse(SuccessResponse):
    token: Optional[str] = None
    user: UserResponse


class VerifyResponse(SuccessResponse):
    user: UserResponse


class MessageResponse(ApiModel):
    message: str
