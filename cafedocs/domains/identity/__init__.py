from cafedocs.domains.identity.entities import User, ROLE_ADMIN, ROLE_EMPLOYEE
from cafedocs.domains.identity.schemas import (
    UserLogin, UserRegister, PasswordReset, UserResponse,
    AuthResponse, VerifyResponse, MessageResponse
)

__all__ = [
    "User", "ROLE_ADMIN", "ROLE_EMPLOYEE",
    "UserLogin", "UserRegister", "PasswordReset", "UserResponse",
    "AuthResponse", "VerifyResponse", "MessageResponse"
]
