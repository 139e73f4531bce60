from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from cafedocs.core.config import settings
from cafedocs.core.db import get_db
from cafedocs.core.errors import InvalidCredentials
from cafedocs.core.schemas import SuccessResponse
from cafedocs.core.security import extract_token_from_header
from cafedocs.domains.identity.schemas import (
    UserLogin, UserRegister, PasswordReset, UserResponse,
    AuthResponse, VerifyResponse, MessageResponse
)
from cafedocs.domains.identity.services import IdentityService

router = APIRouter(prefix="/api/auth", tags=["authentication"])


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=False,
        samesite="strict",
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Sign in with email and password"""
    identity_service = IdentityService(db)

    user, token = await identity_service.login_user(login_data)
    _set_auth_cookie(response, token)

    return AuthResponse(token=token, user=UserResponse.from_entity(user))


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    """Clear the auth cookie; the token itself stays valid until it expires"""
    response.delete_cookie(settings.auth_cookie_name)
    return SuccessResponse()


@router.post("/register", response_model=AuthResponse)
async def register(
    user_data: UserRegister,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Register a new employee account"""
    identity_service = IdentityService(db)

    user, token = await identity_service.register_user(user_data)
    _set_auth_cookie(response, token)

    return AuthResponse(token=token, user=UserResponse.from_entity(user))


@router.get("/verify", response_model=VerifyResponse)
async def verify(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """Resolve the user behind the cookie or bearer token"""
    token = request.cookies.get(settings.auth_cookie_name) or extract_token_from_header(
        request.headers.get("Authorization", "")
    )

    if not token:
        raise InvalidCredentials("No token")

    identity_service = IdentityService(db)
    user = await identity_service.get_current_user_from_token(token)

    return VerifyResponse(user=UserResponse.from_entity(user))


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    reset_data: PasswordReset,
    db: AsyncSession = Depends(get_db)
):
    """Change a password given the current one"""
    identity_service = IdentityService(db)

    await identity_service.reset_password(reset_data)

    return MessageResponse(message="Password reset successfully")
