import logging
import uuid
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from cafedocs.core.config import settings
from cafedocs.core.errors import DuplicateEmail, IncorrectPassword, InvalidCredentials, NotFound
from cafedocs.core.security import create_access_token, verify_token
from cafedocs.db.repositories.user_repository import UserRepository, EmployeeRepository
from cafedocs.domains.employees.entities import Employee
from cafedocs.domains.identity.entities import User, ROLE_ADMIN, ROLE_EMPLOYEE
from cafedocs.domains.identity.schemas import UserLogin, UserRegister, PasswordReset

logger = logging.getLogger(__name__)


class IdentityService:
    """Authentication and account management"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
        self.employee_repository = EmployeeRepository(session)

    async def register_user(self, user_data: UserRegister) -> Tuple[User, str]:
        """Register an employee-role user and issue a token"""
        if await self.user_repository.email_exists(user_data.email):
            raise DuplicateEmail("User already exists")

        user = User.create_user(
            email=user_data.email,
            name=user_data.name,
            password=user_data.password,
            role=ROLE_EMPLOYEE
        )
        user = await self.user_repository.create(user)
        logger.info(f"Registered user {user.email}")

        return user, self.issue_token(user)

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Match email and password exactly"""
        if not login_data.email or not login_data.password:
            return None

        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.authenticate(login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Tuple[User, str]:
        """Sign a user in and issue a token"""
        user = await self.authenticate_user(login_data)

        if not user:
            logger.info(f"Failed login for {login_data.email}")
            raise InvalidCredentials()

        return user, self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return create_access_token(data=user.token_claims())

    async def get_current_user_from_token(self, token: str) -> User:
        """Resolve the user a token was issued to"""
        payload = verify_token(token)

        if not payload or not payload.get("id"):
            raise InvalidCredentials("Invalid token")

        try:
            user_uuid = uuid.UUID(str(payload["id"]))
        except ValueError:
            raise InvalidCredentials("Invalid token")

        user = await self.user_repository.get_by_uuid(user_uuid)

        if user is None:
            raise InvalidCredentials("User not found")

        return user

    async def reset_password(self, reset_data: PasswordReset) -> None:
        """Replace a password after checking the current one"""
        user = await self.user_repository.get_by_email(reset_data.email)

        if not user:
            raise NotFound("User not found")

        if not user.authenticate(reset_data.current_password):
            raise IncorrectPassword()

        user.set_password(reset_data.new_password)
        await self.user_repository.update_password(user)
        logger.info(f"Password reset for {user.email}")

    async def ensure_admin(self) -> User:
        """Create the bootstrap admin as both user and employee if missing"""
        admin = await self.user_repository.get_by_email(settings.admin_email)

        if not admin:
            admin = await self.user_repository.create(
                User.create_user(
                    email=settings.admin_email,
                    name=settings.admin_name,
                    password=settings.admin_password,
                    role=ROLE_ADMIN
                )
            )
            logger.info("Default admin user created")
        else:
            logger.info("Admin user already exists")

        if not await self.employee_repository.get_by_email(settings.admin_email):
            await self.employee_repository.create(
                Employee.create_employee(
                    email=settings.admin_email,
                    name=settings.admin_name,
                    user_id=admin.uuid,
                    role=ROLE_ADMIN
                )
            )
            logger.info("Admin user added to employees")

        return admin
