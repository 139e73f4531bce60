from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError
import uuid

from cafedocs.core.errors import DuplicateEmail
from cafedocs.db.models.user import User as UserModel, Employee as EmployeeModel
from cafedocs.db.models.document import Document as DocumentModel
from cafedocs.domains.identity.entities import User
from cafedocs.domains.employees.entities import Employee


class UserRepository:
    """Repository for user accounts"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user"""
        db_user = UserModel(
            uuid=user.uuid,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            role=user.role
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateEmail("User already exists")

    async def get_by_uuid(self, user_uuid: uuid.UUID) -> Optional[User]:
        """Fetch a user by UUID"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.uuid == user_uuid)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Fetch a user by email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def update_password(self, user: User) -> User:
        """Persist a changed password"""
        stmt = (
            update(UserModel)
            .where(UserModel.uuid == user.uuid)
            .values(
                password_hash=user.password_hash,
                updated_at=user.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_uuid(user.uuid)

    async def delete(self, user_uuid: uuid.UUID) -> bool:
        """Delete a user"""
        stmt = delete(UserModel).where(UserModel.uuid == user_uuid)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def email_exists(self, email: str) -> bool:
        """Check whether an email is taken"""
        result = await self.session.execute(
            select(UserModel.uuid).where(UserModel.email == email)
        )
        return result.scalar_one_or_none() is not None

    def _to_domain(self, db_user: UserModel) -> User:
        """Map a database row to the domain entity"""
        return User(
            uuid=db_user.uuid,
            email=db_user.email,
            name=db_user.name,
            password_hash=db_user.password_hash,
            role=db_user.role,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )


class EmployeeRepository:
    """Repository for employee profiles"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, employee: Employee) -> Employee:
        """Create a new employee profile"""
        db_employee = EmployeeModel(
            uuid=employee.uuid,
            email=employee.email,
            name=employee.name,
            user_id=employee.user_id,
            role=employee.role,
            is_active=employee.is_active
        )

        self.session.add(db_employee)
        try:
            await self.session.commit()
            await self.session.refresh(db_employee)
            return self._to_domain(db_employee)
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateEmail("Employee already exists")

    async def get_by_uuid(self, employee_uuid: uuid.UUID) -> Optional[Employee]:
        """Fetch an employee by UUID"""
        result = await self.session.execute(
            select(EmployeeModel).where(EmployeeModel.uuid == employee_uuid)
        )
        db_employee = result.scalar_one_or_none()
        return self._to_domain(db_employee) if db_employee else None

    async def get_by_email(self, email: str) -> Optional[Employee]:
        """Fetch an employee by email"""
        result = await self.session.execute(
            select(EmployeeModel).where(EmployeeModel.email == Employee.normalize_email(email))
        )
        db_employee = result.scalar_one_or_none()
        return self._to_domain(db_employee) if db_employee else None

    async def get_all_with_document_counts(self) -> List[Employee]:
        """List employees, newest first, with their uploaded document counts"""
        doc_counts = (
            select(DocumentModel.uploaded_by, func.count(DocumentModel.uuid).label("documents_count"))
            .group_by(DocumentModel.uploaded_by)
            .subquery()
        )
        result = await self.session.execute(
            select(EmployeeModel, func.coalesce(doc_counts.c.documents_count, 0))
            .outerjoin(doc_counts, doc_counts.c.uploaded_by == EmployeeModel.user_id)
            .order_by(EmployeeModel.created_at.desc())
        )
        return [
            self._to_domain(db_employee, documents_count=count)
            for db_employee, count in result.all()
        ]

    async def count_documents(self, user_id: uuid.UUID) -> int:
        """Count documents uploaded by the employee's user"""
        result = await self.session.execute(
            select(func.count(DocumentModel.uuid)).where(DocumentModel.uploaded_by == user_id)
        )
        return result.scalar()

    async def update(self, employee: Employee) -> Employee:
        """Update an employee profile"""
        stmt = (
            update(EmployeeModel)
            .where(EmployeeModel.uuid == employee.uuid)
            .values(
                name=employee.name,
                is_active=employee.is_active,
                updated_at=employee.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_uuid(employee.uuid)

    async def delete(self, employee_uuid: uuid.UUID) -> bool:
        """Delete an employee profile"""
        stmt = delete(EmployeeModel).where(EmployeeModel.uuid == employee_uuid)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def count_active(self) -> int:
        """Count employees that are not blocked"""
        result = await self.session.execute(
            select(func.count(EmployeeModel.uuid)).where(EmployeeModel.is_active.is_(True))
        )
        return result.scalar()

    def _to_domain(self, db_employee: EmployeeModel, documents_count: int = 0) -> Employee:
        """Map a database row to the domain entity"""
        return Employee(
            uuid=db_employee.uuid,
            email=db_employee.email,
            name=db_employee.name,
            user_id=db_employee.user_id,
            role=db_employee.role,
            is_active=db_employee.is_active,
            created_at=db_employee.created_at,
            updated_at=db_employee.updated_at,
            documents_count=documents_count
        )
