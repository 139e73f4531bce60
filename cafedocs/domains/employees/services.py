import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from cafedocs.core.errors import DuplicateEmail, NotFound, WeakPassword
from cafedocs.core.ids import parse_uuid
from cafedocs.db.repositories.user_repository import UserRepository, EmployeeRepository
from cafedocs.domains.employees.entities import Employee
from cafedocs.domains.employees.schemas import EmployeeCreate, EmployeeUpdate
from cafedocs.domains.identity.entities import User, ROLE_EMPLOYEE

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class EmployeeService:
    """Employee administration"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
        self.employee_repository = EmployeeRepository(session)

    async def list_employees(self) -> List[Employee]:
        """All employees, newest first, with document counts"""
        return await self.employee_repository.get_all_with_document_counts()

    async def add_employee(self, employee_data: EmployeeCreate) -> Employee:
        """Create a user account and its employee profile"""
        if len(employee_data.password or "") < MIN_PASSWORD_LENGTH:
            raise WeakPassword()

        if await self.employee_repository.get_by_email(employee_data.email):
            raise DuplicateEmail("Employee already exists")

        user = await self.user_repository.create(
            User.create_user(
                email=employee_data.email,
                name=employee_data.name,
                password=employee_data.password,
                role=ROLE_EMPLOYEE
            )
        )

        employee = await self.employee_repository.create(
            Employee.create_employee(
                email=employee_data.email,
                name=employee_data.name,
                user_id=user.uuid
            )
        )
        logger.info(f"Employee {employee.email} added")
        return employee

    async def update_employee(self, update_data: EmployeeUpdate) -> Employee:
        """Partial update of name and active flag"""
        employee = await self._get_or_404(update_data.id)

        employee.update_profile(name=update_data.name, is_active=update_data.is_active)
        return await self._save_with_count(employee)

    async def delete_employee(self, employee_id: str) -> None:
        """Delete an employee and the paired user account"""
        employee = await self._get_or_404(employee_id)

        await self.employee_repository.delete(employee.uuid)
        await self.user_repository.delete(employee.user_id)
        logger.info(f"Employee {employee.email} deleted")

    async def set_active(self, employee_id: str, is_active: bool) -> Employee:
        """Block or unblock an employee"""
        employee = await self._get_or_404(employee_id)

        if is_active:
            employee.unblock()
        else:
            employee.block()

        return await self._save_with_count(employee)

    async def _save_with_count(self, employee: Employee) -> Employee:
        updated = await self.employee_repository.update(employee)
        if updated is None:
            # Deleted concurrently
            raise NotFound("Employee not found")
        updated.documents_count = await self.employee_repository.count_documents(updated.user_id)
        return updated

    async def _get_or_404(self, employee_id: str) -> Employee:
        employee = await self.employee_repository.get_by_uuid(
            parse_uuid(employee_id, "Employee not found")
        )
        if not employee:
            raise NotFound("Employee not found")
        return employee
