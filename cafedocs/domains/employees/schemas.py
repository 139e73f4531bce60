from typing import List, Optional

from cafedocs.core.schemas import ApiModel, SuccessResponse, UtcDatetime


class EmployeeCreate(ApiModel):
    """Request to add an employee"""
    email: str = ""
    name: str = ""
    password: str = ""


class EmployeeUpdate(ApiModel):
    """Partial update of an employee"""
    id: str
    name: Optional[str] = None
    is_active: Optional[bool] = None


class EmployeeResponse(ApiModel):
    """Employee profile as shown to the admin"""
    id: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: UtcDatetime
    documents_count: int = 0

    @classmethod
    def from_entity(cls, employee) -> "EmployeeResponse":
        return cls(
            id=str(employee.uuid),
            email=employee.email,
            name=employee.name,
            role=employee.role,
            is_active=employee.is_active,
            created_at=employee.created_at,
            documents_count=employee.documents_count
        )


class EmployeeListResponse(SuccessResponse):
    employees: List[EmployeeResponse]


class EmployeeSingleResponse(SuccessResponse):
    employee: EmployeeResponse
