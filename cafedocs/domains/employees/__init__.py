from cafedocs.domains.employees.entities import Employee
from cafedocs.domains.employees.schemas import (
    EmployeeCreate, EmployeeUpdate, EmployeeResponse,
    EmployeeListResponse, EmployeeSingleResponse
)

__all__ = [
    "Employee",
    "EmployeeCreate", "EmployeeUpdate", "EmployeeResponse",
    "EmployeeListResponse", "EmployeeSingleResponse"
]
