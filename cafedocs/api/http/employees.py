from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cafedocs.core.db import get_db
from cafedocs.core.schemas import SuccessResponse
from cafedocs.domains.employees.schemas import (
    EmployeeCreate, EmployeeUpdate, EmployeeResponse,
    EmployeeListResponse, EmployeeSingleResponse
)
from cafedocs.domains.employees.services import EmployeeService

router = APIRouter(prefix="/api/employees", tags=["employees"])


@router.get("", response_model=EmployeeListResponse)
async def get_employees(db: AsyncSession = Depends(get_db)):
    """List employees with their document counts"""
    employee_service = EmployeeService(db)

    employees = await employee_service.list_employees()

    return EmployeeListResponse(
        employees=[EmployeeResponse.from_entity(employee) for employee in employees]
    )


@router.post("", response_model=EmployeeSingleResponse)
async def add_employee(
    employee_data: EmployeeCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add an employee with a login account"""
    employee_service = EmployeeService(db)

    employee = await employee_service.add_employee(employee_data)

    return EmployeeSingleResponse(employee=EmployeeResponse.from_entity(employee))


@router.put("", response_model=EmployeeSingleResponse)
async def update_employee(
    update_data: EmployeeUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update name and/or active flag"""
    employee_service = EmployeeService(db)

    employee = await employee_service.update_employee(update_data)

    return EmployeeSingleResponse(employee=EmployeeResponse.from_entity(employee))


@router.delete("/{employee_id}", response_model=SuccessResponse)
async def delete_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Delete an employee and the paired account"""
    employee_service = EmployeeService(db)

    await employee_service.delete_employee(employee_id)

    return SuccessResponse()


@router.patch("/{employee_id}/block", response_model=EmployeeSingleResponse)
async def block_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Block an employee"""
    employee_service = EmployeeService(db)

    employee = await employee_service.set_active(employee_id, False)

    return EmployeeSingleResponse(employee=EmployeeResponse.from_entity(employee))


@router.patch("/{employee_id}/unblock", response_model=EmployeeSingleResponse)
async def unblock_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Unblock an employee"""
    employee_service = EmployeeService(db)

    employee = await employee_service.set_active(employee_id, True)

    return EmployeeSingleResponse(employee=EmployeeResponse.from_entity(employee))
