import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.deps import get_owned_or_404
from hrportal.core.database import (
    employee_repository,
    get_db,
    get_employee_count_by_department,
    project_repository,
)
from hrportal.core.decorators import log_execution_time, log_requests, rate_limit
from hrportal.core.security import get_current_active_user
from hrportal.core.storage import LocalStorage, get_storage
from hrportal.models.model import Employee, User
from hrportal.schemas.schema import (
    EmployeeCount,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ResponseMessage,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    responses={404: {"description": "Not found"}},
)


async def _email_taken(db: AsyncSession, owner_id: str, email: str, exclude_id: Optional[str] = None) -> bool:
    conditions = [Employee.email == email]
    if exclude_id:
        conditions.append(Employee.id != exclude_id)
    return await employee_repository.count(db, owner_id, conditions=conditions) > 0


@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
@log_execution_time
@log_requests
@rate_limit(calls=1000, period=60)
async def create_employee(
    request: Request,
    employee: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    logger.debug(f"Received employee data: {employee.model_dump()}")

    if await _email_taken(db, current_user.id, employee.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Employee with email {employee.email} already exists"
        )

    try:
        new_employee = await employee_repository.create(db, current_user.id, employee.to_row())
        return EmployeeResponse.from_model(new_employee)
    except Exception as e:
        logger.error(f"Error in create_employee: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating employee"
        )


@router.get("/", response_model=List[EmployeeResponse])
@log_requests
@log_execution_time
@rate_limit(calls=1000, period=60)
async def get_employees(
    request: Request,
    skip: int = 0,
    limit: int = 100,
    department: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        filters = {"department": department, "status": status_filter}
        conditions = []
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(or_(
                Employee.first_name.ilike(pattern),
                Employee.last_name.ilike(pattern),
                Employee.email.ilike(pattern),
                Employee.position.ilike(pattern),
            ))

        employees = await employee_repository.get_all(
            db, current_user.id, skip, limit, filters, conditions=conditions
        )
        return [EmployeeResponse.from_model(employee) for employee in employees]
    except Exception as e:
        logger.error(f"Employee retrieval failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employees"
        )


@router.get("/stats/department", response_model=List[EmployeeCount])
@log_requests
@log_execution_time
@rate_limit(calls=50, period=60)
async def get_employee_count_by_department_endpoint(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        department_counts = await get_employee_count_by_department(db, current_user.id)
        return [EmployeeCount(**count) for count in department_counts]
    except Exception as e:
        logger.error(f"Department stats failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve department statistics"
        )


@router.get("/{employee_id}", response_model=EmployeeResponse)
@log_requests
@log_execution_time
@rate_limit(calls=2000, period=60)
async def get_employee(
    request: Request,
    employee_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    employee = await get_owned_or_404(employee_repository, db, current_user.id, employee_id, "Employee")
    return EmployeeResponse.from_model(employee)


@router.put("/{employee_id}", response_model=EmployeeResponse)
@log_requests
@log_execution_time
@rate_limit(calls=100, period=60)
async def update_employee(
    request: Request,
    employee_id: str,
    employee: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    db_employee = await get_owned_or_404(employee_repository, db, current_user.id, employee_id, "Employee")

    employee_data = employee.to_row()
    if not employee_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    if "email" in employee_data and await _email_taken(db, current_user.id, employee_data["email"], employee_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Employee with email {employee_data['email']} already exists"
        )

    try:
        updated_employee = await employee_repository.update(db, db_employee, employee_data)
        return EmployeeResponse.from_model(updated_employee)
    except Exception as e:
        logger.error(f"Employee update failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update employee"
        )


@router.delete("/{employee_id}", response_model=ResponseMessage)
@log_requests
@log_execution_time
@rate_limit(calls=50, period=60)
async def delete_employee(
    request: Request,
    employee_id: str,
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
    current_user: User = Depends(get_current_active_user)
):
    db_employee = await get_owned_or_404(employee_repository, db, current_user.id, employee_id, "Employee")
    projects = await project_repository.get_all(
        db, current_user.id, limit=None, filters={"employee_id": employee_id}
    )
    # projects go with the cascade, their stored files do not
    file_paths = [path for project in projects for path in project.file_paths or []]

    try:
        await employee_repository.delete(db, db_employee)
    except Exception as e:
        logger.error(f"Employee deletion failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete employee"
        )

    for key in file_paths:
        storage.remove(key)
    logger.info(f"Removed {len(file_paths)} project files of employee {employee_id}")
    return ResponseMessage(
        message=f"Employee ID {employee_id} deleted successfully"
    )
