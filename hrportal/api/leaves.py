import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.deps import ensure_employee, get_owned_or_404
from hrportal.core.database import get_db, holiday_repository, leave_repository
from hrportal.core.decorators import log_execution_time, log_requests
from hrportal.core.security import get_current_active_user
from hrportal.core import utils
from hrportal.core.utils import expand_holidays, working_days
from hrportal.models.model import User
from hrportal.schemas.schema import (
    LeaveCreate,
    LeaveResponse,
    LeaveStatus,
    LeaveUpdate,
    ResponseMessage,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/leaves",
    tags=["leaves"],
    responses={404: {"description": "Not found"}},
)


async def _holiday_dates(db: AsyncSession, owner_id: str, start: date, end: date):
    holidays = await holiday_repository.get_all(db, owner_id, limit=None)
    return expand_holidays(holidays, start, end)


async def to_response(db: AsyncSession, owner_id: str, leave) -> LeaveResponse:
    holidays = await _holiday_dates(db, owner_id, leave.start_date, leave.end_date)
    return LeaveResponse.from_model(leave, working_days(leave.start_date, leave.end_date, holidays))


@router.get("/", response_model=List[LeaveResponse])
@log_requests
@log_execution_time
async def get_leaves(
    request: Request,
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    employee_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    filters = {"status": status_filter}
    if employee_id and employee_id != "all":
        filters["employee_id"] = employee_id

    try:
        leaves = await leave_repository.get_all(db, current_user.id, skip, limit, filters)
        if not leaves:
            return []

        start = min(leave.start_date for leave in leaves)
        end = max(leave.end_date for leave in leaves)
        holidays = await _holiday_dates(db, current_user.id, start, end)
        return [
            LeaveResponse.from_model(leave, working_days(leave.start_date, leave.end_date, holidays))
            for leave in leaves
        ]
    except Exception as e:
        logger.error(f"Leave retrieval failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve leave requests"
        )


@router.post("/", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
@log_requests
@log_execution_time
async def create_leave(
    request: Request,
    payload: LeaveCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    await ensure_employee(db, current_user.id, payload.employee_id)

    try:
        leave = await leave_repository.create(db, current_user.id, {
            **payload.model_dump(),
            "status": "pending",
        })
        return await to_response(db, current_user.id, leave)
    except Exception as e:
        logger.error(f"Leave creation failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit leave request"
        )


@router.get("/{leave_id}", response_model=LeaveResponse)
@log_requests
async def get_leave(
    request: Request,
    leave_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    leave = await get_owned_or_404(leave_repository, db, current_user.id, leave_id, "Leave request")
    return await to_response(db, current_user.id, leave)


@router.put("/{leave_id}", response_model=LeaveResponse)
@log_requests
@log_execution_time
async def update_leave(
    request: Request,
    leave_id: str,
    payload: LeaveUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    leave = await get_owned_or_404(leave_repository, db, current_user.id, leave_id, "Leave request")
    if leave.status != "pending":
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Leave request is already {leave.status}"
        )

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    start = data.get("start_date", leave.start_date)
    end = data.get("end_date", leave.end_date)
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must be on or after start_date"
        )

    if "employee_id" in data:
        await ensure_employee(db, current_user.id, data["employee_id"])

    leave = await leave_repository.update(db, leave, data)
    return await to_response(db, current_user.id, leave)


async def _decide(db: AsyncSession, current_user: User, leave_id: str, decision: str) -> LeaveResponse:
    leave = await get_owned_or_404(leave_repository, db, current_user.id, leave_id, "Leave request")
    if leave.status != "pending":
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Leave request is already {leave.status}"
        )

    leave = await leave_repository.update(db, leave, {
        "status": decision,
        "approved_by": current_user.email,
        "approved_at": utils.now_local(),
    })
    logger.info(f"Leave {leave_id} {decision} by {current_user.email}")
    return await to_response(db, current_user.id, leave)


@router.post("/{leave_id}/approve", response_model=LeaveResponse)
@log_requests
async def approve_leave(
    request: Request,
    leave_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return await _decide(db, current_user, leave_id, "approved")


@router.post("/{leave_id}/reject", response_model=LeaveResponse)
@log_requests
async def reject_leave(
    request: Request,
    leave_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return await _decide(db, current_user, leave_id, "rejected")


@router.delete("/{leave_id}", response_model=ResponseMessage)
@log_requests
async def delete_leave(
    request: Request,
    leave_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    leave = await get_owned_or_404(leave_repository, db, current_user.id, leave_id, "Leave request")
    await leave_repository.delete(db, leave)
    return ResponseMessage(message="Leave request deleted successfully")
