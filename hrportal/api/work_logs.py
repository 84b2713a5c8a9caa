import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.deps import ensure_employee, get_owned_or_404
from hrportal.core.database import get_db, work_log_repository
from hrportal.core.decorators import log_execution_time, log_requests
from hrportal.core.security import get_current_active_user
from hrportal.core.utils import round_half_up
from hrportal.models.model import User
from hrportal.schemas.schema import (
    ResponseMessage,
    WorkLogCreate,
    WorkLogResponse,
    WorkLogStatus,
    WorkLogSummary,
    WorkLogUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/work-logs",
    tags=["work logs"],
    responses={404: {"description": "Not found"}},
)


def summarize(logs) -> WorkLogSummary:
    total_hours = sum(log.hours_spent for log in logs)
    statuses = [log.status for log in logs]
    return WorkLogSummary(
        total_logs=len(logs),
        total_hours=round_half_up(total_hours),
        completed=statuses.count("completed"),
        in_progress=statuses.count("in-progress"),
        on_hold=statuses.count("on-hold"),
        average_hours=round_half_up(total_hours / len(logs)) if logs else 0,
    )


def _filters(employee_id: Optional[str], status_filter: Optional[str], day: Optional[date]) -> dict:
    filters = {"status": status_filter, "date": day}
    if employee_id and employee_id != "all":
        filters["employee_id"] = employee_id
    return filters


@router.get("/", response_model=List[WorkLogResponse])
@log_requests
@log_execution_time
async def get_work_logs(
    request: Request,
    employee_id: Optional[str] = None,
    status_filter: Optional[WorkLogStatus] = Query(None, alias="status"),
    day: Optional[date] = Query(None, alias="date"),
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        logs = await work_log_repository.get_all(
            db, current_user.id, skip, limit, _filters(employee_id, status_filter, day)
        )
        return [WorkLogResponse.from_model(log) for log in logs]
    except Exception as e:
        logger.error(f"Work log retrieval failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve work logs"
        )


@router.get("/summary", response_model=WorkLogSummary)
@log_requests
async def get_work_log_summary(
    request: Request,
    employee_id: Optional[str] = None,
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    logs = await work_log_repository.get_all(
        db, current_user.id, limit=None, filters=_filters(employee_id, None, day)
    )
    return summarize(logs)


@router.post("/", response_model=WorkLogResponse, status_code=status.HTTP_201_CREATED)
@log_requests
@log_execution_time
async def create_work_log(
    request: Request,
    payload: WorkLogCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    await ensure_employee(db, current_user.id, payload.employee_id)

    try:
        log = await work_log_repository.create(db, current_user.id, payload.model_dump())
        return WorkLogResponse.from_model(log)
    except Exception as e:
        logger.error(f"Work log creation failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save work log"
        )


@router.get("/{log_id}", response_model=WorkLogResponse)
@log_requests
async def get_work_log(
    request: Request,
    log_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    log = await get_owned_or_404(work_log_repository, db, current_user.id, log_id, "Work log")
    return WorkLogResponse.from_model(log)


@router.put("/{log_id}", response_model=WorkLogResponse)
@log_requests
async def update_work_log(
    request: Request,
    log_id: str,
    payload: WorkLogUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    log = await get_owned_or_404(work_log_repository, db, current_user.id, log_id, "Work log")

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )
    if "employee_id" in data:
        await ensure_employee(db, current_user.id, data["employee_id"])

    log = await work_log_repository.update(db, log, data)
    return WorkLogResponse.from_model(log)


@router.delete("/{log_id}", response_model=ResponseMessage)
@log_requests
async def delete_work_log(
    request: Request,
    log_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    log = await get_owned_or_404(work_log_repository, db, current_user.id, log_id, "Work log")
    await work_log_repository.delete(db, log)
    return ResponseMessage(message="Work log deleted successfully")
