import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.deps import ensure_employee, get_owned_or_404
from hrportal.core.config import settings
from hrportal.core.database import attendance_repository, employee_repository, get_db
from hrportal.core.decorators import log_execution_time, log_requests
from hrportal.core.security import get_current_active_user
from hrportal.core.utils import current_time_string, is_late, today
from hrportal.models.model import AttendanceRecord, User
from hrportal.schemas.schema import (
    AttendanceCreate,
    AttendanceResponse,
    AttendanceSummary,
    AttendanceUpdate,
    CheckInRequest,
    ResponseMessage,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/attendance",
    tags=["attendance"],
    responses={404: {"description": "Not found"}},
)


def summarize(records, day: date, total_employees: int) -> AttendanceSummary:
    statuses = [record.status for record in records]
    return AttendanceSummary(
        date=day,
        total_employees=total_employees,
        checked_in=sum(1 for record in records if record.check_in),
        checked_out=sum(1 for record in records if record.check_out),
        present=statuses.count("present"),
        late=statuses.count("late"),
        absent=statuses.count("absent"),
        half_day=statuses.count("half-day"),
        wfo=sum(1 for record in records if record.work_location == "WFO"),
        wfh=sum(1 for record in records if record.work_location == "WFH"),
        records=[AttendanceResponse.from_model(record) for record in records],
    )


@router.get("/", response_model=List[AttendanceResponse])
@log_requests
@log_execution_time
async def get_attendance(
    request: Request,
    day: Optional[date] = Query(None, alias="date"),
    employee_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 200,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    filters = {"date": day}
    if employee_id and employee_id != "all":
        filters["employee_id"] = employee_id

    try:
        records = await attendance_repository.get_all(db, current_user.id, skip, limit, filters)
        return [AttendanceResponse.from_model(record) for record in records]
    except Exception as e:
        logger.error(f"Attendance retrieval failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve attendance"
        )


@router.get("/today", response_model=AttendanceSummary)
@log_requests
async def get_today_summary(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    day = today()
    records = await attendance_repository.get_all(db, current_user.id, limit=None, filters={"date": day})
    total_employees = await employee_repository.count(db, current_user.id, filters={"status": "active"})
    return summarize(records, day, total_employees)


@router.post("/check-in", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
@log_requests
@log_execution_time
async def check_in(
    request: Request,
    payload: CheckInRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    employee = await ensure_employee(db, current_user.id, payload.employee_id)
    if employee.status != "active":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive employees cannot check in"
        )

    day = today()
    existing = await attendance_repository.count(
        db, current_user.id, filters={"employee_id": employee.id, "date": day}
    )
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Employee already checked in today"
        )

    time_string = current_time_string()
    record = await attendance_repository.create(db, current_user.id, {
        "employee_id": employee.id,
        "date": day,
        "check_in": time_string,
        "status": "late" if is_late(time_string, settings.LATE_AFTER) else "present",
        "work_location": payload.work_location,
        "notes": payload.notes,
    })
    logger.info(f"Check-in {employee.id} at {time_string} ({payload.work_location})")
    return AttendanceResponse.from_model(record)


@router.post("/{record_id}/check-out", response_model=AttendanceResponse)
@log_requests
@log_execution_time
async def check_out(
    request: Request,
    record_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    record = await get_owned_or_404(attendance_repository, db, current_user.id, record_id, "Attendance record")
    if not record.check_in:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot check out without a check-in"
        )
    if record.check_out:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already checked out"
        )

    time_string = current_time_string()
    record = await attendance_repository.update(db, record, {"check_out": time_string})
    logger.info(f"Check-out {record.employee_id} at {time_string}")
    return AttendanceResponse.from_model(record)


@router.post("/", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
@log_requests
@log_execution_time
async def create_attendance(
    request: Request,
    payload: AttendanceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    await ensure_employee(db, current_user.id, payload.employee_id)

    existing = await attendance_repository.count(
        db, current_user.id, filters={"employee_id": payload.employee_id, "date": payload.date}
    )
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Attendance for {payload.date} already recorded"
        )

    try:
        record = await attendance_repository.create(db, current_user.id, payload.model_dump())
        return AttendanceResponse.from_model(record)
    except Exception as e:
        logger.error(f"Attendance creation failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save attendance"
        )


@router.get("/{record_id}", response_model=AttendanceResponse)
@log_requests
async def get_attendance_record(
    request: Request,
    record_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    record = await get_owned_or_404(attendance_repository, db, current_user.id, record_id, "Attendance record")
    return AttendanceResponse.from_model(record)


@router.put("/{record_id}", response_model=AttendanceResponse)
@log_requests
@log_execution_time
async def update_attendance(
    request: Request,
    record_id: str,
    payload: AttendanceUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    record = await get_owned_or_404(attendance_repository, db, current_user.id, record_id, "Attendance record")

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    if "date" in data:
        clash = await attendance_repository.count(
            db, current_user.id,
            filters={"employee_id": record.employee_id, "date": data["date"]},
            conditions=[AttendanceRecord.id != record.id],
        )
        if clash:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Attendance for {data['date']} already recorded"
            )

    try:
        record = await attendance_repository.update(db, record, data)
        return AttendanceResponse.from_model(record)
    except Exception as e:
        logger.error(f"Attendance update failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update attendance"
        )


@router.delete("/{record_id}", response_model=ResponseMessage)
@log_requests
async def delete_attendance(
    request: Request,
    record_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    record = await get_owned_or_404(attendance_repository, db, current_user.id, record_id, "Attendance record")
    await attendance_repository.delete(db, record)
    return ResponseMessage(message="Attendance record deleted successfully")
