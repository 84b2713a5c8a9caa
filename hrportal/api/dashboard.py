import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.holidays import upcoming
from hrportal.core.database import (
    attendance_repository,
    employee_repository,
    get_db,
    holiday_repository,
    leave_repository,
    work_log_repository,
)
from hrportal.core.decorators import log_execution_time, log_requests
from hrportal.core.security import get_current_active_user
from hrportal.core.utils import percentage, round_half_up, today
from hrportal.models.model import User
from hrportal.schemas.schema import AttendanceResponse, DashboardStats, WorkLogResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
)


@router.get("/", response_model=DashboardStats)
@log_requests
@log_execution_time
async def get_dashboard(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    owner_id = current_user.id
    day = today()

    try:
        total_employees = await employee_repository.count(db, owner_id)
        active_employees = await employee_repository.count(db, owner_id, filters={"status": "active"})

        todays_attendance = await attendance_repository.get_all(db, owner_id, limit=None, filters={"date": day})
        present_today = sum(1 for record in todays_attendance if record.status in ("present", "late"))

        todays_logs = await work_log_repository.get_all(db, owner_id, limit=None, filters={"date": day})
        active_tasks = await work_log_repository.count(db, owner_id, filters={"status": "in-progress"})
        recent_logs = await work_log_repository.get_all(db, owner_id, limit=5)

        pending_leaves = await leave_repository.count(db, owner_id, filters={"status": "pending"})
        holidays = await holiday_repository.get_all(db, owner_id, limit=None)
    except Exception as e:
        logger.error(f"Dashboard aggregation failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load dashboard"
        )

    return DashboardStats(
        total_employees=total_employees,
        active_employees=active_employees,
        present_today=present_today,
        attendance_rate=percentage(present_today, total_employees),
        hours_logged_today=round_half_up(sum(log.hours_spent for log in todays_logs)),
        active_tasks=active_tasks,
        pending_leaves=pending_leaves,
        upcoming_holidays=upcoming(holidays, 5),
        todays_attendance=[AttendanceResponse.from_model(record) for record in todays_attendance],
        recent_work_logs=[WorkLogResponse.from_model(log) for log in recent_logs],
    )
