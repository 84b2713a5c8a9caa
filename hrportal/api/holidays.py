import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.deps import get_owned_or_404
from hrportal.core.database import get_db, holiday_repository
from hrportal.core.decorators import log_execution_time, log_requests
from hrportal.core.security import get_current_active_user
from hrportal.core.utils import holiday_in_year, today
from hrportal.models.model import User
from hrportal.schemas.schema import HolidayCreate, HolidayResponse, HolidayUpdate, ResponseMessage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/holidays",
    tags=["holidays"],
    responses={404: {"description": "Not found"}},
)


def calendar_for_year(holidays, year: int) -> List[HolidayResponse]:
    """Holidays falling in ``year``, recurring ones moved into it, ordered by date"""
    entries = []
    for holiday in holidays:
        if holiday.is_recurring and holiday.date.year <= year:
            occurs_on = holiday_in_year(holiday.date, year)
        elif holiday.date.year == year:
            occurs_on = holiday.date
        else:
            continue
        entry = HolidayResponse.model_validate(holiday)
        entry.occurs_on = occurs_on
        entries.append(entry)
    return sorted(entries, key=lambda entry: (entry.occurs_on, entry.name))


def upcoming(holidays, count: int) -> List[HolidayResponse]:
    start = today()
    entries = calendar_for_year(holidays, start.year) + calendar_for_year(holidays, start.year + 1)
    return [entry for entry in entries if entry.occurs_on >= start][:count]


@router.get("/", response_model=List[HolidayResponse])
@log_requests
@log_execution_time
async def get_holidays(
    request: Request,
    year: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        holidays = await holiday_repository.get_all(db, current_user.id, limit=None)
        if year is None:
            return [HolidayResponse.model_validate(holiday) for holiday in holidays]
        return calendar_for_year(holidays, year)
    except Exception as e:
        logger.error(f"Holiday retrieval failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve holidays"
        )


@router.get("/upcoming", response_model=List[HolidayResponse])
@log_requests
async def get_upcoming_holidays(
    request: Request,
    count: int = 5,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    holidays = await holiday_repository.get_all(db, current_user.id, limit=None)
    return upcoming(holidays, count)


@router.post("/", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
@log_requests
async def create_holiday(
    request: Request,
    payload: HolidayCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        holiday = await holiday_repository.create(db, current_user.id, payload.model_dump())
        return HolidayResponse.model_validate(holiday)
    except Exception as e:
        logger.error(f"Holiday creation failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save holiday"
        )


@router.get("/{holiday_id}", response_model=HolidayResponse)
@log_requests
async def get_holiday(
    request: Request,
    holiday_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    holiday = await get_owned_or_404(holiday_repository, db, current_user.id, holiday_id, "Holiday")
    return HolidayResponse.model_validate(holiday)


@router.put("/{holiday_id}", response_model=HolidayResponse)
@log_requests
async def update_holiday(
    request: Request,
    holiday_id: str,
    payload: HolidayUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    holiday = await get_owned_or_404(holiday_repository, db, current_user.id, holiday_id, "Holiday")

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    holiday = await holiday_repository.update(db, holiday, data)
    return HolidayResponse.model_validate(holiday)


@router.delete("/{holiday_id}", response_model=ResponseMessage)
@log_requests
async def delete_holiday(
    request: Request,
    holiday_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    holiday = await get_owned_or_404(holiday_repository, db, current_user.id, holiday_id, "Holiday")
    await holiday_repository.delete(db, holiday)
    return ResponseMessage(message="Holiday deleted successfully")
