import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.core.database import get_db, settings_repository
from hrportal.core.decorators import log_requests
from hrportal.core.security import get_current_active_user
from hrportal.models.model import User
from hrportal.schemas.schema import SettingsResponse, SettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/settings",
    tags=["settings"],
)


async def get_or_create_settings(db: AsyncSession, user: User):
    rows = await settings_repository.get_all(db, user.id, limit=1)
    if rows:
        return rows[0]

    logger.info(f"Creating default settings for {user.email}")
    return await settings_repository.create(db, user.id, {"email": user.email})


@router.get("/", response_model=SettingsResponse)
@log_requests
async def get_settings(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    user_settings = await get_or_create_settings(db, current_user)
    return SettingsResponse.model_validate(user_settings)


@router.put("/", response_model=SettingsResponse)
@log_requests
async def update_settings(
    request: Request,
    payload: SettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    data = payload.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    try:
        user_settings = await get_or_create_settings(db, current_user)
        user_settings = await settings_repository.update(db, user_settings, data)
        return SettingsResponse.model_validate(user_settings)
    except Exception as e:
        logger.error(f"Settings update failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save settings"
        )
