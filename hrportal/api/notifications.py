import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.deps import get_owned_or_404
from hrportal.core.database import get_db, notification_repository
from hrportal.core.decorators import log_execution_time, log_requests
from hrportal.core.security import get_current_active_user
from hrportal.models.model import User
from hrportal.schemas.schema import (
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
    ResponseMessage,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/notifications",
    tags=["notifications"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[NotificationResponse])
@log_requests
@log_execution_time
async def get_notifications(
    request: Request,
    active_only: bool = False,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        filters = {"is_active": True} if active_only else None
        notifications = await notification_repository.get_all(db, current_user.id, limit=None, filters=filters)
        return [NotificationResponse.model_validate(item) for item in notifications]
    except Exception as e:
        logger.error(f"Error fetching notifications: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notifications"
        )


@router.post("/", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
@log_requests
async def create_notification(
    request: Request,
    payload: NotificationCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        notification = await notification_repository.create(db, current_user.id, payload.model_dump())
        return NotificationResponse.model_validate(notification)
    except Exception as e:
        logger.error(f"Error saving notification: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save notification"
        )


@router.get("/{notification_id}", response_model=NotificationResponse)
@log_requests
async def get_notification(
    request: Request,
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    notification = await get_owned_or_404(
        notification_repository, db, current_user.id, notification_id, "Notification"
    )
    return NotificationResponse.model_validate(notification)


@router.put("/{notification_id}", response_model=NotificationResponse)
@log_requests
async def update_notification(
    request: Request,
    notification_id: str,
    payload: NotificationUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    notification = await get_owned_or_404(
        notification_repository, db, current_user.id, notification_id, "Notification"
    )

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    notification = await notification_repository.update(db, notification, data)
    return NotificationResponse.model_validate(notification)


@router.post("/{notification_id}/toggle", response_model=NotificationResponse)
@log_requests
async def toggle_notification(
    request: Request,
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    notification = await get_owned_or_404(
        notification_repository, db, current_user.id, notification_id, "Notification"
    )
    notification = await notification_repository.update(
        db, notification, {"is_active": not notification.is_active}
    )
    logger.info(f"Notification {notification_id} {'activated' if notification.is_active else 'deactivated'}")
    return NotificationResponse.model_validate(notification)


@router.delete("/{notification_id}", response_model=ResponseMessage)
@log_requests
async def delete_notification(
    request: Request,
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    notification = await get_owned_or_404(
        notification_repository, db, current_user.id, notification_id, "Notification"
    )
    await notification_repository.delete(db, notification)
    return ResponseMessage(message="Notification deleted successfully")
