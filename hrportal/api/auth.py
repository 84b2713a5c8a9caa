# hrportal/api/auth.py
import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.core.config import settings
from hrportal.core.database import get_db, get_user_by_email, get_user_by_id, settings_repository
from hrportal.core.decorators import log_execution_time, log_requests, rate_limit
from hrportal.core.security import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    RESET_PURPOSE,
    Token,
    authenticate_user,
    create_access_token,
    create_reset_token,
    decode_token,
    get_current_active_user,
    get_password_hash,
    reset_token_matches,
    verify_password,
)
from hrportal.models.model import User
from hrportal.schemas.schema import (
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ResponseMessage,
    SignInRequest,
    SignUpRequest,
    UpdatePasswordRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["authentication"],
    responses={401: {"description": "Unauthorized"}},
)

RESET_LINK_MESSAGE = "If the account exists, a password reset link has been sent."


def send_reset_link(email: str, link: str) -> None:
    """Hand the reset link to the outgoing mail transport"""
    logger.info(f"Password reset link issued for {email}: {link}")


def _issue_token(user: User) -> dict:
    access_token_expires = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": user.id}, expires_delta=access_token_expires
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/auth/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@log_requests
@log_execution_time
@rate_limit(calls=10, period=60)
async def sign_up(
    request: Request,
    payload: SignUpRequest,
    db: AsyncSession = Depends(get_db),
):
    email = payload.email.lower()
    if await get_user_by_email(db, email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists"
        )

    try:
        user = User(
            email=email,
            hashed_password=get_password_hash(payload.password),
            full_name=payload.full_name,
            is_active=True,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)

        first_name, _, last_name = (payload.full_name or "").partition(" ")
        await settings_repository.create(db, user.id, {
            "email": email,
            "first_name": first_name or None,
            "last_name": last_name or None,
        })

        logger.info(f"Account created: {email}")
        return UserResponse.model_validate(user)
    except Exception as e:
        logger.error(f"Sign up failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Sign up failed"
        )


@router.post("/token", response_model=Token)
@log_requests
@log_execution_time
@rate_limit(calls=10, period=60)
async def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    user = await authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")

    return _issue_token(user)


@router.post("/auth/signin", response_model=Token)
@log_requests
@log_execution_time
@rate_limit(calls=10, period=60)
async def sign_in(
    request: Request,
    payload: SignInRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await authenticate_user(db, payload.email, payload.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")

    return _issue_token(user)


@router.post("/auth/forgot-password", response_model=ResponseMessage)
@log_requests
@rate_limit(calls=5, period=60)
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await get_user_by_email(db, payload.email)
    if user and user.is_active:
        token = create_reset_token(user)
        send_reset_link(user.email, f"{settings.PASSWORD_RESET_URL}&token={token}")
    else:
        logger.info(f"Password reset requested for unknown account {payload.email}")

    return ResponseMessage(message=RESET_LINK_MESSAGE)


@router.post("/auth/reset-password", response_model=ResponseMessage)
@log_requests
@rate_limit(calls=10, period=60)
async def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        token_data = decode_token(payload.token, expected_purpose=RESET_PURPOSE)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token"
        )

    user = await get_user_by_id(db, token_data.user_id)
    if user is None or not reset_token_matches(token_data, user):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token"
        )

    user.hashed_password = get_password_hash(payload.password)
    await db.flush()
    logger.info(f"Password reset for {user.email}")
    return ResponseMessage(message="Password updated")


@router.post("/auth/update-password", response_model=ResponseMessage)
@log_requests
async def update_password(
    request: Request,
    payload: UpdatePasswordRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    if not verify_password(payload.current_password, current_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    current_user.hashed_password = get_password_hash(payload.password)
    await db.flush()
    return ResponseMessage(message="Password updated")


@router.get("/users/me", response_model=UserResponse)
@log_requests
@log_execution_time
async def read_users_me(
    request: Request,
    current_user: User = Depends(get_current_active_user)
):
    """
    Get current user
    """
    return UserResponse.model_validate(current_user)
