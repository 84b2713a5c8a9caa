# hrportal/core/security.py
import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.core.config import settings
from hrportal.core.database import get_db, get_user_by_email, get_user_by_id
from hrportal.models.model import User

logger = logging.getLogger(__name__)

# Security configuration
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
RESET_TOKEN_EXPIRE_MINUTES = settings.RESET_TOKEN_EXPIRE_MINUTES

ACCESS_PURPOSE = "access"
RESET_PURPOSE = "reset"

# Password context for hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 password bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


class Token(BaseModel):
    """Token schema"""
    access_token: str
    token_type: str


class TokenData(BaseModel):
    """Token data schema"""
    user_id: Optional[str] = None
    purpose: str = ACCESS_PURPOSE
    password_fingerprint: Optional[str] = None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify that the plain password matches the hashed password"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Get password hash"""
    return pwd_context.hash(password)


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Union[User, bool]:
    """Authenticate user"""
    user = await get_user_by_email(db, email)
    if not user:
        return False
    if not verify_password(password, user.hashed_password):
        return False
    return user


def password_fingerprint(hashed_password: str) -> str:
    """Short digest of the stored hash; it changes whenever the password does"""
    return hashlib.sha256(hashed_password.encode()).hexdigest()[:16]


def reset_token_matches(token_data: TokenData, user: User) -> bool:
    """A reset token is spent once the password it was issued against changes"""
    if not token_data.password_fingerprint:
        return False
    return hmac.compare_digest(token_data.password_fingerprint, password_fingerprint(user.hashed_password))


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    purpose: str = ACCESS_PURPOSE,
) -> str:
    """Create JWT access token"""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "iat": now, "purpose": purpose})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def create_reset_token(user: User) -> str:
    """Short-lived token that only the password reset endpoint accepts"""
    return create_access_token(
        {"sub": user.id, "email": user.email, "pwh": password_fingerprint(user.hashed_password)},
        expires_delta=timedelta(minutes=RESET_TOKEN_EXPIRE_MINUTES),
        purpose=RESET_PURPOSE,
    )


def decode_token(token: str, expected_purpose: str = ACCESS_PURPOSE) -> TokenData:
    """Decode a JWT, raising JWTError when it is invalid or meant for something else"""
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    user_id: Optional[str] = payload.get("sub")
    purpose = payload.get("purpose", ACCESS_PURPOSE)
    if user_id is None or purpose != expected_purpose:
        raise JWTError("Token subject or purpose mismatch")
    return TokenData(user_id=user_id, purpose=purpose, password_fingerprint=payload.get("pwh"))


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current user from JWT token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        token_data = decode_token(token)
    except JWTError:
        raise credentials_exception

    user = await get_user_by_id(db, token_data.user_id)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Get current active user"""
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user
