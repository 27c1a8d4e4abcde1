from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.core.database import get_db
from app.core.exceptions import AuthenticationError, ProfileIncompleteError
from app.core.security import verify_token
from app.models.user import User
from typing import Optional
import uuid

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the bearer token"""
    if credentials is None:
        raise AuthenticationError()

    user_id = verify_token(credentials.credentials, "access")
    if user_id is None:
        raise AuthenticationError()

    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        raise AuthenticationError()

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()
    if user is None:
        raise AuthenticationError()

    return user


async def get_complete_profile_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """Authenticated user whose profile is complete (required to swipe and browse)"""
    if not current_user.is_profile_complete:
        raise ProfileIncompleteError()
    return current_user
