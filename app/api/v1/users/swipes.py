from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Optional
from app.core.database import get_db
from app.api.deps import get_complete_profile_user
from app.models.user import User
from app.schemas.connection_request import (
    SwipeIntent,
    SwipeLeftResponse,
    SwipeRequest,
    SwipeRightResponse,
)
from app.services.connection_service import ConnectionService

router = APIRouter()


def _target_id(swipe_data: Optional[SwipeRequest]) -> Any:
    # A missing body is reported like a missing id (400)
    return swipe_data.to_user_id if swipe_data else None


@router.post("/swipe-left", response_model=SwipeLeftResponse)
async def swipe_left(
    swipe_data: Optional[SwipeRequest] = None,
    current_user: User = Depends(get_complete_profile_user),
    db: AsyncSession = Depends(get_db)
):
    """Mark a user as not interesting (they leave my feed for good)"""
    service = ConnectionService()
    result = await service.register_signal(db, current_user, _target_id(swipe_data), SwipeIntent.LEFT)
    return {"message": result.message, "data": result.request}


@router.post("/swipe-right", response_model=SwipeRightResponse)
async def swipe_right(
    swipe_data: Optional[SwipeRequest] = None,
    current_user: User = Depends(get_complete_profile_user),
    db: AsyncSession = Depends(get_db)
):
    """Express interest in a user; reports whether this completed a match"""
    service = ConnectionService()
    result = await service.register_signal(db, current_user, _target_id(swipe_data), SwipeIntent.RIGHT)
    return {"message": result.message, "data": result.request, "matched": result.matched}
