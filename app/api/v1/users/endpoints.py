from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.user import UserProfileResponse
from app.services.user_service import UserService

router = APIRouter()


# NOTE: this catch-all path must be included after every other /user/* router
@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user_profile(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """View another user's public profile (400 on a malformed id, 404 if absent)"""
    service = UserService()
    user = await service.get_public_profile(db, user_id)
    return {"data": user}
