from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from app.core.database import get_db
from app.api.deps import get_complete_profile_user
from app.models.user import User
from app.schemas.feed import FeedResponse
from app.services.feed_service import FeedService

router = APIRouter()


@router.get("/feed", response_model=FeedResponse)
async def get_feed(
    # page/limit are parsed leniently by the service (bad values fall back to defaults)
    page: Optional[str] = Query(None, description="Page number (1-indexed)"),
    limit: Optional[str] = Query(None, description="Items per page (max 50)"),
    skills: Optional[List[str]] = Query(None, description="Skills; repeat the param or comma-separate"),
    experience: Optional[str] = Query(None, description="Exact experience level, or 'any'"),
    role: Optional[str] = Query(None, description="Exact role, or 'any'"),
    availability: Optional[str] = Query(None, description="Exact availability, or 'any'"),
    location: Optional[str] = Query(None, description="Case-insensitive substring of location"),
    current_user: User = Depends(get_complete_profile_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Discover users to swipe on.

    Excludes myself, incomplete profiles and everyone I already exchanged a
    signal with in either direction.
    """
    service = FeedService()
    filters = service.build_filters(
        skills=skills,
        experience=experience,
        role=role,
        availability=availability,
        location=location,
    )
    return await service.get_feed(db, current_user, filters, page=page, limit=limit)
