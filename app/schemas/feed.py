from pydantic import BaseModel, Field
from typing import Optional, List
from app.schemas.user import UserPublic

# Sentinel meaning "no filter" for the equality filters
ANY_FILTER_VALUE = "any"


class FeedFilters(BaseModel):
    """Normalized feed filters; empty values mean the filter is off"""
    skills: List[str] = Field(default_factory=list)
    experience: Optional[str] = None
    role: Optional[str] = None
    availability: Optional[str] = None
    location: Optional[str] = None


class FeedResponse(BaseModel):
    data: List[UserPublic]
    page: int
    limit: int
    has_more: bool
