from pydantic import BaseModel
from typing import Optional, List
import uuid


class UserPublic(BaseModel):
    """
    Public-safe projection of a user.

    This field list is the only shape in which the ledger returns user data;
    email and timestamps are deliberately absent.
    """
    id: uuid.UUID
    full_name: Optional[str] = None
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    about: Optional[str] = None
    skills: Optional[List[str]] = None
    role: Optional[str] = None
    experience: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    is_premium: bool = False
    is_profile_complete: bool = False

    class Config:
        from_attributes = True


class UserProfileResponse(BaseModel):
    data: UserPublic
