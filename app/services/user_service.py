"""
User lookups used by the ledger: identifier parsing and public profiles.
"""

from __future__ import annotations
from typing import Any, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.exceptions import InvalidIdentifierError, UserNotFoundError
from app.models.user import User
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def parse_user_id(raw: Any, field_name: str = "user_id") -> UUID:
    """
    Parse a client supplied user identifier.

    Raises:
        InvalidIdentifierError: If the value is missing or not a UUID
    """
    if isinstance(raw, UUID):
        return raw
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise InvalidIdentifierError(f"{field_name} is required")
    if not isinstance(raw, str):
        raise InvalidIdentifierError(f"Invalid {field_name}")
    try:
        return UUID(str(raw).strip())
    except ValueError:
        raise InvalidIdentifierError(f"Invalid {field_name}")


class UserService:
    """Read-only access to other users' profiles."""

    def __init__(self, user_repo: Optional[UserRepository] = None):
        self.user_repo = user_repo or UserRepository()

    async def get_public_profile(self, db: AsyncSession, raw_user_id: Any) -> User:
        """
        Load the user behind ``raw_user_id`` for the public profile view.

        Raises:
            InvalidIdentifierError: Malformed identifier (400)
            UserNotFoundError: No such user (404)
        """
        user_id = parse_user_id(raw_user_id, "userId")
        user = await self.user_repo.get(db, user_id)
        if user is None:
            raise UserNotFoundError()
        return user
