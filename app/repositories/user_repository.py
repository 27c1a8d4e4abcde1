"""
User repository: read-only access to profile reference data.

The ledger never writes users; it looks them up to validate swipe targets,
to render public profiles and to select feed candidates.
"""

from __future__ import annotations
from typing import Iterable
from uuid import UUID
from sqlalchemy import select, or_, cast, String
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import json
import logging

from app.models.user import User
from app.schemas.feed import FeedFilters, ANY_FILTER_VALUE
from .base import BaseRepository

logger = logging.getLogger(__name__)


def _skills_overlap_clause(skills: list[str]):
    """
    Match users whose JSON ``skills`` list shares at least one entry with ``skills``.

    Each skill is searched as its JSON-encoded form (quotes included) inside
    the serialized list, which matches whole elements only and renders the
    same on PostgreSQL and SQLite.
    """
    skills_text = cast(User.skills, String)
    return or_(*[skills_text.contains(json.dumps(skill), autoescape=True) for skill in skills])


class UserRepository(BaseRepository[User]):
    """Repository for User lookups and feed candidate selection."""

    def __init__(self):
        super().__init__(User)

    async def find_feed_candidates(
        self,
        db: AsyncSession,
        user_id: UUID,
        exclude_ids: Iterable[UUID],
        filters: FeedFilters,
        offset: int,
        limit: int
    ) -> list[User]:
        """
        Select complete profiles a user has not exchanged any signal with.

        Args:
            db: Active database session
            user_id: The viewer (always excluded)
            exclude_ids: Users already connected to the viewer by any signal
            filters: Normalized feed filters
            offset: Rows to skip
            limit: Rows to return (callers ask for one extra to detect more pages)

        Returns:
            Candidates ordered by (created_at, id)
        """
        try:
            excluded = set(exclude_ids)
            excluded.add(user_id)

            stmt = select(User).where(
                User.id.notin_(excluded),
                User.is_profile_complete == True,
            )

            if filters.skills:
                stmt = stmt.where(_skills_overlap_clause(filters.skills))
            if filters.experience and filters.experience != ANY_FILTER_VALUE:
                stmt = stmt.where(User.experience == filters.experience)
            if filters.role and filters.role != ANY_FILTER_VALUE:
                stmt = stmt.where(User.role == filters.role)
            if filters.availability and filters.availability != ANY_FILTER_VALUE:
                stmt = stmt.where(User.availability == filters.availability)
            if filters.location:
                stmt = stmt.where(User.location.icontains(filters.location, autoescape=True))

            # created_at is assigned once at insert; id breaks ties
            stmt = stmt.order_by(User.created_at, User.id).offset(offset).limit(limit)

            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error selecting feed candidates for user {user_id}: {e}")
            raise
