"""
Feed service: the pool of users a member can still swipe on.

Anyone the member has exchanged a signal with, in either direction and in
any status, is left out for good. The exclusion set is rebuilt from the
ledger on every request and never cached.
"""

from __future__ import annotations
from typing import Any, Iterable, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.config import settings
from app.models.user import User
from app.repositories.connection_request_repository import ConnectionRequestRepository
from app.repositories.user_repository import UserRepository
from app.schemas.feed import FeedFilters, FeedResponse
from app.schemas.user import UserPublic
from app.utils.pagination import calculate_offset, clamp_limit, max_page_for, parse_positive_int
from app.utils.query_params import normalize_skills, normalize_string

logger = logging.getLogger(__name__)


class FeedService:
    """Builds paginated, filtered candidate pages for the swipe feed."""

    def __init__(
        self,
        connection_repo: Optional[ConnectionRequestRepository] = None,
        user_repo: Optional[UserRepository] = None,
        default_limit: Optional[int] = None,
        max_limit: Optional[int] = None
    ):
        self.connection_repo = connection_repo or ConnectionRequestRepository()
        self.user_repo = user_repo or UserRepository()
        self.default_limit = default_limit or settings.feed_default_limit
        self.max_limit = max_limit or settings.feed_max_limit

    def build_filters(
        self,
        skills: Optional[Union[str, Iterable[Any]]] = None,
        experience: Any = None,
        role: Any = None,
        availability: Any = None,
        location: Any = None
    ) -> FeedFilters:
        """Normalize raw query values; blank values switch a filter off."""
        return FeedFilters(
            skills=normalize_skills(skills),
            experience=normalize_string(experience) or None,
            role=normalize_string(role) or None,
            availability=normalize_string(availability) or None,
            location=normalize_string(location) or None,
        )

    async def get_feed(
        self,
        db: AsyncSession,
        user: User,
        filters: FeedFilters,
        page: Any = None,
        limit: Any = None
    ) -> FeedResponse:
        """
        Return one page of feed candidates for ``user``.

        Args:
            db: Active database session
            user: The viewer
            filters: Normalized filters (see build_filters)
            page: Raw page number; invalid or out-of-range values fall back to 1
            limit: Raw page size; invalid values fall back to the default, capped at max_limit

        Returns:
            FeedResponse with has_more computed from one extra fetched row
        """
        page_size = clamp_limit(parse_positive_int(limit, self.default_limit), self.max_limit)
        page_number = parse_positive_int(page, 1, max_value=max_page_for(page_size))

        exclude_ids = await self.connection_repo.get_counterpart_ids(db, user.id)

        candidates = await self.user_repo.find_feed_candidates(
            db,
            user_id=user.id,
            exclude_ids=exclude_ids,
            filters=filters,
            offset=calculate_offset(page_number, page_size),
            limit=page_size + 1,
        )

        has_more = len(candidates) > page_size
        page_items = candidates[:page_size]

        logger.debug(
            f"Feed for user {user.id}: page={page_number} limit={page_size} "
            f"excluded={len(exclude_ids)} returned={len(page_items)} has_more={has_more}"
        )

        return FeedResponse(
            data=[UserPublic.model_validate(candidate) for candidate in page_items],
            page=page_number,
            limit=page_size,
            has_more=has_more,
        )
