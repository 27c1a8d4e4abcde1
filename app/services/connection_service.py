"""
Connection service: swipe reconciliation and the connection query views.

Every swipe writes at most one row for the ordered pair (actor -> target).
A right swipe that finds the reciprocal row INTERESTED turns both rows
ACCEPTED in the same transaction, which is how a match is stored.

Concurrency is handled by the store, not by locks:
- the unique (from_user_id, to_user_id) constraint makes a duplicate insert
  fail with DuplicateSignalError, after which the existing row is re-read
  and handled like any repeated swipe;
- the accept flip is one UPDATE guarded on status INTERESTED, so applying
  it twice changes nothing;
- after committing a right swipe the reciprocal row is read again, so two
  users swiping right on each other at the same instant still match.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.exceptions import DuplicateSignalError, InvalidIdentifierError, UserNotFoundError
from app.models.connection_request import ConnectionRequest, ConnectionStatus
from app.models.user import User
from app.repositories.connection_request_repository import ConnectionRequestRepository
from app.repositories.user_repository import UserRepository
from app.schemas.connection_request import SwipeIntent
from app.services.user_service import parse_user_id

logger = logging.getLogger(__name__)


@dataclass
class SignalResult:
    """Outcome of a swipe."""
    request: ConnectionRequest
    matched: bool
    created: bool
    message: str


class ConnectionService:
    """
    Service for registering swipes and reading connection state.

    Coordinates the connection request and user repositories and owns the
    transaction boundaries of a swipe.
    """

    MESSAGE_SWIPED_LEFT = "Swiped left"
    MESSAGE_ALREADY_SWIPED = "Already swiped"
    MESSAGE_MATCH = "It's a match!"
    MESSAGE_REQUEST_SENT = "Connection request sent"

    def __init__(
        self,
        connection_repo: Optional[ConnectionRequestRepository] = None,
        user_repo: Optional[UserRepository] = None
    ):
        """
        Initialize service with repositories.

        Args:
            connection_repo: ConnectionRequestRepository instance (creates new if None)
            user_repo: UserRepository instance (creates new if None)
        """
        self.connection_repo = connection_repo or ConnectionRequestRepository()
        self.user_repo = user_repo or UserRepository()

    async def register_signal(
        self,
        db: AsyncSession,
        actor: User,
        target_id: Any,
        intent: SwipeIntent
    ) -> SignalResult:
        """
        Record a swipe from ``actor`` on ``target_id`` and reconcile matches.

        Args:
            db: Active database session
            actor: Authenticated user performing the swipe
            target_id: Raw identifier of the swiped user
            intent: LEFT (not interested) or RIGHT (interested)

        Returns:
            SignalResult with the actor's row and whether the pair is matched

        Raises:
            InvalidIdentifierError: Missing/malformed target or a self swipe
            UserNotFoundError: Target user does not exist

        Example:
            result = await service.register_signal(db, user, other_id, SwipeIntent.RIGHT)
            if result.matched:
                print("It's a match!")
        """
        intent = SwipeIntent(intent)
        actor_id = actor.id
        target_uuid = parse_user_id(target_id, "to_user_id")

        if target_uuid == actor_id:
            raise InvalidIdentifierError("You cannot swipe on yourself")

        if not await self.user_repo.exists(db, target_uuid):
            raise UserNotFoundError()

        existing = await self.connection_repo.get_pair(db, actor_id, target_uuid)
        if existing is not None:
            result = await self._resolve_existing(db, existing, actor_id, target_uuid, intent)
        elif intent == SwipeIntent.LEFT:
            result = await self._register_disinterest(db, actor_id, target_uuid)
        else:
            result = await self._register_interest(db, actor_id, target_uuid)

        logger.info(
            "Signal registered",
            extra={
                "actor_id": str(actor_id),
                "target_id": str(target_uuid),
                "intent": intent.value,
                "matched": result.matched,
                "created": result.created,
            },
        )
        return result

    async def _register_disinterest(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID
    ) -> SignalResult:
        try:
            request = await self.connection_repo.create_if_absent(
                db, actor_id, target_id, ConnectionStatus.IGNORED
            )
        except DuplicateSignalError:
            return await self._resolve_duplicate(db, actor_id, target_id, SwipeIntent.LEFT)

        await db.commit()
        await db.refresh(request)

        return SignalResult(request, matched=False, created=True, message=self.MESSAGE_SWIPED_LEFT)

    async def _register_interest(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID
    ) -> SignalResult:
        reciprocal = await self.connection_repo.get_pair(
            db, target_id, actor_id, ConnectionStatus.INTERESTED
        )

        try:
            request = await self.connection_repo.create_if_absent(
                db, actor_id, target_id, ConnectionStatus.INTERESTED
            )
        except DuplicateSignalError:
            return await self._resolve_duplicate(db, actor_id, target_id, SwipeIntent.RIGHT)

        if reciprocal is not None:
            # Insert and flip commit together
            await self._accept_pair(db, actor_id, target_id)
        else:
            await db.commit()
            # The target may have swiped right between our read and our insert
            late_reciprocal = await self.connection_repo.get_pair(
                db, target_id, actor_id, ConnectionStatus.INTERESTED
            )
            if late_reciprocal is not None:
                await self._accept_pair(db, actor_id, target_id)

        await db.refresh(request)
        matched = request.status == ConnectionStatus.ACCEPTED

        return SignalResult(
            request,
            matched=matched,
            created=True,
            message=self.MESSAGE_MATCH if matched else self.MESSAGE_REQUEST_SENT,
        )

    async def _resolve_existing(
        self,
        db: AsyncSession,
        existing: ConnectionRequest,
        actor_id: UUID,
        target_id: UUID,
        intent: SwipeIntent
    ) -> SignalResult:
        """Repeated swipe: return the stored row and report current match state."""
        if intent == SwipeIntent.LEFT:
            return SignalResult(existing, matched=False, created=False, message=self.MESSAGE_ALREADY_SWIPED)

        if existing.status == ConnectionStatus.INTERESTED:
            reciprocal = await self.connection_repo.get_pair(
                db, target_id, actor_id, ConnectionStatus.INTERESTED
            )
            if reciprocal is not None:
                # Mutual interest that was never flipped; complete it now
                await self._accept_pair(db, actor_id, target_id)
                await db.refresh(existing)

        matched = existing.status == ConnectionStatus.ACCEPTED
        return SignalResult(existing, matched=matched, created=False, message=self.MESSAGE_ALREADY_SWIPED)

    async def _resolve_duplicate(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID,
        intent: SwipeIntent
    ) -> SignalResult:
        """A concurrent request inserted the row first; continue idempotently."""
        existing = await self.connection_repo.get_pair(db, actor_id, target_id)
        if existing is None:
            # The constraint that fired was not pair uniqueness (the target vanished)
            logger.warning(f"Insert {actor_id} -> {target_id} rejected but no row exists")
            raise UserNotFoundError()

        logger.info(f"Concurrent swipe {actor_id} -> {target_id} resolved to existing row {existing.id}")
        return await self._resolve_existing(db, existing, actor_id, target_id, intent)

    async def _accept_pair(self, db: AsyncSession, actor_id: UUID, target_id: UUID) -> int:
        updated = await self.connection_repo.set_status_for_pair(
            db, actor_id, target_id, ConnectionStatus.ACCEPTED
        )
        await db.commit()
        logger.info(f"Match between {actor_id} and {target_id} ({updated} rows accepted)")
        return updated

    async def list_received(self, db: AsyncSession, user: User) -> list[ConnectionRequest]:
        """Pending requests other users sent to ``user``."""
        return await self.connection_repo.list_received(db, user.id)

    async def list_sent(self, db: AsyncSession, user: User) -> list[ConnectionRequest]:
        """Pending requests ``user`` sent that are still unanswered."""
        return await self.connection_repo.list_sent(db, user.id)

    async def list_connections(self, db: AsyncSession, user: User) -> list[User]:
        """
        Users ``user`` has matched with.

        A match is stored as two ACCEPTED rows; each counterpart is returned once.
        """
        rows = await self.connection_repo.list_accepted(db, user.id)

        connections: list[User] = []
        seen: set[UUID] = set()
        for row in rows:
            other = row.to_user if row.from_user_id == user.id else row.from_user
            if other is None or other.id in seen:
                continue
            seen.add(other.id)
            connections.append(other)
        return connections
