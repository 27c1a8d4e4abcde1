"""
Connection request repository: the durable store behind the ledger.

Besides plain lookups this module owns the two writes the reconciler
relies on for correctness:

- ``create_if_absent`` inserts inside a SAVEPOINT so a unique-constraint
  violation on the ordered pair rolls back only that insert and surfaces
  as ``DuplicateSignalError``.
- ``set_status_for_pair`` flips both directional rows of a pair with one
  UPDATE statement, so no reader ever sees half a match.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy import select, update, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from app.core.exceptions import DuplicateSignalError
from app.models.connection_request import ConnectionRequest, ConnectionStatus
from .base import BaseRepository

logger = logging.getLogger(__name__)


def _pair_clause(user_a_id: UUID, user_b_id: UUID):
    """Both directions of an unordered pair."""
    return or_(
        and_(ConnectionRequest.from_user_id == user_a_id, ConnectionRequest.to_user_id == user_b_id),
        and_(ConnectionRequest.from_user_id == user_b_id, ConnectionRequest.to_user_id == user_a_id),
    )


class ConnectionRequestRepository(BaseRepository[ConnectionRequest]):
    """
    Repository for ConnectionRequest rows.

    Provides methods for:
    - Looking up rows by ordered pair and status
    - Inserting a row once per ordered pair
    - Flipping a pair to ACCEPTED atomically
    - Reading the query views (received, sent, accepted)
    - Collecting everyone a user has exchanged a signal with
    """

    def __init__(self):
        super().__init__(ConnectionRequest)

    async def find(
        self,
        db: AsyncSession,
        from_user_id: Optional[UUID] = None,
        to_user_id: Optional[UUID] = None,
        status: Optional[ConnectionStatus] = None
    ) -> list[ConnectionRequest]:
        """
        Find rows matching every provided filter.

        Args:
            db: Active database session
            from_user_id: Optional sender filter
            to_user_id: Optional recipient filter
            status: Optional status filter

        Returns:
            Matching rows, oldest first
        """
        try:
            stmt = select(ConnectionRequest)
            if from_user_id is not None:
                stmt = stmt.where(ConnectionRequest.from_user_id == from_user_id)
            if to_user_id is not None:
                stmt = stmt.where(ConnectionRequest.to_user_id == to_user_id)
            if status is not None:
                stmt = stmt.where(ConnectionRequest.status == ConnectionStatus(status).value)
            stmt = stmt.order_by(ConnectionRequest.created_at, ConnectionRequest.id)

            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error finding connection requests from={from_user_id} to={to_user_id}: {e}")
            raise

    async def get_pair(
        self,
        db: AsyncSession,
        from_user_id: UUID,
        to_user_id: UUID,
        status: Optional[ConnectionStatus] = None
    ) -> Optional[ConnectionRequest]:
        """
        Get the row for one ordered pair, optionally only if it has ``status``.

        Example:
            reciprocal = await repo.get_pair(db, target_id, actor_id, ConnectionStatus.INTERESTED)
            if reciprocal:
                print("They already like you")
        """
        try:
            stmt = select(ConnectionRequest).where(
                ConnectionRequest.from_user_id == from_user_id,
                ConnectionRequest.to_user_id == to_user_id,
            )
            if status is not None:
                stmt = stmt.where(ConnectionRequest.status == ConnectionStatus(status).value)

            result = await db.execute(stmt)
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error(f"Error fetching connection request {from_user_id} -> {to_user_id}: {e}")
            raise

    async def create_if_absent(
        self,
        db: AsyncSession,
        from_user_id: UUID,
        to_user_id: UUID,
        status: ConnectionStatus
    ) -> ConnectionRequest:
        """
        Insert the row for an ordered pair.

        Args:
            db: Active database session
            from_user_id: Sender of the signal
            to_user_id: Recipient of the signal
            status: Initial status (INTERESTED or IGNORED)

        Returns:
            The new row, flushed but not committed

        Raises:
            DuplicateSignalError: A row for this ordered pair already exists
        """
        request = ConnectionRequest(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            status=ConnectionStatus(status).value,
        )
        try:
            async with db.begin_nested():
                db.add(request)
        except IntegrityError as e:
            logger.info(
                f"Duplicate connection request {from_user_id} -> {to_user_id} rejected by store: {e.orig}"
            )
            raise DuplicateSignalError(from_user_id, to_user_id) from e

        await db.refresh(request)
        return request

    async def set_status_for_pair(
        self,
        db: AsyncSession,
        user_a_id: UUID,
        user_b_id: UUID,
        status: ConnectionStatus,
        from_status: ConnectionStatus = ConnectionStatus.INTERESTED
    ) -> int:
        """
        Move both directional rows of a pair from ``from_status`` to ``status``.

        Runs as a single UPDATE. Rows in any other state (e.g. IGNORED) are
        left untouched, so a repeated flip updates nothing.

        Returns:
            Number of rows updated (2 for a fresh match, 0 if already applied)
        """
        try:
            stmt = (
                update(ConnectionRequest)
                .where(
                    _pair_clause(user_a_id, user_b_id),
                    ConnectionRequest.status == ConnectionStatus(from_status).value,
                )
                .values(status=ConnectionStatus(status).value)
            )
            result = await db.execute(stmt)
            return result.rowcount

        except SQLAlchemyError as e:
            logger.error(f"Error setting status {status} for pair {user_a_id} <-> {user_b_id}: {e}")
            raise

    async def get_counterpart_ids(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> set[UUID]:
        """
        Every user id on either side of any row involving ``user_id``.

        Status is ignored on purpose: one signal in either direction hides
        the pair from each other's feed for good. The set includes
        ``user_id`` itself whenever at least one row exists.
        """
        try:
            stmt = select(ConnectionRequest.from_user_id, ConnectionRequest.to_user_id).where(
                or_(
                    ConnectionRequest.from_user_id == user_id,
                    ConnectionRequest.to_user_id == user_id,
                )
            )
            result = await db.execute(stmt)

            counterpart_ids: set[UUID] = set()
            for from_user_id, to_user_id in result.all():
                counterpart_ids.add(from_user_id)
                counterpart_ids.add(to_user_id)
            return counterpart_ids

        except SQLAlchemyError as e:
            logger.error(f"Error collecting counterpart ids for user {user_id}: {e}")
            raise

    async def list_received(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> list[ConnectionRequest]:
        """Pending requests sent to ``user_id``, with the sender loaded."""
        try:
            stmt = (
                select(ConnectionRequest)
                .where(
                    ConnectionRequest.to_user_id == user_id,
                    ConnectionRequest.status == ConnectionStatus.INTERESTED.value,
                )
                .options(selectinload(ConnectionRequest.from_user))
                .order_by(ConnectionRequest.created_at.desc(), ConnectionRequest.id)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching received requests for user {user_id}: {e}")
            raise

    async def list_sent(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> list[ConnectionRequest]:
        """Pending requests sent by ``user_id``, with the recipient loaded."""
        try:
            stmt = (
                select(ConnectionRequest)
                .where(
                    ConnectionRequest.from_user_id == user_id,
                    ConnectionRequest.status == ConnectionStatus.INTERESTED.value,
                )
                .options(selectinload(ConnectionRequest.to_user))
                .order_by(ConnectionRequest.created_at.desc(), ConnectionRequest.id)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching sent requests for user {user_id}: {e}")
            raise

    async def list_accepted(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> list[ConnectionRequest]:
        """ACCEPTED rows on either side of ``user_id``, with both parties loaded."""
        try:
            stmt = (
                select(ConnectionRequest)
                .where(
                    or_(
                        ConnectionRequest.from_user_id == user_id,
                        ConnectionRequest.to_user_id == user_id,
                    ),
                    ConnectionRequest.status == ConnectionStatus.ACCEPTED.value,
                )
                .options(
                    selectinload(ConnectionRequest.from_user),
                    selectinload(ConnectionRequest.to_user),
                )
                .order_by(ConnectionRequest.updated_at.desc(), ConnectionRequest.id)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching connections for user {user_id}: {e}")
            raise
