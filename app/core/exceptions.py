"""Domain errors raised by the connection ledger.

Each error carries the HTTP status it maps to; ``app.main`` registers one
handler for the whole family.
"""

from typing import Dict, Optional

from fastapi import status


class LedgerError(Exception):
    """Base class for connection ledger errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(LedgerError):
    """Bearer token is missing, invalid or names an unknown user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class InvalidIdentifierError(LedgerError):
    """Target user identifier is missing, malformed or refers to the actor."""

    status_code = status.HTTP_400_BAD_REQUEST


class UserNotFoundError(LedgerError):
    """Target user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class ProfileIncompleteError(LedgerError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Please complete your profile first"):
        super().__init__(message)


class DuplicateSignalError(LedgerError):
    """A row for this ordered pair already exists (unique constraint hit).

    The reconciler resolves this by re-reading the existing row, so it is
    not expected to reach a client.
    """

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, from_user_id, to_user_id):
        super().__init__(
            f"Connection request {from_user_id} -> {to_user_id} already exists"
        )
        self.from_user_id = from_user_id
        self.to_user_id = to_user_id
