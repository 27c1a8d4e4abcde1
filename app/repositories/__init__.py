# Repositories package
from .base import BaseRepository
from .connection_request_repository import ConnectionRequestRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ConnectionRequestRepository",
    "UserRepository",
]
