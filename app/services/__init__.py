from .connection_service import ConnectionService, SignalResult
from .feed_service import FeedService
from .user_service import UserService, parse_user_id

__all__ = [
    "ConnectionService",
    "SignalResult",
    "FeedService",
    "UserService",
    "parse_user_id",
]
