from .user import UserPublic, UserProfileResponse
from .connection_request import (
    SwipeIntent,
    SwipeRequest,
    ConnectionRequest,
    ReceivedConnectionRequest,
    SentConnectionRequest,
    SwipeLeftResponse,
    SwipeRightResponse,
    ReceivedRequestsResponse,
    SentRequestsResponse,
    ConnectionsResponse,
)
from .feed import FeedFilters, FeedResponse, ANY_FILTER_VALUE

__all__ = [
    "UserPublic",
    "UserProfileResponse",
    "SwipeIntent",
    "SwipeRequest",
    "ConnectionRequest",
    "ReceivedConnectionRequest",
    "SentConnectionRequest",
    "SwipeLeftResponse",
    "SwipeRightResponse",
    "ReceivedRequestsResponse",
    "SentRequestsResponse",
    "ConnectionsResponse",
    "FeedFilters",
    "FeedResponse",
    "ANY_FILTER_VALUE",
]
