from pydantic import AliasChoices, BaseModel, Field
from typing import Any, Optional, List
from datetime import datetime
import enum
import uuid
from app.models.connection_request import ConnectionStatus
from app.schemas.user import UserPublic


class SwipeIntent(str, enum.Enum):
    LEFT = "left"    # not interested
    RIGHT = "right"  # interested


class SwipeRequest(BaseModel):
    # Any JSON value is accepted here; the service rejects malformed ids with a 400
    to_user_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("to_user_id", "toUserId"),
    )


class ConnectionRequest(BaseModel):
    id: uuid.UUID
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    status: ConnectionStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ReceivedConnectionRequest(ConnectionRequest):
    """Pending request with the sender's public profile"""
    from_user: UserPublic


class SentConnectionRequest(ConnectionRequest):
    """Pending request with the recipient's public profile"""
    to_user: UserPublic


class SwipeLeftResponse(BaseModel):
    message: str
    data: ConnectionRequest


class SwipeRightResponse(BaseModel):
    message: str
    data: ConnectionRequest
    matched: bool


class ReceivedRequestsResponse(BaseModel):
    message: str
    data: List[ReceivedConnectionRequest]


class SentRequestsResponse(BaseModel):
    message: str
    data: List[SentConnectionRequest]


class ConnectionsResponse(BaseModel):
    """Accepted connections projected to the other party"""
    data: List[UserPublic]
