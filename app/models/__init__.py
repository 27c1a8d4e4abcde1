from .user import User
from .connection_request import ConnectionRequest, ConnectionStatus

__all__ = ["User", "ConnectionRequest", "ConnectionStatus"]
