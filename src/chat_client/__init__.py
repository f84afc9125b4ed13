"""
Client Package

This package provides the client-side functionality for the chat server:
ClientService for sending requests, ChatClient for tracking presence and
room state, and the protocol schemas.
"""

from .service import ClientService
from .chat_client import ChatClient
from .schemas import (
    # Base classes
    BaseRequest,
    BaseEvent,
    ErrorMessage,
    # Requests
    JoinChatRequest,
    JoinRoomRequest,
    SendMessageRequest,
    SendPrivateMessageRequest,
    TypingRequest,
    # Events
    OnlineUser,
    OnlineUsersEvent,
    AvailableRoomsEvent,
    ChatMessage,
    RoomUsersUpdate,
    RoomChanged,
    TypingStatus,
    UserDisconnected,
)

__all__ = [
    # Service classes
    "ClientService",
    "ChatClient",
    # Base schema classes
    "BaseRequest",
    "BaseEvent",
    "ErrorMessage",
    # Requests
    "JoinChatRequest",
    "JoinRoomRequest",
    "SendMessageRequest",
    "SendPrivateMessageRequest",
    "TypingRequest",
    # Events
    "OnlineUser",
    "OnlineUsersEvent",
    "AvailableRoomsEvent",
    "ChatMessage",
    "RoomUsersUpdate",
    "RoomChanged",
    "TypingStatus",
    "UserDisconnected",
]
