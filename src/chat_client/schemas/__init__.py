"""
Schemas Package

This package contains protocol schemas for client-server communication,
split into client requests and server events.
"""

from .base import BaseRequest, BaseEvent, ErrorMessage
from .requests import (
    JoinChatRequest,
    JoinRoomRequest,
    SendMessageRequest,
    SendPrivateMessageRequest,
    TypingRequest,
)
from .events import (
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
    # Base classes
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
