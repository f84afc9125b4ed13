"""
Chat Server Package

This package provides the real-time chat presence and routing server:
session lifecycle, room directory, message routing and the WebSocket
transport.
"""

from .errors import (
    ChatError,
    EmptyNameError,
    NameTakenError,
    NotRegisteredError,
    RecipientOfflineError,
    AlreadyRegisteredError,
    ConnectionTerminatedError,
    EmptyRoomNameError,
    InvalidPayloadError,
)
from .connection_registry import ConnectionRegistry, Session
from .room_directory import RoomDirectory, Room, DEFAULT_ROOM, DEFAULT_ROOM_NAME
from .chat_state import ChatState
from .transport import Transport
from .lifecycle import SessionLifecycleManager, ConnectionStatus
from .routing import RoutingEngine
from .service import ChatService
from .websocket_server import WebSocketServer

__all__ = [
    "ChatError",
    "EmptyNameError",
    "NameTakenError",
    "NotRegisteredError",
    "RecipientOfflineError",
    "AlreadyRegisteredError",
    "ConnectionTerminatedError",
    "EmptyRoomNameError",
    "InvalidPayloadError",
    "ConnectionRegistry",
    "Session",
    "RoomDirectory",
    "Room",
    "DEFAULT_ROOM",
    "DEFAULT_ROOM_NAME",
    "ChatState",
    "Transport",
    "SessionLifecycleManager",
    "ConnectionStatus",
    "RoutingEngine",
    "ChatService",
    "WebSocketServer",
]
