"""
Schemas for the Chat Server

Payload builders for the events and messages the server emits.
"""

from .events import (
    create_user_joined_event,
    create_room_users_update_event,
    create_typing_status_event,
)
from .messages import (
    SYSTEM_SENDER,
    create_room_message,
    create_private_message,
    create_system_message,
    create_welcome_message,
    create_joined_room_message,
    create_left_room_message,
)

__all__ = [
    "create_user_joined_event",
    "create_room_users_update_event",
    "create_typing_status_event",
    "SYSTEM_SENDER",
    "create_room_message",
    "create_private_message",
    "create_system_message",
    "create_welcome_message",
    "create_joined_room_message",
    "create_left_room_message",
]
