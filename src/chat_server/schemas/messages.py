"""
Message Schema Definitions

Contains functions for creating receive_message payloads. Messages are
transient: they are built, delivered and forgotten.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

SYSTEM_SENDER = "System"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_room_message(
    sender: str,
    body: str,
    room_id: str,
    timestamp: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a room-scoped message.

    Args:
        sender: Display name of the sender
        body: Message text
        room_id: Room the message belongs to
        timestamp: ISO 8601 timestamp, defaults to now

    Returns:
        dict: Message payload
    """
    return {
        "sender": sender,
        "body": body,
        "timestamp": timestamp or _now(),
        "room": room_id,
    }


def create_private_message(
    sender: str,
    recipient: str,
    body: str,
    timestamp: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a private message.

    Args:
        sender: Display name of the sender
        recipient: Display name of the recipient
        body: Message text
        timestamp: ISO 8601 timestamp, defaults to now

    Returns:
        dict: Message payload
    """
    return {
        "sender": sender,
        "body": body,
        "timestamp": timestamp or _now(),
        "recipient": recipient,
        "isPrivate": True,
    }


def create_system_message(body: str, room_id: str) -> Dict[str, Any]:
    """Create a server-generated message scoped to a room."""
    return create_room_message(SYSTEM_SENDER, body, room_id)


def create_welcome_message(display_name: str, room_id: str) -> Dict[str, Any]:
    return create_system_message(
        f"Welcome, {display_name}! You are in the '{room_id}' room.", room_id
    )


def create_joined_room_message(display_name: str, room_id: str) -> Dict[str, Any]:
    return create_system_message(f"{display_name} has joined the room.", room_id)


def create_left_room_message(display_name: str, room_id: str) -> Dict[str, Any]:
    return create_system_message(f"{display_name} has left the room.", room_id)
