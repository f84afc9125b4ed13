"""
Validation Utilities

Contains utility functions for validating and normalizing inbound payloads.
Each function returns the cleaned value or raises a ChatError subclass.
"""

from typing import Any

from ..errors import EmptyNameError, EmptyRoomNameError, InvalidPayloadError


def clean_display_name(display_name: Any) -> str:
    """
    Validate a requested display name.

    Args:
        display_name: Raw join_chat payload

    Returns:
        str: The name with surrounding whitespace removed

    Raises:
        EmptyNameError: If the name is missing, not a string, or blank
    """
    if not isinstance(display_name, str) or not display_name.strip():
        raise EmptyNameError()
    return display_name.strip()


def clean_room_id(room_id: Any) -> str:
    """
    Validate a room id.

    Raises:
        EmptyRoomNameError: If the id is missing, not a string, or blank
    """
    if not isinstance(room_id, str) or not room_id.strip():
        raise EmptyRoomNameError()
    return room_id.strip()


def require_string_field(payload: Any, key: str) -> str:
    """
    Extract a string field from an object payload.

    Args:
        payload: Inbound payload, expected to be a dict
        key: Field name

    Returns:
        str: The field value

    Raises:
        InvalidPayloadError: If payload is not an object or the field is not a string
    """
    if not isinstance(payload, dict):
        raise InvalidPayloadError("Payload must be an object.")
    value = payload.get(key)
    if not isinstance(value, str):
        raise InvalidPayloadError(f"Field '{key}' must be a string.")
    return value
