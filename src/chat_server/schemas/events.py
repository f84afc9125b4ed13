"""
Event Schema Definitions

Contains functions for creating the presence and room event payloads
sent to clients.
"""

from typing import Any, Dict, List


def create_user_joined_event(
    connection_id: str,
    display_name: str,
    room_id: str,
) -> Dict[str, Any]:
    """
    Create a user_joined event payload.

    Args:
        connection_id: Connection id of the new user
        display_name: Display name the user registered
        room_id: Room the user was placed in

    Returns:
        dict: Event payload
    """
    return {
        "connectionId": connection_id,
        "displayName": display_name,
        "roomId": room_id,
    }


def create_room_users_update_event(
    room_id: str,
    display_names: List[str],
) -> Dict[str, Any]:
    """
    Create a room_users_update event payload.

    Args:
        room_id: Room whose occupants changed
        display_names: Display names of the current occupants

    Returns:
        dict: Event payload
    """
    return {
        "roomId": room_id,
        "displayNames": list(display_names),
    }


def create_typing_status_event(
    display_name: str,
    is_typing: bool,
    room_id: str,
) -> Dict[str, Any]:
    """
    Create a typing_status event payload.

    Args:
        display_name: Name of the user typing
        is_typing: True on typing_start, False on typing_stop
        room_id: Room the indicator applies to

    Returns:
        dict: Event payload
    """
    return {
        "displayName": display_name,
        "isTyping": is_typing,
        "roomId": room_id,
    }
