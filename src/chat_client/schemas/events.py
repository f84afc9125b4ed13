"""
Event Schema Definitions

This module defines the server -> client events: presence changes, room
membership updates, chat messages and typing indicators.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .base import BaseEvent


@dataclass
class OnlineUser(BaseEvent):
    """
    One active session as listed by online_users or user_joined.

    Attributes:
        connection_id: Connection id of the user
        display_name: Registered display name
        current_room: Room the user occupies
    """

    connection_id: str
    display_name: str
    current_room: str

    @classmethod
    def _from_data(cls, data: Any) -> "OnlineUser":
        return cls(
            connection_id=data["connectionId"],
            display_name=data["displayName"],
            # user_joined carries roomId, online_users carries currentRoom
            current_room=data.get("currentRoom", data.get("roomId")),
        )


@dataclass
class OnlineUsersEvent(BaseEvent):
    """
    Full list of active sessions, sent to a user right after joining.

    Attributes:
        users: Every active session
    """

    users: List[OnlineUser] = field(default_factory=list)

    @classmethod
    def _from_data(cls, data: Any) -> "OnlineUsersEvent":
        return cls(users=[OnlineUser._from_data(user) for user in data])


@dataclass
class AvailableRoomsEvent(BaseEvent):
    """
    Full list of room ids.

    Attributes:
        rooms: Every room id known to the server
    """

    rooms: List[str] = field(default_factory=list)

    @classmethod
    def _from_data(cls, data: Any) -> "AvailableRoomsEvent":
        return cls(rooms=list(data))


@dataclass
class ChatMessage(BaseEvent):
    """
    A room or private message.

    Attributes:
        sender: Display name of the sender, "System" for server notices
        body: Message text
        timestamp: ISO 8601 timestamp
        room: Room id, set for room messages
        recipient: Recipient display name, set for private messages
        is_private: True for private messages
    """

    sender: str
    body: str
    timestamp: str
    room: Optional[str] = None
    recipient: Optional[str] = None
    is_private: bool = False

    @classmethod
    def _from_data(cls, data: Any) -> "ChatMessage":
        return cls(
            sender=data["sender"],
            body=data["body"],
            timestamp=data["timestamp"],
            room=data.get("room"),
            recipient=data.get("recipient"),
            is_private=bool(data.get("isPrivate", False)),
        )

    @property
    def is_system(self) -> bool:
        return self.sender == "System"


@dataclass
class RoomUsersUpdate(BaseEvent):
    """
    Occupant names of one room after a change.

    Attributes:
        room_id: The room
        display_names: Display names of its occupants
    """

    room_id: str
    display_names: List[str]

    @classmethod
    def _from_data(cls, data: Any) -> "RoomUsersUpdate":
        return cls(
            room_id=data["roomId"],
            display_names=list(data["displayNames"]),
        )


@dataclass
class RoomChanged(BaseEvent):
    """
    Confirmation that this client moved to a room.

    Attributes:
        room_id: The room now occupied
    """

    room_id: str

    @classmethod
    def _from_data(cls, data: Any) -> "RoomChanged":
        return cls(room_id=str(data))


@dataclass
class TypingStatus(BaseEvent):
    """
    Another user started or stopped typing.

    Attributes:
        display_name: Who is typing
        is_typing: Current indicator state
        room_id: Room the indicator applies to
    """

    display_name: str
    is_typing: bool
    room_id: str

    @classmethod
    def _from_data(cls, data: Any) -> "TypingStatus":
        return cls(
            display_name=data["displayName"],
            is_typing=bool(data["isTyping"]),
            room_id=data["roomId"],
        )


@dataclass
class UserDisconnected(BaseEvent):
    """
    A session ended.

    Attributes:
        connection_id: Connection id of the departed user
    """

    connection_id: str

    @classmethod
    def _from_data(cls, data: Any) -> "UserDisconnected":
        return cls(connection_id=str(data))
