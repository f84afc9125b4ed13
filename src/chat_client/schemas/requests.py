"""
Request Schema Definitions

This module defines the client -> server requests: registering a display
name, switching rooms, sending room and private messages, and typing
indicators.
"""

from dataclasses import dataclass
from typing import Any

from .base import BaseRequest


@dataclass
class JoinChatRequest(BaseRequest):
    """
    Request to register a display name.

    Attributes:
        display_name: Requested display name
    """

    display_name: str

    @property
    def _message_type(self) -> str:
        return "join_chat"

    def _payload(self) -> Any:
        return self.display_name


@dataclass
class JoinRoomRequest(BaseRequest):
    """
    Request to move into a room, creating it if needed.

    Attributes:
        room_id: Target room id
    """

    room_id: str

    @property
    def _message_type(self) -> str:
        return "join_room"

    def _payload(self) -> Any:
        return self.room_id


@dataclass
class SendMessageRequest(BaseRequest):
    """
    Request to send a message to the current room.

    Attributes:
        body: Message text
    """

    body: str

    @property
    def _message_type(self) -> str:
        return "send_message"

    def _payload(self) -> Any:
        return {"body": self.body}


@dataclass
class SendPrivateMessageRequest(BaseRequest):
    """
    Request to send a private message to one connection.

    Attributes:
        recipient_connection_id: Connection id of the recipient
        body: Message text
    """

    recipient_connection_id: str
    body: str

    @property
    def _message_type(self) -> str:
        return "send_private_message"

    def _payload(self) -> Any:
        return {
            "recipientConnectionId": self.recipient_connection_id,
            "body": self.body,
        }


@dataclass
class TypingRequest(BaseRequest):
    """
    Typing indicator for a room.

    Attributes:
        room_id: Room the indicator applies to
        is_typing: True for typing_start, False for typing_stop
    """

    room_id: str
    is_typing: bool = True

    @property
    def _message_type(self) -> str:
        return "typing_start" if self.is_typing else "typing_stop"

    def _payload(self) -> Any:
        return self.room_id
