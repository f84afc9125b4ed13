"""
Routing Engine

Dispatch rules for chat traffic from active sessions: room messages,
private messages and typing indicators. Nothing here is stored; each
message is built, delivered and dropped.
"""

import logging
from typing import Any, Dict

from .chat_state import ChatState
from .errors import (
    EmptyRoomNameError,
    NotRegisteredError,
    RecipientOfflineError,
)
from .schemas import (
    create_room_message,
    create_private_message,
    create_typing_status_event,
)
from .transport import Transport
from .utils import clean_room_id

logger = logging.getLogger(__name__)


class RoutingEngine:
    """
    Routes messages and typing signals for registered connections.
    """

    def __init__(self, state: ChatState, transport: Transport):
        """
        Initialize the routing engine.

        Args:
            state: Shared registry and directory
            transport: Addressing capability used for delivery
        """
        self.state = state
        self.transport = transport

    def send_room_message(self, connection_id: str, body: str) -> Dict[str, Any]:
        """
        Deliver a message to every occupant of the sender's current room,
        sender included.

        Args:
            connection_id: The sending connection
            body: Message text

        Returns:
            dict: The delivered message

        Raises:
            NotRegisteredError: If the sender has no session
        """
        session = self.state.sessions.get(connection_id)
        if not session:
            raise NotRegisteredError()

        message = create_room_message(
            session.display_name, body, session.current_room
        )
        self.transport.emit_to_room(
            session.current_room, "receive_message", message
        )
        logger.debug(
            f"Message from {session.display_name} "
            f"in room {session.current_room}: {body}"
        )
        return message

    def send_private_message(
        self,
        connection_id: str,
        recipient_connection_id: str,
        body: str,
    ) -> Dict[str, Any]:
        """
        Deliver one private message to both the sender and the recipient.

        Args:
            connection_id: The sending connection
            recipient_connection_id: Connection id of the recipient
            body: Message text

        Returns:
            dict: The delivered message

        Raises:
            NotRegisteredError: If the sender has no session
            RecipientOfflineError: If the recipient has no session
        """
        sender = self.state.sessions.get(connection_id)
        if not sender:
            raise NotRegisteredError()

        recipient = self.state.sessions.get(recipient_connection_id)
        if not recipient:
            raise RecipientOfflineError(recipient_connection_id)

        message = create_private_message(
            sender.display_name, recipient.display_name, body
        )
        self.transport.emit_to(connection_id, "receive_message", message)
        self.transport.emit_to(
            recipient_connection_id, "receive_message", message
        )
        logger.debug(
            f"Private message from {sender.display_name} "
            f"to {recipient.display_name}: {body}"
        )
        return message

    def typing_start(self, connection_id: str, room_id: str):
        """Tell the other occupants of room_id that this user is typing."""
        self._relay_typing(connection_id, room_id, True)

    def typing_stop(self, connection_id: str, room_id: str):
        """Tell the other occupants of room_id that this user stopped typing."""
        self._relay_typing(connection_id, room_id, False)

    def _relay_typing(self, connection_id: str, room_id: str, is_typing: bool):
        # No reply for unregistered senders or malformed room ids
        session = self.state.sessions.get(connection_id)
        if not session:
            return
        try:
            room_id = clean_room_id(room_id)
        except EmptyRoomNameError:
            return

        self.transport.emit_to_room(
            room_id,
            "typing_status",
            create_typing_status_event(session.display_name, is_typing, room_id),
            exclude=connection_id,
        )
