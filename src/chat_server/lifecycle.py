"""
Session Lifecycle Manager

Owns the per-connection state machine:

    Unregistered --join_chat--> Active --disconnect--> Terminated

and every identity or room change along the way. Each operation validates
first, so a rejected request leaves the state untouched, then mutates the
registry and directory and emits its events in a fixed order.
"""

import logging
from enum import Enum
from typing import Optional

from .chat_state import ChatState
from .connection_registry import Session
from .errors import (
    AlreadyRegisteredError,
    ConnectionTerminatedError,
    NotRegisteredError,
)
from .schemas import (
    create_user_joined_event,
    create_room_users_update_event,
    create_welcome_message,
    create_joined_room_message,
    create_left_room_message,
)
from .transport import Transport
from .utils import clean_display_name, clean_room_id

logger = logging.getLogger(__name__)


class ConnectionStatus(Enum):
    """Lifecycle state of a connection as seen by the core."""

    UNREGISTERED = "unregistered"
    ACTIVE = "active"
    TERMINATED = "terminated"


class SessionLifecycleManager:
    """
    Handles join_chat, join_room and disconnect.

    Terminated is final: once disconnect has run for a connection id, it
    can neither register nor change rooms again.
    """

    def __init__(self, state: ChatState, transport: Transport):
        """
        Initialize the lifecycle manager.

        Args:
            state: Shared registry and directory
            transport: Addressing capability used for all emissions
        """
        self.state = state
        self.transport = transport

    def status(self, connection_id: str) -> ConnectionStatus:
        """Return where the connection is in its lifecycle."""
        if self.state.is_terminated(connection_id):
            return ConnectionStatus.TERMINATED
        if connection_id in self.state.sessions:
            return ConnectionStatus.ACTIVE
        return ConnectionStatus.UNREGISTERED

    def join_chat(self, connection_id: str, display_name) -> Session:
        """
        Register a display name and place the connection in the default room.

        Emits, in order: user_joined to everyone; online_users,
        available_rooms and a welcome message to the joiner; then
        room_users_update to the default room.

        Args:
            connection_id: The connection registering
            display_name: Requested display name

        Returns:
            The new Session

        Raises:
            ConnectionTerminatedError: If the connection has disconnected
            AlreadyRegisteredError: If the connection already has a session
            EmptyNameError: If the name is blank
            NameTakenError: If the name belongs to another active session
        """
        if self.state.is_terminated(connection_id):
            raise ConnectionTerminatedError()
        existing = self.state.sessions.get(connection_id)
        if existing:
            raise AlreadyRegisteredError(existing.display_name)

        name = clean_display_name(display_name)
        session = self.state.sessions.register(connection_id, name)
        room_id = session.current_room

        self.state.rooms.add_occupant(room_id, connection_id)
        self.transport.join(connection_id, room_id)
        logger.info(f"{name} ({connection_id}) joined the chat")

        self.transport.emit_all(
            "user_joined",
            create_user_joined_event(connection_id, name, room_id),
        )
        self.transport.emit_to(
            connection_id, "online_users", self.state.online_users()
        )
        self.transport.emit_to(
            connection_id, "available_rooms", self.state.rooms.list_room_ids()
        )
        self.transport.emit_to(
            connection_id,
            "receive_message",
            create_welcome_message(name, room_id),
        )
        self._broadcast_room_users(room_id)
        return session

    def join_room(self, connection_id: str, room_id) -> Session:
        """
        Move an active session into a room, creating the room if needed.

        Rejoining the current room is treated as a full leave and join.

        Args:
            connection_id: The connection moving
            room_id: Target room id

        Returns:
            The updated Session

        Raises:
            NotRegisteredError: If the connection has no session or has
                disconnected
            EmptyRoomNameError: If the room id is blank
        """
        session = self.state.sessions.get(connection_id)
        if not session:
            raise NotRegisteredError()
        room_id = clean_room_id(room_id)

        # Leave the old room
        old_room = session.current_room
        if old_room:
            self.state.rooms.remove_occupant(old_room, connection_id)
            self.transport.leave(connection_id, old_room)
            self._broadcast_room_users(old_room)
            self.transport.emit_to_room(
                old_room,
                "receive_message",
                create_left_room_message(session.display_name, old_room),
            )

        _, created = self.state.rooms.ensure(room_id)
        if created:
            self.transport.emit_all(
                "available_rooms", self.state.rooms.list_room_ids()
            )

        # Enter the new room
        session.current_room = room_id
        self.state.rooms.add_occupant(room_id, connection_id)
        self.transport.join(connection_id, room_id)
        self._broadcast_room_users(room_id)
        self.transport.emit_to_room(
            room_id,
            "receive_message",
            create_joined_room_message(session.display_name, room_id),
        )

        self.transport.emit_to(connection_id, "room_changed", room_id)
        logger.info(
            f"{session.display_name} ({connection_id}) moved "
            f"from '{old_room}' to '{room_id}'"
        )
        return session

    def disconnect(self, connection_id: str) -> Optional[Session]:
        """
        Tear down a connection's session.

        Safe to call for connections that never registered; those produce
        no events. Either way the connection ends up terminated.

        Args:
            connection_id: The connection that closed

        Returns:
            The removed Session, or None if there was none
        """
        self.state.mark_terminated(connection_id)
        session = self.state.sessions.get(connection_id)
        if not session:
            logger.info(f"Unknown user disconnected: {connection_id}")
            return None

        room_id = session.current_room
        if room_id in self.state.rooms:
            self.state.rooms.remove_occupant(room_id, connection_id)
            self.transport.leave(connection_id, room_id)
            self._broadcast_room_users(room_id)
            self.transport.emit_to_room(
                room_id,
                "receive_message",
                create_left_room_message(session.display_name, room_id),
            )

        self.state.sessions.remove(connection_id)
        self.transport.emit_all("user_disconnected", connection_id)
        logger.info(
            f"User disconnected: {session.display_name} ({connection_id})"
        )
        return session

    def _broadcast_room_users(self, room_id: str):
        self.transport.emit_to_room(
            room_id,
            "room_users_update",
            create_room_users_update_event(
                room_id, self.state.room_users(room_id)
            ),
        )
