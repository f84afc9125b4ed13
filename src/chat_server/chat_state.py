"""
Chat State

Holds the connection registry and the room directory together. Invariants
span both collections, so they are only ever mutated through the session
lifecycle manager and read through the routing engine, both of which take
this object rather than the raw collections.
"""

import logging
from typing import Set

from .connection_registry import ConnectionRegistry
from .room_directory import DEFAULT_ROOM, DEFAULT_ROOM_NAME, RoomDirectory

logger = logging.getLogger(__name__)


class ChatState:
    """
    In-memory state for one server instance.

    Attributes:
        sessions: Connection registry (connection id -> Session)
        rooms: Room directory (room id -> Room)
        default_room: Id of the room new sessions are placed in

    Disconnected ids stay marked as terminated until the transport calls
    forget_connection, so a late event for them cannot start a new session.
    """

    def __init__(
        self,
        default_room: str = DEFAULT_ROOM,
        default_room_name: str = DEFAULT_ROOM_NAME,
    ):
        self.default_room = default_room
        self.sessions = ConnectionRegistry(default_room)
        self.rooms = RoomDirectory(
            self.sessions, default_room, default_room_name
        )
        self._terminated: Set[str] = set()

    def online_users(self):
        """Wire entries for every active session."""
        return [session.to_dict() for _, session in self.sessions.all()]

    def room_users(self, room_id: str):
        """Sorted display names of a room's occupants."""
        return sorted(self.rooms.occupant_display_names(room_id))

    def mark_terminated(self, connection_id: str):
        self._terminated.add(connection_id)

    def is_terminated(self, connection_id: str) -> bool:
        return connection_id in self._terminated

    def forget_connection(self, connection_id: str):
        """Drop all record of a connection once its transport link is gone."""
        self._terminated.discard(connection_id)
