"""
Room Directory

Tracks every chat room and the connections occupying it. Rooms are created
lazily on first reference and are never deleted; the default room exists
from startup even when empty.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Tuple

from .connection_registry import ConnectionRegistry

logger = logging.getLogger(__name__)

DEFAULT_ROOM = "general"
DEFAULT_ROOM_NAME = "General Chat"


@dataclass
class Room:
    """
    A named grouping of connections sharing message scope.

    Attributes:
        room_id: Unique identifier, also used as the display label
        name: Human-friendly room name
        occupants: Connection ids currently in the room
        created_at: ISO 8601 timestamp when the room was created
    """

    room_id: str
    name: str
    occupants: Set[str] = field(default_factory=set)
    created_at: str = ""

    def __post_init__(self):
        """Initialize the creation timestamp if not set."""
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert room to dictionary for serialization."""
        return {
            "room_id": self.room_id,
            "name": self.name,
            "occupant_count": len(self.occupants),
            "created_at": self.created_at,
        }


class RoomDirectory:
    """
    Owns every Room, keyed by room id.

    Occupant ids are resolved to display names through the connection
    registry the directory was built with.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        default_room: str = DEFAULT_ROOM,
        default_room_name: str = DEFAULT_ROOM_NAME,
    ):
        """
        Initialize the directory with the default room pre-created.

        Args:
            registry: Connection registry used to resolve occupant names
            default_room: Id of the room that always exists
            default_room_name: Display name of the default room
        """
        self.registry = registry
        self.default_room = default_room
        self._rooms: Dict[str, Room] = {
            default_room: Room(room_id=default_room, name=default_room_name)
        }

    def ensure(self, room_id: str) -> Tuple[Room, bool]:
        """
        Get a room, creating an empty one if it does not exist yet.

        Args:
            room_id: The room id

        Returns:
            tuple: (room, created) where created is True if the room is new
        """
        room = self._rooms.get(room_id)
        if room:
            return room, False

        room = Room(room_id=room_id, name=room_id)
        self._rooms[room_id] = room
        logger.info(f"Created room '{room_id}'")
        return room, True

    def get(self, room_id: str) -> Optional[Room]:
        """Return the room with this id, or None."""
        return self._rooms.get(room_id)

    def add_occupant(self, room_id: str, connection_id: str):
        """Add a connection to a room. Adding twice has no effect."""
        room = self._rooms.get(room_id)
        if room:
            room.occupants.add(connection_id)

    def remove_occupant(self, room_id: str, connection_id: str):
        """Remove a connection from a room. Missing rooms and non-members are ignored."""
        room = self._rooms.get(room_id)
        if room:
            room.occupants.discard(connection_id)

    def occupant_display_names(self, room_id: str) -> Set[str]:
        """
        Resolve a room's occupants to display names.

        Occupants without a live session are skipped.

        Args:
            room_id: The room id

        Returns:
            Set of display names, empty if the room does not exist
        """
        room = self._rooms.get(room_id)
        if not room:
            return set()

        names = set()
        for connection_id in room.occupants:
            session = self.registry.get(connection_id)
            if session:
                names.add(session.display_name)
        return names

    def list_room_ids(self) -> List[str]:
        """Room ids in creation order."""
        return list(self._rooms.keys())

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms
