"""
Connection Registry

Maps live connection ids to their chat sessions. A session exists only
after a connection has registered a display name, and display names are
unique among active sessions.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .errors import NameTakenError

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    Chat identity bound to one connection.

    Attributes:
        connection_id: Transport-assigned id of the owning connection
        display_name: Name shown to other users, unique while active
        current_room: Room the connection currently occupies
        joined_at: ISO 8601 timestamp when the session was created
    """

    connection_id: str
    display_name: str
    current_room: str
    joined_at: str = ""

    def __post_init__(self):
        """Initialize the join timestamp if not set."""
        if not self.joined_at:
            self.joined_at = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the online_users wire entry."""
        return {
            "connectionId": self.connection_id,
            "displayName": self.display_name,
            "currentRoom": self.current_room,
        }


class ConnectionRegistry:
    """
    Owns every active Session, keyed by connection id.
    """

    def __init__(self, default_room: str):
        """
        Initialize the registry.

        Args:
            default_room: Room assigned to every newly registered session
        """
        self.default_room = default_room
        self._sessions: Dict[str, Session] = {}

    def register(self, connection_id: str, display_name: str) -> Session:
        """
        Create a session for a connection.

        Args:
            connection_id: The connection registering
            display_name: Requested display name (exact, case-sensitive)

        Returns:
            The new Session, placed in the default room

        Raises:
            NameTakenError: If another active session uses display_name
        """
        if self.name_in_use(display_name):
            raise NameTakenError(display_name)

        session = Session(
            connection_id=connection_id,
            display_name=display_name,
            current_room=self.default_room,
        )
        self._sessions[connection_id] = session
        logger.debug(f"Registered session {display_name} for {connection_id}")
        return session

    def name_in_use(self, display_name: str) -> bool:
        """Check whether any active session has this display name."""
        return any(
            session.display_name == display_name
            for session in self._sessions.values()
        )

    def get(self, connection_id: str) -> Optional[Session]:
        """Return the session for a connection, or None."""
        return self._sessions.get(connection_id)

    def remove(self, connection_id: str) -> Optional[Session]:
        """
        Remove and return the session for a connection.

        Returns:
            The removed Session, or None if the connection never registered
        """
        return self._sessions.pop(connection_id, None)

    def all(self) -> List[Tuple[str, Session]]:
        """Snapshot of (connection_id, session) pairs."""
        return list(self._sessions.items())

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._sessions
