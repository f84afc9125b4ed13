"""
Transport Abstraction

The addressing capability the core needs from the network layer: unicast
by connection id, multicast by room label, and broadcast to everyone.
Every emit is a non-blocking enqueue; implementations must never let one
failed destination stop delivery to the others.
"""

from typing import Any, Optional


class Transport:
    """
    Base class for transports used by the lifecycle manager and router.

    Subclasses implement delivery; room labels are maintained by the
    core through join() and leave().
    """

    def join(self, connection_id: str, room_id: str):
        """Subscribe a connection to a room label."""
        raise NotImplementedError

    def leave(self, connection_id: str, room_id: str):
        """Unsubscribe a connection from a room label."""
        raise NotImplementedError

    def emit_to(self, connection_id: str, event: str, payload: Any):
        """Send an event to a single connection."""
        raise NotImplementedError

    def emit_to_room(
        self,
        room_id: str,
        event: str,
        payload: Any,
        exclude: Optional[str] = None,
    ):
        """Send an event to every connection subscribed to a room label."""
        raise NotImplementedError

    def emit_all(self, event: str, payload: Any):
        """Send an event to every connected client."""
        raise NotImplementedError
