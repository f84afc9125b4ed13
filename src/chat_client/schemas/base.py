"""
Base Schema Classes

This module provides base classes for request and event schemas with
common serialization and deserialization methods.

Every frame on the wire is {"type": <event name>, "data": <payload>}.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, TypeVar

T = TypeVar("T", bound="BaseEvent")


class BaseRequest:
    """
    Base class for client -> server requests.

    Subclasses define _message_type and _payload.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary with 'type' and 'data' keys.
        """
        return {"type": self._message_type, "data": self._payload()}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    @property
    def _message_type(self) -> str:
        """
        Event name for the request.

        Should be overridden by subclasses to provide the specific type.
        """
        raise NotImplementedError("Subclasses must define _message_type")

    def _payload(self) -> Any:
        raise NotImplementedError("Subclasses must define _payload")


class BaseEvent:
    """
    Base class for server -> client events.

    Provides common deserialization methods for creating event objects
    from dictionary and JSON formats.
    """

    @classmethod
    def from_dict(cls: type[T], data: Dict[str, Any]) -> T:
        """
        Create instance from a frame or a bare payload.

        Args:
            data: Either a full frame with a 'data' key or the payload itself.

        Returns:
            Instance of the event class.
        """
        if isinstance(data, dict) and "type" in data and "data" in data:
            data = data["data"]
        return cls._from_data(data)

    @classmethod
    def from_json(cls: type[T], json_str: str) -> T:
        """Create instance from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def _from_data(cls: type[T], data: Any) -> T:
        """
        Create instance from the event payload.

        Should be overridden by subclasses for custom deserialization.
        """
        return cls(**data)


@dataclass
class ErrorMessage(BaseEvent):
    """
    Private error reported to the connection that caused it.

    Attributes:
        text: Human-readable error text
    """

    text: str

    @classmethod
    def _from_data(cls, data: Any) -> "ErrorMessage":
        return cls(text=str(data))
