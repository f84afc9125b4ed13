"""
Chat Service

Handles all client -> server events for one server instance.
Supports:
    - join_chat
    - join_room
    - send_message
    - send_private_message
    - typing_start / typing_stop
    - connection close

Every handler is synchronous and runs to completion, emissions included,
before the next inbound event is processed. Rejected requests are reported
to the originating connection as a private error_message.
"""

import json
import logging
from typing import Any

from .chat_state import ChatState
from .errors import ChatError, NotRegisteredError
from .lifecycle import ConnectionStatus, SessionLifecycleManager
from .routing import RoutingEngine
from .transport import Transport
from .utils import require_string_field

logger = logging.getLogger(__name__)


class ChatService:
    """
    Entry point for inbound events from any transport.
    """

    def __init__(self, transport: Transport, state: ChatState = None):
        """
        Initialize the chat service.

        Args:
            transport: Addressing capability used for all emissions
            state: Optional pre-built state, a fresh one is created otherwise
        """
        self.state = state or ChatState()
        self.transport = transport
        self.lifecycle = SessionLifecycleManager(self.state, transport)
        self.router = RoutingEngine(self.state, transport)

        self._handlers = {
            "join_chat": self._on_join_chat,
            "join_room": self._on_join_room,
            "send_message": self._on_send_message,
            "send_private_message": self._on_send_private_message,
            "typing_start": self._on_typing_start,
            "typing_stop": self._on_typing_stop,
        }

    def handle_message(self, connection_id: str, message: str):
        """
        Parse a raw JSON frame and dispatch it.

        Expected frame format:
        {
            "type": "<event name>",
            "data": <payload>
        }
        """
        try:
            frame = json.loads(message)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Invalid JSON from {connection_id}: {e}")
            self._send_error(connection_id, "Invalid JSON format")
            return

        if not isinstance(frame, dict):
            self._send_error(connection_id, "Message must be a JSON object")
            return

        self.handle_event(connection_id, frame.get("type"), frame.get("data"))

    def handle_event(self, connection_id: str, event: str, payload: Any):
        """
        Dispatch a decoded event to its handler.

        Args:
            connection_id: The connection the event came from
            event: Event name
            payload: Event payload
        """
        handler = self._handlers.get(event) if isinstance(event, str) else None
        if not handler:
            logger.warning(f"Unknown message type: {event}")
            self._send_error(connection_id, f"Unknown message type: {event}")
            return

        try:
            handler(connection_id, payload)
        except ChatError as e:
            logger.warning(
                f"Rejected {event} from {connection_id}: "
                f"{e.error_code} {e.message}"
            )
            self._send_error(connection_id, e.message)
        except Exception:
            logger.exception(f"Error processing {event} from {connection_id}")
            self._send_error(connection_id, "Internal server error")

    def handle_disconnect(self, connection_id: str):
        """Run the disconnect lifecycle for a closed connection."""
        try:
            self.lifecycle.disconnect(connection_id)
        except Exception:
            logger.exception(f"Error during disconnect of {connection_id}")

    def _on_join_chat(self, connection_id: str, payload: Any):
        self.lifecycle.join_chat(connection_id, payload)

    def _on_join_room(self, connection_id: str, payload: Any):
        self.lifecycle.join_room(connection_id, payload)

    def _on_send_message(self, connection_id: str, payload: Any):
        self._require_active(connection_id)
        body = require_string_field(payload, "body")
        self.router.send_room_message(connection_id, body)

    def _on_send_private_message(self, connection_id: str, payload: Any):
        self._require_active(connection_id)
        recipient_id = require_string_field(payload, "recipientConnectionId")
        body = require_string_field(payload, "body")
        self.router.send_private_message(connection_id, recipient_id, body)

    def _on_typing_start(self, connection_id: str, payload: Any):
        self.router.typing_start(connection_id, payload)

    def _on_typing_stop(self, connection_id: str, payload: Any):
        self.router.typing_stop(connection_id, payload)

    def _require_active(self, connection_id: str):
        # Session errors take precedence over payload errors
        if self.lifecycle.status(connection_id) is not ConnectionStatus.ACTIVE:
            raise NotRegisteredError()

    def _send_error(self, connection_id: str, text: str):
        self.transport.emit_to(connection_id, "error_message", text)
