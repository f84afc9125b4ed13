"""
Client Service for the Chat Server

This module provides the client service class that sends requests to the
chat server over a WebSocket connection.

Architecture:
    - Uses WebSocket for real-time bidirectional communication
    - Supports dependency injection for the network layer (for testability)
    - All requests are fire-and-forget; replies and broadcasts arrive
      through the receive loop in ChatClient
"""

import logging
from typing import Callable, Optional

import websockets

from .schemas import (
    BaseRequest,
    JoinChatRequest,
    JoinRoomRequest,
    SendMessageRequest,
    SendPrivateMessageRequest,
    TypingRequest,
)

logger = logging.getLogger(__name__)


class ClientService:
    """
    Sends chat requests to a server.

    Attributes:
        server_url: WebSocket URL of the chat server (e.g., ws://localhost:3000)
        websocket: Active WebSocket connection (None if not connected)
    """

    def __init__(
        self,
        server_url: str,
        websocket_factory: Optional[Callable] = None,
    ):
        """
        Initialize the client service.

        Args:
            server_url: WebSocket URL of the chat server
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
        """
        self.server_url = server_url
        self.websocket = None
        self._websocket_factory = websocket_factory or websockets.connect
        self._connected = False

        logger.info(f"ClientService initialized for server: {server_url}")

    async def connect(self) -> None:
        """
        Establish WebSocket connection to the chat server.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            logger.info(f"Connecting to {self.server_url}...")
            self.websocket = await self._websocket_factory(self.server_url)
            self._connected = True
            logger.info("Successfully connected to chat server")
        except Exception as e:
            logger.error(f"Failed to connect to server: {e}")
            raise ConnectionError(
                f"Could not connect to {self.server_url}: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Close the WebSocket connection."""
        if self.websocket:
            await self.websocket.close()
            self.websocket = None
            self._connected = False
            logger.info("Disconnected from chat server")

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to a server."""
        return self._connected and self.websocket is not None

    async def join_chat(self, display_name: str) -> None:
        """
        Register a display name.

        The name is trimmed before sending; the server rejects blank names.
        """
        await self._send(JoinChatRequest(display_name.strip()))

    async def join_room(self, room_id: str) -> None:
        """Move to a room, creating it on the server if needed."""
        await self._send(JoinRoomRequest(room_id))

    async def send_message(self, body: str) -> None:
        """Send a message to the current room."""
        await self._send(SendMessageRequest(body))

    async def send_private_message(
        self, recipient_connection_id: str, body: str
    ) -> None:
        """
        Send a private message.

        Args:
            recipient_connection_id: Connection id of the recipient, as
                listed in online_users
            body: Message text
        """
        await self._send(SendPrivateMessageRequest(recipient_connection_id, body))

    async def typing_start(self, room_id: str) -> None:
        await self._send(TypingRequest(room_id, is_typing=True))

    async def typing_stop(self, room_id: str) -> None:
        await self._send(TypingRequest(room_id, is_typing=False))

    async def _send(self, request: BaseRequest) -> None:
        if not self.is_connected:
            raise ConnectionError("Not connected to a chat server")

        logger.debug(f"Sending {request.to_dict()['type']} request")
        await self.websocket.send(request.to_json())
