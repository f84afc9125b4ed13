"""
Chat Client with Local Presence State

This module provides a ChatClient class that extends ClientService with a
receive loop. Incoming events are parsed into schema objects and folded
into the state a chat front-end displays: who is online, which rooms
exist, which room this client is in and who is typing.

Usage:
    client = ChatClient("ws://localhost:3000")
    await client.connect()
    await client.join_chat("alice")
    await client.receive_messages()
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

import websockets

from .service import ClientService
from .schemas import (
    AvailableRoomsEvent,
    ChatMessage,
    ErrorMessage,
    OnlineUser,
    OnlineUsersEvent,
    RoomChanged,
    RoomUsersUpdate,
    TypingStatus,
    UserDisconnected,
)

logger = logging.getLogger(__name__)


class ChatClient(ClientService):
    """
    Chat client that tracks presence and room state.

    Attributes:
        display_name: Name sent with the last join_chat
        connection_id: This client's id, learned from its own user_joined
        current_room: Room this client occupies
        online_users: connection_id -> OnlineUser for every active session
        available_rooms: Room ids known to the server
        room_users: room_id -> occupant display names from room_users_update
        typing_users: display_name -> typing state in the current room
        messages: Messages received since the last room change
        last_error: Text of the most recent error_message
    """

    def __init__(
        self,
        server_url: str,
        websocket_factory: Optional[Callable] = None,
    ):
        """
        Initialize the chat client.

        Args:
            server_url: WebSocket URL of the chat server
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
        """
        super().__init__(server_url, websocket_factory)

        self.display_name: Optional[str] = None
        self.connection_id: Optional[str] = None
        self.current_room: Optional[str] = None
        self.online_users: Dict[str, OnlineUser] = {}
        self.available_rooms: List[str] = []
        self.room_users: Dict[str, List[str]] = {}
        self.typing_users: Dict[str, bool] = {}
        self.messages: List[ChatMessage] = []
        self.last_error: Optional[str] = None

        # Callbacks for UI integration
        self._on_message: Optional[Callable[[ChatMessage], None]] = None
        self._on_error: Optional[Callable[[str], None]] = None
        self._on_room_changed: Optional[Callable[[str], None]] = None
        self._on_typing: Optional[Callable[[TypingStatus], None]] = None
        self._on_room_users: Optional[Callable[[RoomUsersUpdate], None]] = None

        self._handlers = {
            "receive_message": self._handle_message,
            "error_message": self._handle_error,
            "user_joined": self._handle_user_joined,
            "online_users": self._handle_online_users,
            "available_rooms": self._handle_available_rooms,
            "room_users_update": self._handle_room_users_update,
            "room_changed": self._handle_room_changed,
            "typing_status": self._handle_typing_status,
            "user_disconnected": self._handle_user_disconnected,
        }

    async def join_chat(self, display_name: str) -> None:
        if self.connection_id is None:
            self.display_name = display_name.strip()
        await super().join_chat(display_name)

    def set_on_message(self, callback: Callable[[ChatMessage], None]) -> None:
        """Register callback for received room and private messages."""
        self._on_message = callback

    def set_on_error(self, callback: Callable[[str], None]) -> None:
        """Register callback for error_message events."""
        self._on_error = callback

    def set_on_room_changed(self, callback: Callable[[str], None]) -> None:
        """Register callback for room_changed confirmations."""
        self._on_room_changed = callback

    def set_on_typing(self, callback: Callable[[TypingStatus], None]) -> None:
        """Register callback for typing_status events."""
        self._on_typing = callback

    def set_on_room_users(
        self, callback: Callable[[RoomUsersUpdate], None]
    ) -> None:
        """Register callback for room_users_update events."""
        self._on_room_users = callback

    async def receive_messages(self) -> None:
        """
        Continuously receive and process events from the server.

        Returns when the server closes the connection.
        """
        if not self.is_connected:
            raise ConnectionError("Not connected to a chat server")

        logger.info("Starting message receive loop")

        try:
            async for message in self.websocket:
                self.process_incoming_message(message)
        except websockets.exceptions.ConnectionClosed:
            logger.warning("Connection closed by server")
        finally:
            self._connected = False

    def process_incoming_message(self, message: str) -> None:
        """
        Parse one raw frame and fold it into local state.

        Args:
            message: Raw JSON frame from the WebSocket
        """
        try:
            frame = json.loads(message)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse message JSON: {e}")
            return

        if not isinstance(frame, dict):
            logger.error("Ignoring frame that is not a JSON object")
            return

        message_type = frame.get("type")
        handler = self._handlers.get(message_type) if isinstance(message_type, str) else None
        if not handler:
            logger.debug(f"Unhandled message type: {message_type}")
            return

        try:
            handler(frame.get("data"))
        except (KeyError, TypeError) as e:
            logger.error(f"Malformed {message_type} event: {e}")

    def _handle_message(self, data: Any) -> None:
        message = ChatMessage.from_dict(data)
        self.messages.append(message)
        if self._on_message:
            self._on_message(message)

    def _handle_error(self, data: Any) -> None:
        error = ErrorMessage.from_dict(data)
        self.last_error = error.text
        if self.connection_id is None:
            # A rejected join_chat must not be matched against later joins
            self.display_name = None
        logger.error(f"Server error: {error.text}")
        if self._on_error:
            self._on_error(error.text)

    def _handle_user_joined(self, data: Any) -> None:
        user = OnlineUser.from_dict(data)
        self.online_users.setdefault(user.connection_id, user)

        # Our own user_joined is the first place our connection id appears
        if (
            self.connection_id is None
            and self.display_name is not None
            and user.display_name == self.display_name
        ):
            self.connection_id = user.connection_id
            self.current_room = user.current_room

    def _handle_online_users(self, data: Any) -> None:
        event = OnlineUsersEvent.from_dict(data)
        self.online_users = {user.connection_id: user for user in event.users}

    def _handle_available_rooms(self, data: Any) -> None:
        self.available_rooms = AvailableRoomsEvent.from_dict(data).rooms

    def _handle_room_users_update(self, data: Any) -> None:
        update = RoomUsersUpdate.from_dict(data)
        self.room_users[update.room_id] = update.display_names
        if self._on_room_users:
            self._on_room_users(update)

    def _handle_room_changed(self, data: Any) -> None:
        room_id = RoomChanged.from_dict(data).room_id
        self.current_room = room_id
        self.messages = []
        self.typing_users = {}
        if self.connection_id in self.online_users:
            self.online_users[self.connection_id].current_room = room_id
        if self._on_room_changed:
            self._on_room_changed(room_id)

    def _handle_typing_status(self, data: Any) -> None:
        status = TypingStatus.from_dict(data)
        self.typing_users[status.display_name] = status.is_typing
        if self._on_typing:
            self._on_typing(status)

    def _handle_user_disconnected(self, data: Any) -> None:
        event = UserDisconnected.from_dict(data)
        user = self.online_users.pop(event.connection_id, None)
        if user:
            self.typing_users.pop(user.display_name, None)
            logger.info(f"{user.display_name} has disconnected")

    def find_user(self, display_name: str) -> Optional[OnlineUser]:
        """Look up an online user by display name."""
        for user in self.online_users.values():
            if user.display_name == display_name:
                return user
        return None

    def typing_display_names(self) -> List[str]:
        """Names currently shown as typing."""
        return sorted(
            name for name, is_typing in self.typing_users.items() if is_typing
        )
