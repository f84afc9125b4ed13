"""
Error Types for the Chat Server

Client-input and session-state errors raised by the core. None of them are
fatal: the dispatcher reports each one to the originating connection as a
private error_message and keeps processing.
"""


class ChatError(Exception):
    """
    Base class for errors reported back to a single connection.

    Attributes:
        error_code: Stable machine-readable code
        message: Human-readable text sent to the client
    """

    error_code = "CHAT_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyNameError(ChatError):
    """Display name is blank after trimming."""

    error_code = "EMPTY_NAME"

    def __init__(self):
        super().__init__("Username cannot be empty.")


class NameTakenError(ChatError):
    """Display name already belongs to an active session."""

    error_code = "NAME_TAKEN"

    def __init__(self, display_name: str):
        super().__init__("Username already taken. Please choose another.")
        self.display_name = display_name


class NotRegisteredError(ChatError):
    """Operation requires an active session."""

    error_code = "NOT_REGISTERED"

    def __init__(self):
        super().__init__("Please set your username first.")


class RecipientOfflineError(ChatError):
    """Private message target has no active session."""

    error_code = "RECIPIENT_OFFLINE"

    def __init__(self, connection_id: str):
        super().__init__(f"User with ID {connection_id} is not online.")
        self.connection_id = connection_id


class AlreadyRegisteredError(ChatError):
    """join_chat sent by a connection that already has a session."""

    error_code = "ALREADY_REGISTERED"

    def __init__(self, display_name: str):
        super().__init__(f"You have already joined the chat as {display_name}.")
        self.display_name = display_name


class ConnectionTerminatedError(ChatError):
    """Event from a connection that has already disconnected."""

    error_code = "CONNECTION_TERMINATED"

    def __init__(self):
        super().__init__("Connection has been closed.")


class EmptyRoomNameError(ChatError):
    """Room id is blank after trimming."""

    error_code = "EMPTY_ROOM_NAME"

    def __init__(self):
        super().__init__("Room name cannot be empty.")


class InvalidPayloadError(ChatError):
    """Inbound frame is malformed or carries the wrong payload shape."""

    error_code = "INVALID_PAYLOAD"
