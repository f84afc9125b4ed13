"""
WebSocket Server

Handles WebSocket connections from clients and feeds their frames to the
ChatService. Also serves as the service's Transport: each connection gets
a bounded outbound queue drained by its own writer task, so emitting is a
non-blocking enqueue and a slow or vanished client never stalls the others.
"""

import asyncio
import json
import logging
import uuid
from typing import Any, Dict, Optional, Set

import websockets
from websockets.asyncio.server import ServerConnection

from .chat_state import ChatState
from .service import ChatService
from .transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 256


class WebSocketServer(Transport):
    """
    WebSocket server for handling client connections.

    Connection ids are uuid4 strings assigned on connect. Room labels are
    tracked here as sets of connection ids so room multicast does not need
    to consult the chat state.
    """

    def __init__(
        self,
        host: str,
        port: int,
        state: Optional[ChatState] = None,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ):
        """
        Initialize the WebSocket server.

        Args:
            host: Host address to bind to
            port: Port to listen on
            state: Optional chat state, a fresh one is created otherwise
            queue_size: Capacity of each connection's outbound queue
        """
        self.host = host
        self.port = port
        self.queue_size = queue_size
        self.service = ChatService(self, state)
        self.server = None
        self._connections: Dict[str, ServerConnection] = {}
        self._outboxes: Dict[str, asyncio.Queue] = {}
        self._writers: Dict[str, asyncio.Task] = {}
        # Maps room_id -> set of connection ids
        self._room_clients: Dict[str, Set[str]] = {}

    @property
    def state(self) -> ChatState:
        return self.service.state

    async def start(self):
        """Start the WebSocket server."""
        self.server = await websockets.serve(
            self.handle_client, self.host, self.port
        )
        if self.port == 0 and self.server.sockets:
            self.port = self.server.sockets[0].getsockname()[1]
        logger.info(f"WebSocket server started on ws://{self.host}:{self.port}")

    async def stop(self):
        """Stop the WebSocket server."""
        if self.server:
            self.server.close()
            await self.server.wait_closed()
            self.server = None
            logger.info("WebSocket server stopped")

    async def serve_forever(self):
        """Start the server and run until cancelled."""
        await self.start()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            logger.info("Server shutdown requested")
        finally:
            await self.stop()

    async def handle_client(self, websocket: ServerConnection):
        """
        Handle a client connection from open to close.

        Args:
            websocket: The WebSocket connection
        """
        connection_id = self.open_connection(websocket)

        try:
            async for message in websocket:
                self.service.handle_message(connection_id, message)
        except websockets.exceptions.ConnectionClosed:
            logger.info(f"Client {connection_id} connection closed")
        except Exception as e:
            logger.error(f"Error handling client {connection_id}: {e}")
        finally:
            await self.close_connection(connection_id)

    def open_connection(self, websocket) -> str:
        """
        Register a new connection and start its writer task.

        Returns:
            str: The assigned connection id
        """
        connection_id = str(uuid.uuid4())
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._connections[connection_id] = websocket
        self._outboxes[connection_id] = queue
        self._writers[connection_id] = asyncio.create_task(
            self._write_loop(connection_id, websocket, queue)
        )
        logger.info(f"User connected: {connection_id}")
        return connection_id

    async def close_connection(self, connection_id: str):
        """
        Tear down a connection: stop deliveries to it, run the disconnect
        lifecycle, then stop its writer task.
        """
        self._connections.pop(connection_id, None)
        self._outboxes.pop(connection_id, None)

        self.service.handle_disconnect(connection_id)
        self.state.forget_connection(connection_id)

        for members in self._room_clients.values():
            members.discard(connection_id)

        writer = self._writers.pop(connection_id, None)
        if writer:
            writer.cancel()
            try:
                await writer
            except asyncio.CancelledError:
                pass

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    # Transport

    def join(self, connection_id: str, room_id: str):
        self._room_clients.setdefault(room_id, set()).add(connection_id)

    def leave(self, connection_id: str, room_id: str):
        if room_id in self._room_clients:
            self._room_clients[room_id].discard(connection_id)

    def emit_to(self, connection_id: str, event: str, payload: Any):
        self._enqueue(connection_id, self._encode(event, payload))

    def emit_to_room(
        self,
        room_id: str,
        event: str,
        payload: Any,
        exclude: Optional[str] = None,
    ):
        frame = self._encode(event, payload)
        for connection_id in list(self._room_clients.get(room_id, ())):
            if connection_id != exclude:
                self._enqueue(connection_id, frame)

    def emit_all(self, event: str, payload: Any):
        frame = self._encode(event, payload)
        for connection_id in list(self._outboxes):
            self._enqueue(connection_id, frame)

    @staticmethod
    def _encode(event: str, payload: Any) -> str:
        return json.dumps({"type": event, "data": payload})

    def _enqueue(self, connection_id: str, frame: str):
        queue = self._outboxes.get(connection_id)
        if queue is None:
            logger.debug(f"Dropping frame for closed connection {connection_id}")
            return
        try:
            queue.put_nowait(frame)
        except asyncio.QueueFull:
            logger.warning(
                f"Outbound queue full for {connection_id}, dropping frame"
            )

    async def _write_loop(
        self, connection_id: str, websocket, queue: asyncio.Queue
    ):
        while True:
            frame = await queue.get()
            try:
                await websocket.send(frame)
            except websockets.exceptions.ConnectionClosed:
                logger.debug(f"Connection {connection_id} closed during send")
                self._outboxes.pop(connection_id, None)
                return
