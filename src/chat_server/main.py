#!/usr/bin/env python3
"""
Real-time Chat Server

Presence and message-routing server for WebSocket chat clients.

Configuration (environment):
    PORT                 Listen port (default 3000)
    HOST                 Bind address (default 0.0.0.0)
    LOG_LEVEL            Logging level (default INFO)
    OUTBOUND_QUEUE_SIZE  Per-connection outbound buffer (default 256)
"""

import asyncio
import logging
import os
import sys

from .websocket_server import WebSocketServer, DEFAULT_QUEUE_SIZE

DEFAULT_PORT = 3000

# Configure logging
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


async def run_server(host: str, port: int, queue_size: int):
    """
    Run the chat server until cancelled.

    Args:
        host: Host address to bind to
        port: Port to listen on
        queue_size: Capacity of each connection's outbound queue
    """
    server = WebSocketServer(host, port, queue_size=queue_size)
    await server.serve_forever()
    logger.info("Chat server stopped")


def main():
    """Main entry point for the chat server."""
    logger.info("Starting chat server...")

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", str(DEFAULT_PORT)))
    queue_size = int(
        os.environ.get("OUTBOUND_QUEUE_SIZE", str(DEFAULT_QUEUE_SIZE))
    )

    try:
        asyncio.run(run_server(host, port, queue_size))
    except KeyboardInterrupt:
        logger.info("Shutting down chat server...")
        sys.exit(0)


if __name__ == "__main__":
    main()
