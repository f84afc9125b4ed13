#!/usr/bin/env python3
"""
Chat Client Application

Connects to a chat server, registers a display name, optionally switches
room and sends a message, then logs every event it receives until the
connection closes.

Usage:
    chat-client --name alice
    chat-client --url ws://localhost:3000 --name bob --room dev --say "hi"
"""

import argparse
import asyncio
import logging
import os
import sys

from .chat_client import ChatClient
from .schemas import ChatMessage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def _log_message(message: ChatMessage):
    if message.is_private:
        logger.info(
            f"[private] {message.sender} -> {message.recipient}: {message.body}"
        )
    else:
        logger.info(f"[{message.room}] {message.sender}: {message.body}")


async def run_client(url: str, name: str, room: str = None, say: str = None):
    """
    Run one client session.

    Args:
        url: WebSocket URL of the chat server
        name: Display name to register
        room: Optional room to move to after joining
        say: Optional message to send once joined
    """
    client = ChatClient(url)
    client.set_on_message(_log_message)
    client.set_on_error(lambda text: logger.error(f"Error: {text}"))
    client.set_on_room_changed(lambda room_id: logger.info(f"Now in {room_id}"))

    await client.connect()
    receiver = asyncio.create_task(client.receive_messages())
    try:
        await client.join_chat(name)
        if room:
            await client.join_room(room)
        if say:
            await client.send_message(say)
        await receiver
    finally:
        receiver.cancel()
        await client.disconnect()


def main():
    """Main entry point for the chat client."""
    parser = argparse.ArgumentParser(description="Real-time chat client")
    parser.add_argument(
        "--url",
        default=os.environ.get(
            "CHAT_SERVER_URL", f"ws://localhost:{os.environ.get('PORT', '3000')}"
        ),
        help="WebSocket URL of the chat server",
    )
    parser.add_argument("--name", required=True, help="Display name")
    parser.add_argument("--room", help="Room to join after registering")
    parser.add_argument("--say", help="Message to send once joined")
    args = parser.parse_args()

    try:
        asyncio.run(run_client(args.url, args.name, args.room, args.say))
    except ConnectionError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)


if __name__ == "__main__":
    main()
