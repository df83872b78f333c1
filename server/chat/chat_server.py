"""
Chat server module.

This module handles server-side chat messaging functionality: delivering
lines to a single client and fanning lines out to every registered client.
"""

import asyncio
from typing import Optional

from common.protocol_definitions import encode_line
from server.chat.registry import ConnectionRegistry
from server.utils.logger import logger


class ChatServer:
    """Server-side chat functionality."""

    def __init__(self, registry: Optional[ConnectionRegistry] = None):
        self.registry = registry or ConnectionRegistry()

    @property
    def started_at_ms(self) -> int:
        return self.registry.started_at_ms

    async def broadcast(self, message: str) -> int:
        """
        Send one line to every registered client.

        The recipient list is copied under the registry lock; writes happen
        outside it. A failing recipient is logged and skipped. Returns the
        number of clients the line was written to.
        """
        entries = await self.registry.snapshot()
        data = encode_line(message)
        delivered = 0

        for username, writer in entries:
            if writer.is_closing():
                logger.debug(f"Skipping closing connection of '{username}'")
                continue
            try:
                writer.write(data)
                await writer.drain()
                delivered += 1
            except (ConnectionError, OSError) as e:
                logger.warning(f"Failed to broadcast to '{username}': {e}")

        logger.log_broadcast(message, delivered)
        return delivered

    async def send_line(self, writer: asyncio.StreamWriter, message: str) -> None:
        """Send one line to a single client; I/O errors propagate to the caller."""
        writer.write(encode_line(message))
        await writer.drain()

    async def send_lines(self, writer: asyncio.StreamWriter, messages) -> None:
        """Send several lines to a single client in order."""
        if not messages:
            return
        writer.write(b''.join(encode_line(m) for m in messages))
        await writer.drain()
