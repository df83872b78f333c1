"""
Chat client module.

This module handles client-side chat messaging: the username handshake and
the two relay loops (keyboard -> server, server -> screen).
"""

import asyncio
from typing import Callable, Optional

from common.constants import COMMAND_PREFIX, CommandNames, WireMessages
from common.line_input import LineInput
from common.protocol_definitions import decode_line, encode_line
from client.utils.logger import logger


class ChatClient:
    """Client-side chat functionality."""

    def __init__(self, line_input: Optional[LineInput] = None, output: Callable[[str], None] = print):
        self.line_input = line_input or LineInput()
        self.output = output
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.running = False

    async def connect(self, host: str, port: int, retry_count: int = 1, base_delay: float = 1.0) -> bool:
        """Establish connection to the server with retry logic and exponential backoff."""
        attempt = 0

        while attempt < retry_count:
            try:
                self.reader, self.writer = await asyncio.open_connection(host, port)
                logger.log_connection(host, port, True)
                self.running = True
                return True
            except OSError as e:
                attempt += 1
                logger.log_connection(host, port, False)
                logger.log_error("connection", e)

                if attempt < retry_count:
                    delay = base_delay * (2 ** (attempt - 1))
                    logger.info(f"Retrying connection in {delay}s (attempt {attempt}/{retry_count})...")
                    await asyncio.sleep(delay)
        return False

    async def send_line(self, message: str) -> bool:
        """Send one line to the server."""
        if not self.writer:
            logger.error("Not connected to server")
            return False
        try:
            self.writer.write(encode_line(message))
            await self.writer.drain()
            return True
        except (ConnectionError, OSError) as e:
            logger.error(f"Failed to send message: {e}")
            return False

    async def receive_line(self) -> Optional[str]:
        """Next line from the server, or None once the server is gone."""
        try:
            data = await self.reader.readline()
        except (ConnectionError, OSError, ValueError) as e:
            logger.error(f"Connection lost: {e}")
            return None
        if not data:
            return None
        return decode_line(data)

    async def negotiate_username(self) -> bool:
        """
        Answer the server's username prompts until the name is accepted.

        Rejection lines are shown as they arrive. Returns False if either the
        server or the keyboard input goes away first.
        """
        while True:
            line = await self.receive_line()
            if line is None:
                self.output("The server may have been shut down.")
                return False

            if line.startswith(WireMessages.WELCOME):
                self.output(WireMessages.WELCOME)
                name = await self.line_input.readline()
                if name is None:
                    return False
                if not await self.send_line(name):
                    return False
            elif line.startswith(WireMessages.ACCEPT):
                self.output(WireMessages.ACCEPT)
                self.output(WireMessages.COMMAND_HINT)
                return True
            else:
                self.output(line)

    async def listen_for_messages(self):
        """Print every line from the server until it closes the connection."""
        while self.running:
            line = await self.receive_line()
            if line is None:
                self.output(WireMessages.DISCONNECTED)
                break
            self.output(line)
        self.running = False

    async def forward_input(self):
        """Send every typed line to the server; end of input quits the chat."""
        while self.running:
            line = await self.line_input.readline()
            if line is None:
                await self.send_line(COMMAND_PREFIX + CommandNames.QUIT)
                break
            if not await self.send_line(line):
                break

    async def relay(self):
        """Run both relay loops until the server side ends."""
        listener_task = asyncio.create_task(self.listen_for_messages())
        sender_task = asyncio.create_task(self.forward_input())
        try:
            await listener_task
        finally:
            sender_task.cancel()
            try:
                await sender_task
            except asyncio.CancelledError:
                pass
            await self.close()

    async def close(self):
        """Close the connection."""
        self.running = False
        if self.writer:
            try:
                self.writer.close()
                await self.writer.wait_closed()
            except (ConnectionError, OSError) as e:
                logger.debug(f"Error closing connection: {e}")
            self.writer = None
