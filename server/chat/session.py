"""
Chat session module.

One ChatSession per accepted connection. It walks the connection through
username negotiation, the chat loop and teardown:

    CONNECTING -> NEGOTIATING_NAME -> CHATTING -> CLOSING -> CLOSED

Read errors, write errors and end-of-stream all end in the same teardown;
none of them escape to the listener.
"""

import asyncio
from enum import Enum
from typing import Optional

from common.constants import WireMessages
from common.protocol_definitions import (
    CommandRequest, create_chat_message, create_emoji_message, create_joined_message,
    create_left_message, decode_line, normalize_username, parse_client_line, resolve_emoji
)
from server.chat.chat_server import ChatServer
from server.chat.commands import CommandContext, dispatch
from server.chat.registry import now_ms
from server.utils.logger import logger


class SessionState(Enum):
    CONNECTING = 'connecting'
    NEGOTIATING_NAME = 'negotiating_name'
    CHATTING = 'chatting'
    CLOSING = 'closing'
    CLOSED = 'closed'


class ChatSession:
    """Server side of one client connection."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, chat_server: ChatServer):
        self.reader = reader
        self.writer = writer
        self.chat_server = chat_server
        self.registry = chat_server.registry

        self.username: Optional[str] = None
        self.joined_at_ms: Optional[int] = None
        self.state = SessionState.CONNECTING
        self.addr = writer.get_extra_info('peername')

    async def run(self):
        """Drive the connection until it is closed."""
        logger.log_connection(self.addr)
        try:
            if await self._negotiate_name():
                await self._chat()
        except asyncio.CancelledError:
            logger.info(f"Session cancelled for {self.addr}")
            raise
        except (ConnectionError, OSError) as e:
            logger.warning(f"Connection error for {self.username or self.addr}: {e}")
        finally:
            await self._close()

    async def _read_line(self) -> Optional[str]:
        """Next line from the client, or None at end-of-stream."""
        try:
            data = await self.reader.readline()
        except ValueError as e:
            # StreamReader reports an over-long line as ValueError
            raise ConnectionError(f"Line too long: {e}") from e
        if not data:
            return None
        return decode_line(data)

    async def _send(self, message: str):
        await self.chat_server.send_line(self.writer, message)

    async def _negotiate_name(self) -> bool:
        """Ask for a username until one is accepted. Returns False if the peer left first."""
        self.state = SessionState.NEGOTIATING_NAME

        while True:
            await self._send(WireMessages.WELCOME)
            raw = await self._read_line()
            if raw is None:
                return False

            name = normalize_username(raw)
            if not name:
                logger.log_name_rejected(self.addr, "empty")
                await self._send(WireMessages.NAME_EMPTY)
                continue

            online = await self.registry.register(name, self.writer)
            if online is None:
                logger.log_name_rejected(self.addr, f"'{name}' taken")
                await self._send(WireMessages.NAME_TAKEN)
                continue

            self.username = name
            break

        await self._send(WireMessages.ACCEPT)
        self.joined_at_ms = now_ms()
        self.state = SessionState.CHATTING
        logger.log_join(self.username, self.addr, online)
        await self.chat_server.broadcast(create_joined_message(self.username, online))
        return True

    async def _chat(self):
        while True:
            line = await self._read_line()
            if line is None:
                return

            parsed = parse_client_line(line)
            if isinstance(parsed, CommandRequest):
                if await self._handle_command(parsed):
                    return
            else:
                await self.chat_server.broadcast(create_chat_message(self.username, parsed.text))

    async def _handle_command(self, request: CommandRequest) -> bool:
        """Run one command. Returns True when the session should end."""
        logger.log_command(self.username, request.raw)
        result = dispatch(request, self._command_context())
        await self.chat_server.send_lines(self.writer, result.replies)

        if result.terminate:
            return True
        if result.select_emoji:
            return not await self._select_emoji()
        return False

    def _command_context(self) -> CommandContext:
        sockname = self.writer.get_extra_info('sockname')
        return CommandContext(
            server_started_at_ms=self.chat_server.started_at_ms,
            session_joined_at_ms=self.joined_at_ms,
            online_count=self.registry.count(),
            server_address=sockname[0] if sockname else 'unknown',
            now_ms=now_ms(),
        )

    async def _select_emoji(self) -> bool:
        """Wait for a valid menu number and relay the emoji. False on end-of-stream."""
        while True:
            choice = await self._read_line()
            if choice is None:
                return False

            emoji = resolve_emoji(choice)
            if emoji is None:
                await self._send(WireMessages.INVALID_EMOJI)
                continue

            await self.chat_server.broadcast(create_emoji_message(self.username, emoji))
            return True

    async def _close(self):
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSING

        if self.username is not None:
            # Entry goes before the announcement and before the socket
            if await self.registry.unregister(self.username):
                logger.log_leave(self.username, self.addr)
                await self.chat_server.broadcast(create_left_message(self.username))

        try:
            self.writer.close()
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Error closing connection of {self.username or self.addr}: {e}")

        self.state = SessionState.CLOSED
        logger.log_disconnect(self.addr, self.username)
