#!/usr/bin/env python3
"""
Line Chat Relay Server - Main Entry Point

Accepts TCP connections and runs one ChatSession task per connection. All
sessions share a single ConnectionRegistry through the ChatServer.
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Set

from common.constants import WireMessages
from server.chat.chat_server import ChatServer
from server.chat.registry import ConnectionRegistry, now_ms
from server.chat.session import ChatSession
from server.control.console import OperatorConsole
from server.utils.config import ServerConfig
from server.utils.errors import ServerStartupError
from server.utils.logger import logger


class ChatRelayServer:
    """Listener that ties sessions, registry and operator console together."""

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.chat_server = ChatServer(ConnectionRegistry())
        self.sessions: Set[asyncio.Task] = set()
        self._server: Optional[asyncio.AbstractServer] = None
        self._stopped: Optional[asyncio.Event] = None
        self._closing = False

    @property
    def registry(self) -> ConnectionRegistry:
        return self.chat_server.registry

    @property
    def port(self) -> Optional[int]:
        """Port actually bound (differs from config when configured as 0)."""
        if not self._server or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        task = asyncio.current_task()
        self.sessions.add(task)
        try:
            await ChatSession(reader, writer, self.chat_server).run()
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.log_error(f"session {writer.get_extra_info('peername')}", e)
        finally:
            self.sessions.discard(task)

    async def start(self):
        """Bind the listening socket and start accepting connections."""
        self._stopped = asyncio.Event()
        try:
            self._server = await asyncio.start_server(
                self.handle_client,
                self.config.host,
                self.config.port,
                limit=self.config.max_line_length,
            )
        except OSError as e:
            raise ServerStartupError(self.config.host, self.config.port, e) from e

        self.registry.started_at_ms = now_ms()
        addr = ', '.join(str(sock.getsockname()) for sock in self._server.sockets)
        logger.info(f"Server listening on {addr}")

    async def shutdown(self):
        """Announce the shutdown to every client, then stop."""
        if self._closing:
            return
        await self.chat_server.broadcast(WireMessages.SERVER_SHUTDOWN)
        await self.stop()

    async def stop(self):
        """Close the listener and every client connection."""
        if self._closing:
            return
        self._closing = True

        if self._server is not None:
            self._server.close()

        for username, writer in await self.registry.drain_all():
            try:
                writer.close()
            except (ConnectionError, OSError) as e:
                logger.debug(f"Error closing connection of '{username}': {e}")

        tasks: List[asyncio.Task] = [t for t in self.sessions if t is not asyncio.current_task()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        if self._server is not None:
            await self._server.wait_closed()

        if self._stopped is not None:
            self._stopped.set()
        logger.info("The server has shut down.")

    async def run(self):
        """Start the server and serve until stopped."""
        await self.start()

        console_task = None
        if self.config.enable_console:
            console = OperatorConsole(self.shutdown)
            console_task = asyncio.create_task(console.run())

        try:
            await self._stopped.wait()
        finally:
            if console_task is not None:
                console_task.cancel()
            await self.stop()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Line Chat Relay Server')
    parser.add_argument('--host', type=str, default=None,
                        help='Host to bind to (default: $CHAT_SERVER_HOST or 0.0.0.0)')
    parser.add_argument('--port', type=int, default=None,
                        help='TCP port to listen on (default: $CHAT_SERVER_PORT or 4396)')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Directory for the chat transcript (default: logs)')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level name (default: INFO)')
    parser.add_argument('--no-console', action='store_true',
                        help='Do not read operator commands from stdin')
    parser.add_argument('--env-file', type=str, default=None,
                        help='Path of a .env file to load')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = ServerConfig.from_env(
        args.env_file,
        host=args.host,
        port=args.port,
        logs_dir=args.log_dir,
        log_level=args.log_level,
        enable_console=False if args.no_console else None,
    )
    logger.configure(config.logs_dir, config.log_level)

    server = ChatRelayServer(config)
    try:
        asyncio.run(server.run())
    except ServerStartupError as e:
        logger.error(f"Server failed to start: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
