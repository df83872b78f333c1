#!/usr/bin/env python3
"""
Line Chat Relay Client - Main Entry Point

Terminal client: asks for the server address, negotiates a username, then
relays keyboard lines to the server and server lines to the screen.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from client.chat.chat_client import ChatClient
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.line_input import LineInput

ADDRESS_PROMPT = "What is the address of the server that you wish to connect to?"


class TerminalChatClient:
    """Interactive terminal front end around ChatClient."""

    def __init__(self, config: ClientConfig, line_input: Optional[LineInput] = None, output=print):
        self.config = config
        self.line_input = line_input or LineInput()
        self.output = output

    async def _ask_address(self) -> Optional[str]:
        self.output(ADDRESS_PROMPT)
        address = await self.line_input.readline()
        if address is None:
            return None
        return address.strip() or self.config.default_host

    async def establish_session(self) -> Optional[ChatClient]:
        """
        Connect and get a username accepted.

        A configured host is tried once; otherwise the user is asked for an
        address again after every failed connection or lost handshake.
        """
        while True:
            host = self.config.host or await self._ask_address()
            if host is None:
                return None

            client = ChatClient(self.line_input, self.output)
            retries = self.config.retry_attempts if self.config.host else 1
            if await client.connect(host, self.config.port, retries, self.config.retry_delay):
                if await client.negotiate_username():
                    return client
                await client.close()
            else:
                self.output(f"Cannot connect to {host}:{self.config.port}")

            if self.config.host:
                return None

    async def run(self) -> int:
        client = await self.establish_session()
        if client is None:
            return 1
        await client.relay()
        return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Line Chat Relay Client')
    parser.add_argument('--server-ip', type=str, default=None,
                        help='Server address (default: ask interactively)')
    parser.add_argument('--port', type=int, default=None,
                        help='Server port (default: $CHAT_SERVER_PORT or 4396)')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Diagnostic logging level (default: WARNING)')
    parser.add_argument('--env-file', type=str, default=None,
                        help='Path of a .env file to load')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if args.log_level:
        logger.set_level(args.log_level)
    config = ClientConfig.from_env(args.env_file, host=args.server_ip, port=args.port)

    try:
        return asyncio.run(TerminalChatClient(config).run())
    except KeyboardInterrupt:
        print("\n[INFO] Client terminated")
        return 0


if __name__ == "__main__":
    sys.exit(main())
