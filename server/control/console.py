"""
Operator console.

Reads commands typed on the server's stdin. ``\\quit`` announces the shutdown
to every client and stops the server; anything else is rejected.
"""

from typing import Awaitable, Callable, Optional

from common.constants import COMMAND_PREFIX, CommandNames
from common.line_input import LineInput
from server.utils.logger import logger

QUIT_COMMAND = COMMAND_PREFIX + CommandNames.QUIT


class OperatorConsole:
    """Server-side operator input loop."""

    def __init__(self, shutdown: Callable[[], Awaitable[None]], line_input: Optional[LineInput] = None):
        self.shutdown = shutdown
        self.line_input = line_input or LineInput()

    async def run(self):
        logger.info(f"Input {QUIT_COMMAND} to close the chat room server.")
        while True:
            line = await self.line_input.readline()
            if line is None:
                logger.debug("Operator console input closed")
                return

            command = line.strip()
            if not command:
                continue
            if command == QUIT_COMMAND:
                logger.info("Shutdown requested from the console")
                await self.shutdown()
                return
            logger.warning("command input wrong.")
