"""
Blocking line input (stdin) exposed to asyncio code.

A daemon thread performs the blocking reads and hands each line to the event
loop, so a pending read never keeps the process alive at exit.
"""

import asyncio
import sys
import threading
from typing import Callable, Optional


class LineInput:
    """Asynchronous iterator-like wrapper around a blocking ``readline``."""

    def __init__(self, readline: Optional[Callable[[], str]] = None):
        self._readline = readline or sys.stdin.readline
        self._queue: Optional[asyncio.Queue] = None
        self._thread: Optional[threading.Thread] = None

    def start(self):
        """Start the reader thread; must be called from a running event loop."""
        if self._thread is not None:
            return
        loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._thread = threading.Thread(target=self._read_loop, args=(loop,), daemon=True)
        self._thread.start()

    def _read_loop(self, loop: asyncio.AbstractEventLoop):
        while True:
            try:
                line = self._readline()
            except (OSError, ValueError):
                line = ''
            try:
                loop.call_soon_threadsafe(self._queue.put_nowait, line)
            except RuntimeError:
                # Event loop already closed
                return
            if line == '':
                return

    async def readline(self) -> Optional[str]:
        """Next line without its terminator, or None at end of input."""
        self.start()
        line = await self._queue.get()
        if line == '':
            return None
        return line.rstrip('\r\n')
