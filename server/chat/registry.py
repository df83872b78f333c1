"""
Connection registry.

Process-wide mapping from username to the writer of that user's connection.
Every mutation, and the duplicate check that precedes an insert, runs under
one lock so two sessions can never register the same name.
"""

import asyncio
import time
from typing import Dict, List, Optional, Tuple


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class ConnectionRegistry:
    """Username -> writer table shared by all sessions."""

    def __init__(self, started_at_ms: Optional[int] = None):
        self.started_at_ms = started_at_ms if started_at_ms is not None else now_ms()
        self._writers: Dict[str, asyncio.StreamWriter] = {}
        self.lock = asyncio.Lock()

    async def register(self, username: str, writer: asyncio.StreamWriter) -> Optional[int]:
        """
        Insert ``username`` if nobody holds it.

        Returns the number of registered users after the insert, or None when
        the name is already taken.
        """
        async with self.lock:
            if username in self._writers:
                return None
            self._writers[username] = writer
            return len(self._writers)

    async def unregister(self, username: str) -> bool:
        """Remove ``username``; returns False if it was not registered."""
        async with self.lock:
            return self._writers.pop(username, None) is not None

    async def snapshot(self) -> List[Tuple[str, asyncio.StreamWriter]]:
        """Copy of the current entries, safe to iterate without the lock."""
        async with self.lock:
            return list(self._writers.items())

    async def drain_all(self) -> List[Tuple[str, asyncio.StreamWriter]]:
        """Remove and return every entry (server shutdown)."""
        async with self.lock:
            entries = list(self._writers.items())
            self._writers.clear()
            return entries

    def count(self) -> int:
        """Number of registered users."""
        return len(self._writers)

    def __contains__(self, username: str) -> bool:
        return username in self._writers

    def usernames(self) -> List[str]:
        return list(self._writers)
