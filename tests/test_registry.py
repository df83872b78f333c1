#!/usr/bin/env python3
"""
Unit tests for the connection registry and broadcast fan-out.
"""

import asyncio
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, Mock

sys.path.insert(0, str(Path(__file__).parent.parent))

from server.chat.chat_server import ChatServer
from server.chat.registry import ConnectionRegistry
from server.utils.logger import logger


def make_writer(fail_with=None, closing=False):
    """Mock StreamWriter; ``drain`` raises ``fail_with`` when given."""
    writer = Mock()
    writer.is_closing.return_value = closing
    writer.drain = AsyncMock(side_effect=fail_with)
    return writer


class TestConnectionRegistry(unittest.IsolatedAsyncioTestCase):

    async def test_register_returns_count(self):
        registry = ConnectionRegistry()
        self.assertEqual(await registry.register("alice", make_writer()), 1)
        self.assertEqual(await registry.register("bob", make_writer()), 2)
        self.assertEqual(registry.count(), 2)
        self.assertIn("alice", registry)

    async def test_duplicate_name_rejected(self):
        registry = ConnectionRegistry()
        first = make_writer()
        await registry.register("alice", first)
        self.assertIsNone(await registry.register("alice", make_writer()))
        self.assertEqual(registry.count(), 1)
        self.assertIs((await registry.snapshot())[0][1], first)

    async def test_concurrent_registration_admits_one(self):
        registry = ConnectionRegistry()
        results = await asyncio.gather(*(registry.register("carol", make_writer()) for _ in range(20)))
        self.assertEqual(sum(1 for r in results if r is not None), 1)
        self.assertEqual(registry.usernames(), ["carol"])

    async def test_unregister_frees_name(self):
        registry = ConnectionRegistry()
        await registry.register("alice", make_writer())
        self.assertTrue(await registry.unregister("alice"))
        self.assertFalse(await registry.unregister("alice"))
        self.assertEqual(await registry.register("alice", make_writer()), 1)

    async def test_snapshot_is_a_copy(self):
        registry = ConnectionRegistry()
        await registry.register("alice", make_writer())
        snapshot = await registry.snapshot()
        await registry.register("bob", make_writer())
        self.assertEqual([name for name, _ in snapshot], ["alice"])

    async def test_drain_all_empties(self):
        registry = ConnectionRegistry()
        await registry.register("alice", make_writer())
        await registry.register("bob", make_writer())
        entries = await registry.drain_all()
        self.assertEqual(sorted(name for name, _ in entries), ["alice", "bob"])
        self.assertEqual(registry.count(), 0)

    def test_started_at_can_be_given(self):
        self.assertEqual(ConnectionRegistry(started_at_ms=42).started_at_ms, 42)


class TestBroadcast(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        logger.configure(logs_dir=self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    async def test_reaches_every_registered_writer(self):
        chat = ChatServer()
        writers = [make_writer() for _ in range(3)]
        for i, writer in enumerate(writers):
            await chat.registry.register(f"user{i}", writer)

        delivered = await chat.broadcast("hello")

        self.assertEqual(delivered, 3)
        for writer in writers:
            writer.write.assert_called_once_with(b"hello\n")
            writer.drain.assert_awaited_once()

    async def test_failed_writer_does_not_stop_fanout(self):
        chat = ChatServer()
        broken = make_writer(fail_with=ConnectionResetError("reset"))
        healthy = make_writer()
        await chat.registry.register("broken", broken)
        await chat.registry.register("healthy", healthy)

        delivered = await chat.broadcast("still here")

        self.assertEqual(delivered, 1)
        healthy.write.assert_called_once_with(b"still here\n")

    async def test_closing_writer_is_skipped(self):
        chat = ChatServer()
        closing = make_writer(closing=True)
        await chat.registry.register("gone", closing)

        self.assertEqual(await chat.broadcast("x"), 0)
        closing.write.assert_not_called()

    async def test_broadcast_is_written_to_transcript(self):
        chat = ChatServer()
        await chat.broadcast("logged line")
        transcript = Path(self.tmp.name, "chat_history.log").read_text(encoding="utf-8")
        self.assertIn("logged line", transcript)

    async def test_send_lines_writes_in_order(self):
        chat = ChatServer()
        writer = make_writer()
        await chat.send_lines(writer, ["a", "b"])
        writer.write.assert_called_once_with(b"a\nb\n")

    async def test_send_lines_with_nothing_is_noop(self):
        chat = ChatServer()
        writer = make_writer()
        await chat.send_lines(writer, [])
        writer.write.assert_not_called()


if __name__ == '__main__':
    unittest.main()
