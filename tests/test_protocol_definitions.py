#!/usr/bin/env python3
"""
Unit tests for common/protocol_definitions.py

Covers line classification, command lookup and the wire formatters.
"""

import re
import sys
import unittest
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from common.constants import COMMAND_CATALOG, EMOJI_TABLE, WireMessages
from common.protocol_definitions import (
    ChatText, Command, CommandRequest, create_chat_message, create_emoji_menu_lines,
    create_help_lines, create_joined_message, create_left_message, decode_line,
    encode_line, lookup_command, normalize_username, parse_client_line, resolve_emoji
)


class TestParseClientLine(unittest.TestCase):
    """Chat text versus command classification."""

    def test_plain_text_is_chat(self):
        self.assertEqual(parse_client_line("hello there"), ChatText("hello there"))

    def test_empty_line_is_chat(self):
        self.assertEqual(parse_client_line(""), ChatText(""))

    def test_known_command(self):
        parsed = parse_client_line("\\online-count")
        self.assertIsInstance(parsed, CommandRequest)
        self.assertEqual(parsed.command, Command.ONLINE_COUNT)
        self.assertTrue(parsed.is_valid)

    def test_every_catalog_entry_parses(self):
        for name, _ in COMMAND_CATALOG:
            with self.subTest(name=name):
                self.assertIsNotNone(parse_client_line("\\" + name).command)

    def test_commands_are_case_sensitive(self):
        parsed = parse_client_line("\\Help")
        self.assertIsInstance(parsed, CommandRequest)
        self.assertIsNone(parsed.command)
        self.assertFalse(parsed.is_valid)

    def test_trailing_text_is_not_a_command(self):
        self.assertIsNone(parse_client_line("\\help me").command)

    def test_bare_prefix_is_invalid_command(self):
        parsed = parse_client_line("\\")
        self.assertIsInstance(parsed, CommandRequest)
        self.assertIsNone(parsed.command)

    def test_legacy_aliases(self):
        self.assertEqual(lookup_command("serverTime"), Command.SERVER_UPTIME)
        self.assertEqual(lookup_command("clientTime"), Command.CLIENT_UPTIME)
        self.assertEqual(lookup_command("serverIP"), Command.SERVER_ADDRESS)
        self.assertEqual(lookup_command("clientNumber"), Command.ONLINE_COUNT)


class TestLineCodec(unittest.TestCase):

    def test_decode_strips_crlf(self):
        self.assertEqual(decode_line(b"hi\r\n"), "hi")
        self.assertEqual(decode_line(b"hi\n"), "hi")

    def test_decode_keeps_partial_last_line(self):
        self.assertEqual(decode_line(b"no newline"), "no newline")

    def test_decode_replaces_invalid_utf8(self):
        self.assertEqual(decode_line(b"bad \xff\n"), "bad \ufffd")

    def test_encode_appends_newline(self):
        self.assertEqual(encode_line("ça va"), "ça va\n".encode("utf-8"))

    def test_normalize_username(self):
        self.assertEqual(normalize_username("  alice \t"), "alice")
        self.assertEqual(normalize_username("   "), "")


class TestEmoji(unittest.TestCase):

    def test_valid_choices(self):
        for index, (_, emoji) in enumerate(EMOJI_TABLE, start=1):
            self.assertEqual(resolve_emoji(str(index)), emoji)

    def test_invalid_choices(self):
        for choice in ("0", str(len(EMOJI_TABLE) + 1), "01", " 1", "one", "", "-1"):
            with self.subTest(choice=choice):
                self.assertIsNone(resolve_emoji(choice))

    def test_menu_lists_every_emoji(self):
        lines = create_emoji_menu_lines()
        self.assertEqual(lines[0], WireMessages.EMOJI_MENU)
        self.assertEqual(lines[1:], ["1. Greet", "2. Bored", "3. Sad", "4. Bye"])


class TestFormatters(unittest.TestCase):

    def test_joined(self):
        self.assertEqual(create_joined_message("alice", 3), "alice has entered the chat (online: 3)")

    def test_left(self):
        self.assertEqual(create_left_message("alice"), "alice has left the chat.")

    def test_chat_uses_given_time(self):
        moment = datetime(2024, 1, 2, 9, 5, 7)
        self.assertEqual(create_chat_message("alice", "hi", moment), "alice(09:05:07): hi")

    def test_chat_defaults_to_now(self):
        self.assertRegex(create_chat_message("bob", "yo"), re.compile(r"^bob\(\d{2}:\d{2}:\d{2}\): yo$"))

    def test_help_lines(self):
        lines = create_help_lines()
        self.assertEqual(len(lines), len(COMMAND_CATALOG) + 1)
        self.assertEqual(lines[0], "Command \\help: List all the commands that can be sent")
        self.assertEqual(lines[-1], WireMessages.HELP_FOOTER)


if __name__ == '__main__':
    unittest.main()
