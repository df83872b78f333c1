"""
Protocol definitions for the line chat relay.

This module defines how a raw client line is classified (chat text or command)
and builds every line the server puts on the wire.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from common.constants import (
    COMMAND_ALIASES, COMMAND_CATALOG, COMMAND_PREFIX, EMOJI_TABLE, ENCODING,
    TIME_FORMAT, CommandNames, WireMessages
)


class Command(Enum):
    """Commands a client may issue after the backslash prefix."""
    QUIT = CommandNames.QUIT
    HELP = CommandNames.HELP
    SERVER_UPTIME = CommandNames.SERVER_UPTIME
    CLIENT_UPTIME = CommandNames.CLIENT_UPTIME
    SERVER_ADDRESS = CommandNames.SERVER_ADDRESS
    ONLINE_COUNT = CommandNames.ONLINE_COUNT
    EMOJI = CommandNames.EMOJI


@dataclass(frozen=True)
class ChatText:
    """A plain line to be relayed to everybody."""
    text: str


@dataclass(frozen=True)
class CommandRequest:
    """A prefixed line. ``command`` is None when the name is not recognised."""
    raw: str
    command: Optional[Command] = None

    @property
    def is_valid(self) -> bool:
        return self.command is not None


ClientLine = Union[ChatText, CommandRequest]


def lookup_command(name: str) -> Optional[Command]:
    """Resolve a command name (exact, case-sensitive), including old aliases."""
    name = COMMAND_ALIASES.get(name, name)
    try:
        return Command(name)
    except ValueError:
        return None


def parse_client_line(line: str) -> ClientLine:
    """Classify one line received from a chatting client."""
    if line.startswith(COMMAND_PREFIX):
        return CommandRequest(raw=line, command=lookup_command(line[len(COMMAND_PREFIX):]))
    return ChatText(text=line)


def decode_line(data: bytes) -> str:
    """Decode one received line and drop its line terminator."""
    return data.decode(ENCODING, errors='replace').rstrip('\r\n')


def encode_line(message: str) -> bytes:
    """Encode one outgoing line, newline-terminated."""
    return (message + '\n').encode(ENCODING)


def normalize_username(raw: str) -> str:
    """Usernames are compared after trimming surrounding whitespace."""
    return raw.strip()


_EMOJI_BY_CHOICE = {str(index): emoji for index, (_, emoji) in enumerate(EMOJI_TABLE, start=1)}


def resolve_emoji(choice: str) -> Optional[str]:
    """Map a menu answer ("1".."N") to its emoji, or None for anything else."""
    return _EMOJI_BY_CHOICE.get(choice)


def format_time(moment: Optional[datetime] = None) -> str:
    """Format the HH:MM:SS tag used in chat broadcasts."""
    return (moment or datetime.now()).strftime(TIME_FORMAT)


def create_joined_message(username: str, online_count: int) -> str:
    """Create the announcement for a newly accepted user."""
    return WireMessages.JOINED.format(username=username, count=online_count)


def create_left_message(username: str) -> str:
    """Create the announcement for a departed user."""
    return WireMessages.LEFT.format(username=username)


def create_chat_message(username: str, text: str, moment: Optional[datetime] = None) -> str:
    """Create a relayed chat line."""
    return WireMessages.CHAT.format(username=username, time=format_time(moment), text=text)


def create_emoji_message(username: str, emoji: str) -> str:
    """Create a relayed emoji line."""
    return WireMessages.EMOJI.format(username=username, emoji=emoji)


def create_help_lines() -> List[str]:
    """Create the reply to the help command."""
    lines = [
        WireMessages.HELP_ENTRY.format(prefix=COMMAND_PREFIX, name=name, description=description)
        for name, description in COMMAND_CATALOG
    ]
    lines.append(WireMessages.HELP_FOOTER)
    return lines


def create_emoji_menu_lines() -> List[str]:
    """Create the numbered emoji menu."""
    lines = [WireMessages.EMOJI_MENU]
    for index, (label, _) in enumerate(EMOJI_TABLE, start=1):
        lines.append(WireMessages.EMOJI_OPTION.format(index=index, label=label))
    return lines
