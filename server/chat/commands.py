"""
Command dispatcher.

Maps a parsed command to the lines sent back to the issuing client. Nothing
here touches the network or the registry; the session supplies a read-only
context and acts on the result.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from common.constants import WireMessages
from common.protocol_definitions import (
    Command, CommandRequest, create_emoji_menu_lines, create_help_lines
)

MS_PER_MINUTE = 60 * 1000


@dataclass(frozen=True)
class CommandContext:
    """What a command may read about the server and the issuing session."""
    server_started_at_ms: int
    session_joined_at_ms: int
    online_count: int
    server_address: str
    now_ms: int


@dataclass
class CommandResult:
    """Reply lines for the issuing client plus what the session should do next."""
    replies: List[str] = field(default_factory=list)
    terminate: bool = False
    select_emoji: bool = False


def elapsed_minutes(since_ms: int, now_ms: int) -> int:
    return max(0, now_ms - since_ms) // MS_PER_MINUTE


def _quit(ctx: CommandContext) -> CommandResult:
    return CommandResult(terminate=True)


def _help(ctx: CommandContext) -> CommandResult:
    return CommandResult(replies=create_help_lines())


def _server_uptime(ctx: CommandContext) -> CommandResult:
    minutes = elapsed_minutes(ctx.server_started_at_ms, ctx.now_ms)
    return CommandResult(replies=[WireMessages.SERVER_UPTIME.format(minutes=minutes)])


def _client_uptime(ctx: CommandContext) -> CommandResult:
    minutes = elapsed_minutes(ctx.session_joined_at_ms, ctx.now_ms)
    return CommandResult(replies=[WireMessages.CLIENT_UPTIME.format(minutes=minutes)])


def _server_address(ctx: CommandContext) -> CommandResult:
    return CommandResult(replies=[WireMessages.SERVER_ADDRESS.format(address=ctx.server_address)])


def _online_count(ctx: CommandContext) -> CommandResult:
    return CommandResult(replies=[WireMessages.ONLINE_COUNT.format(count=ctx.online_count)])


def _emoji(ctx: CommandContext) -> CommandResult:
    return CommandResult(replies=create_emoji_menu_lines(), select_emoji=True)


COMMAND_HANDLERS: Dict[Command, Callable[[CommandContext], CommandResult]] = {
    Command.QUIT: _quit,
    Command.HELP: _help,
    Command.SERVER_UPTIME: _server_uptime,
    Command.CLIENT_UPTIME: _client_uptime,
    Command.SERVER_ADDRESS: _server_address,
    Command.ONLINE_COUNT: _online_count,
    Command.EMOJI: _emoji,
}


def dispatch(request: CommandRequest, ctx: CommandContext) -> CommandResult:
    """Answer one command. Unknown commands get a single ``Invalid command`` line."""
    handler = COMMAND_HANDLERS.get(request.command)
    if handler is None:
        return CommandResult(replies=[WireMessages.INVALID_COMMAND])
    return handler(ctx)
