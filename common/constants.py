"""
Shared constants for the line chat relay.

This module contains all constants used across client and server components,
including the exact wire strings both sides match on.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 4396

# Buffer Sizes
MAX_LINE_LENGTH = 64 * 1024  # bytes per line before the connection is dropped
ENCODING = 'utf-8'

# Logging
LOG_DIR = 'logs'
LOG_LEVEL = 'INFO'
CHAT_LOG_FILE = 'chat_history.log'

# Client retry behaviour
MAX_RETRY_ATTEMPTS = 3
RECONNECT_DELAY_BASE = 1.0

# Broadcast timestamp, e.g. "alice(14:03:59): hi"
TIME_FORMAT = '%H:%M:%S'

# Commands are lines starting with a single backslash
COMMAND_PREFIX = '\\'


# Wire strings
class WireMessages:
    # Name negotiation
    WELCOME = 'Please type your username.'
    ACCEPT = 'Your username is accepted. Please type messages'
    NAME_TAKEN = 'Sorry, this username is unavailable'
    NAME_EMPTY = 'Sorry, you can not set the name as empty'

    # Announcements
    JOINED = '{username} has entered the chat (online: {count})'
    LEFT = '{username} has left the chat.'
    CHAT = '{username}({time}): {text}'
    EMOJI = '{username}: {emoji}'
    SERVER_SHUTDOWN = 'The server is shut down.'

    # Command replies
    HELP_ENTRY = 'Command {prefix}{name}: {description}'
    HELP_FOOTER = '------ case sensitive ------'
    SERVER_UPTIME = 'server has run for {minutes} minutes'
    CLIENT_UPTIME = 'you have been in the chat room for {minutes} minutes'
    SERVER_ADDRESS = 'server IP: {address}'
    ONLINE_COUNT = 'client numbers: {count}'
    INVALID_COMMAND = 'Invalid command'
    EMOJI_MENU = 'Please select the emoji you want to send: (enter the number)'
    EMOJI_OPTION = '{index}. {label}'
    INVALID_EMOJI = 'Invalid emoji, select again:'

    # Client side
    COMMAND_HINT = '------ Command List: \\help   Quit: \\quit ------'
    DISCONNECTED = 'Disconnected from the server.'


# Command names as typed after the prefix
class CommandNames:
    QUIT = 'quit'
    HELP = 'help'
    SERVER_UPTIME = 'server-uptime'
    CLIENT_UPTIME = 'client-uptime'
    SERVER_ADDRESS = 'server-address'
    ONLINE_COUNT = 'online-count'
    EMOJI = 'emoji'


# Catalog shown by \help, in display order
COMMAND_CATALOG = (
    (CommandNames.HELP, 'List all the commands that can be sent'),
    (CommandNames.QUIT, 'Quit the chat room'),
    (CommandNames.SERVER_UPTIME, 'Server total runtime'),
    (CommandNames.CLIENT_UPTIME, 'The time you have been in the chat room'),
    (CommandNames.SERVER_ADDRESS, 'Server IP address'),
    (CommandNames.ONLINE_COUNT, 'Total number of clients currently in the chat room'),
    (CommandNames.EMOJI, 'The emoji you can send'),
)

# Older spellings still accepted by the server
COMMAND_ALIASES = {
    'serverTime': CommandNames.SERVER_UPTIME,
    'clientTime': CommandNames.CLIENT_UPTIME,
    'serverIP': CommandNames.SERVER_ADDRESS,
    'clientNumber': CommandNames.ONLINE_COUNT,
}

# (menu label, emoji text); menu index is position + 1
EMOJI_TABLE = (
    ('Greet', '~^o^~'),
    ('Bored', '\\(╯-╰)/'),
    ('Sad', '//(ㄒoㄒ)//'),
    ('Bye', '(^_^)/~~'),
)
