"""
Server error types.
"""


class ChatServerError(Exception):
    """Base class for chat server failures."""


class ServerStartupError(ChatServerError):
    """The listening socket could not be opened (address in use, no permission...)."""

    def __init__(self, host: str, port: int, reason: Exception):
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"Cannot listen on {host}:{port}: {reason}")
