"""
Client configuration module.

This module handles client-side configuration settings.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from common.constants import DEFAULT_HOST, DEFAULT_PORT, MAX_RETRY_ATTEMPTS, RECONNECT_DELAY_BASE


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None):
        self.host = host
        if port is None:
            try:
                port = int(os.environ.get('CHAT_SERVER_PORT', DEFAULT_PORT))
            except ValueError:
                port = DEFAULT_PORT
        self.port = port

        # Connection settings
        self.retry_attempts = MAX_RETRY_ATTEMPTS
        self.retry_delay = RECONNECT_DELAY_BASE

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> 'ClientConfig':
        """Load a ``.env`` file (if present) and build the configuration."""
        load_dotenv(dotenv_path)
        config = cls(**overrides)
        if config.host is None:
            config.host = os.environ.get('CHAT_SERVER_HOST')
        return config

    @property
    def default_host(self) -> str:
        return self.host or DEFAULT_HOST

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }
