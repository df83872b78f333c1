"""
Server configuration module.

This module handles server-side configuration settings. Values come from the
constructor, falling back to environment variables (a ``.env`` file in the
working directory is loaded first) and then to the shared defaults.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, LOG_DIR, LOG_LEVEL, MAX_LINE_LENGTH
)

_log = logging.getLogger('chat_relay_server.config')


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        _log.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default
    if value < 0:
        _log.warning(f"Negative {name}={raw!r}, using default {default}")
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 logs_dir: Optional[str] = None, log_level: Optional[str] = None,
                 max_line_length: Optional[int] = None, enable_console: Optional[bool] = None):
        self.host = host if host is not None else os.environ.get('CHAT_SERVER_HOST', DEFAULT_SERVER_HOST)
        self.port = port if port is not None else _env_int('CHAT_SERVER_PORT', DEFAULT_PORT)

        # Logging configuration
        self.logs_dir = logs_dir if logs_dir is not None else os.environ.get('CHAT_LOG_DIR', LOG_DIR)
        self.log_level = (log_level or os.environ.get('CHAT_LOG_LEVEL', LOG_LEVEL)).upper()

        # Connection settings
        self.max_line_length = (max_line_length if max_line_length is not None
                                else _env_int('CHAT_MAX_LINE_LENGTH', MAX_LINE_LENGTH))

        # Operator console on stdin
        self.enable_console = (enable_console if enable_console is not None
                               else _env_bool('CHAT_ENABLE_CONSOLE', True))

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> 'ServerConfig':
        """Load a ``.env`` file (if present) and build the configuration."""
        load_dotenv(dotenv_path)
        return cls(**overrides)

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_log_settings(self):
        """Get logging settings."""
        return {
            'logs_dir': self.logs_dir,
            'log_level': self.log_level
        }
