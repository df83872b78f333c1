"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from common.constants import CHAT_LOG_FILE, LOG_DIR


class ServerLogger:
    """Server logging class."""

    def __init__(self, logs_dir: str = LOG_DIR, log_level: int = logging.INFO):
        # Set up main logger
        self.logger = logging.getLogger('chat_relay_server')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.NOTSET)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

        # Set up file paths; the directory is created on first write
        self.logs_dir = Path(logs_dir)
        self.chat_log_path = self.logs_dir / CHAT_LOG_FILE

    def configure(self, logs_dir: Optional[str] = None, log_level: Optional[str] = None):
        """Apply settings loaded after import (log directory, level name)."""
        if logs_dir is not None:
            self.logs_dir = Path(logs_dir)
            self.chat_log_path = self.logs_dir / CHAT_LOG_FILE
        if log_level is not None:
            level = logging.getLevelName(log_level.upper())
            if isinstance(level, int):
                self.logger.setLevel(level)
            else:
                self.warning(f"Unknown log level '{log_level}', keeping {logging.getLevelName(self.logger.level)}")

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, addr):
        """Log client connection."""
        self.info(f"New connection from {addr}")

    def log_join(self, username: str, addr, online: int):
        """Log accepted username."""
        self.info(f"User '{username}' joined from {addr} (online: {online})")

    def log_name_rejected(self, addr, reason: str):
        """Log rejected username attempt."""
        self.debug(f"Username rejected for {addr}: {reason}")

    def log_leave(self, username: str, addr):
        """Log user departure."""
        self.info(f"User '{username}' ({addr}) left")

    def log_disconnect(self, addr, username: Optional[str] = None):
        """Log closed connection."""
        self.info(f"The connection of {username or addr} is closed")

    def log_command(self, username: str, command: str):
        """Log a command issued by a client."""
        self.debug(f"Command from {username}: {command}")

    def log_broadcast(self, message: str, recipients: int):
        """Log a relayed line and keep it in the chat transcript."""
        self.info(f"[BROADCAST x{recipients}] {message}")
        self._write_to_file(self.chat_log_path, f"{datetime.now().isoformat()} | {message}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")

    def _write_to_file(self, file_path: Path, content: str):
        """Write content to log file."""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except OSError as e:
            self.error(f"Failed to write to log file {file_path}: {e}")


# Global logger instance
logger = ServerLogger()
