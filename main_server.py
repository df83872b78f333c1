#!/usr/bin/env python3
r"""
Line Chat Relay Server - Main Entry Point

Usage:
    python main_server.py

Optional arguments:
    --host HOST           Bind address (default: $CHAT_SERVER_HOST or 0.0.0.0)
    --port PORT           TCP port (default: $CHAT_SERVER_PORT or 4396)
    --log-dir DIR         Chat transcript directory (default: logs)
    --log-level LEVEL     Logging level (default: INFO)
    --no-console          Do not read operator commands (\quit) from stdin
    --env-file PATH       Load settings from this .env file
"""

if __name__ == "__main__":
    import sys

    from server.main_server import main

    sys.exit(main())
