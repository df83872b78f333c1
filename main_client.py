#!/usr/bin/env python3
r"""
Line Chat Relay Client - Main Entry Point

Usage:
    python main_client.py [--server-ip HOST] [--port PORT]

Without --server-ip the client asks for the server address. Type \help once
connected for the list of commands and \quit to leave.
"""

if __name__ == "__main__":
    import sys

    from client.main_client import main

    sys.exit(main())
