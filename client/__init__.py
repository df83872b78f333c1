"""
Client package for the line chat relay.

This package contains the terminal client:
- Server address prompt and username handshake
- Keyboard to server and server to screen relaying
- Configuration and utilities
"""
