"""
Server package for the line chat relay.

This package contains all server-side functionality including:
- Connection registry and broadcast fan-out
- Per-connection session protocol and command dispatch
- Operator console
- Configuration and utilities
"""
