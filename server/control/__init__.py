"""
Control module for server-side operator functionality.

Handles:
- Operator commands typed on the server console
- Orderly shutdown announcements
"""
