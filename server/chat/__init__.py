"""
Chat module for server-side messaging functionality.

Handles:
- Username negotiation
- Chat line broadcasting
- Slash command replies
- Online user tracking
"""
