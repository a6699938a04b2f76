"""Tingling: friends, chats, calls and 24-hour statuses over HTTP."""

__version__ = "0.1.0"
