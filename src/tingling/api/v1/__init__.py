# src/tingling/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    calls_router,
    chats_router,
    friends_router,
    statuses_router,
    users_router,
)

__all__ = [
    "auth_router",
    "users_router",
    "friends_router",
    "chats_router",
    "calls_router",
    "statuses_router",
]
