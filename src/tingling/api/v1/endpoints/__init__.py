# src/tingling/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .calls import router as calls_router
from .chats import router as chats_router
from .friends import router as friends_router
from .statuses import router as statuses_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "friends_router",
    "chats_router",
    "calls_router",
    "statuses_router",
]
