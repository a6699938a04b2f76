"""Engine, session factory and the declarative base."""

from .session import Base, SessionLocal, create_tables, engine, get_db

__all__ = ["Base", "SessionLocal", "create_tables", "engine", "get_db"]
