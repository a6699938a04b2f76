"""Service layer: one module per group of handlers.

Each function takes an open :class:`sqlalchemy.orm.Session` as its first
argument and commits its own unit of work.
"""
