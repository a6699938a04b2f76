"""Console logging configuration for the service."""

from __future__ import annotations

from logging.config import dictConfig
from typing import Any

from tingling.core.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_logging_config(level: str | None = None) -> dict[str, Any]:
    """Return a ``dictConfig`` mapping routing app and server logs to stderr."""
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level.upper()

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            "tingling": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "INFO" if settings.sql_debug else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Configure logging for the application."""
    dictConfig(build_logging_config(level))
