"""Logging configuration."""

import logging
import logging.config

_LOGGING_CONFIGURED = False


def _resolve_level(value: str | None, default: str = "INFO") -> str:
    value = (value or "").strip().upper()
    if value and isinstance(getattr(logging, value, None), int):
        return value
    return default


def configure_logging(level: str | None = None) -> None:
    """Configure root and uvicorn loggers once per process."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    resolved = _resolve_level(level)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"level": resolved, "handlers": ["console"]},
            "loggers": {
                "uvicorn.access": {"level": "WARNING"},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )
    _LOGGING_CONFIGURED = True
