"""
Logging Configuration
====================

structlog on top of the standard library logging tree. Development and
test runs get a console renderer; production emits one JSON object per
line. Provider secrets never reach the log output.
"""

import logging
import logging.config
import sys
from typing import Any, Dict, MutableMapping, TYPE_CHECKING

import structlog
from structlog.types import Processor

from .settings import get_settings

if TYPE_CHECKING:
    from .settings import Settings

REDACTED = "***"

# Event keys that may carry provider credentials or request signatures.
SENSITIVE_KEYS = frozenset({"api_secret", "api_key", "signature", "cloudinary_api_secret"})

# Third-party loggers and the level they are held at.
LIBRARY_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.access": "WARNING",
    "fastapi": "INFO",
    "aiohttp": "WARNING",
}


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credential values anywhere at the top level of an event."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def build_processors(settings: "Settings") -> list[Processor]:
    """Assemble the structlog processor chain for the current environment."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.environment == "production":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=settings.environment != "testing"))
    return processors


def get_logging_config(settings: "Settings") -> Dict[str, Any]:
    """Build the dictConfig for the stdlib side of the logging tree."""
    formatter = "json" if settings.environment == "production" else "plain"
    loggers: Dict[str, Any] = {
        "": {"level": settings.log_level, "handlers": ["stdout"], "propagate": False},
        "framegen": {"level": settings.log_level, "handlers": ["stdout"], "propagate": False},
    }
    for name, level in LIBRARY_LEVELS.items():
        loggers[name] = {"level": level, "handlers": ["stdout"], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(message)s"},
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "rename_fields": {"levelname": "level", "asctime": "time"},
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "level": settings.log_level,
                "formatter": formatter,
                "stream": sys.stdout,
            },
        },
        "loggers": loggers,
    }


def setup_logging() -> None:
    """Configure structlog and the stdlib logging tree from settings."""
    settings = get_settings()

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(get_logging_config(settings))
    structlog.contextvars.bind_contextvars(service=settings.app_name)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


# Initialize logging on import
setup_logging()
