# feedback_api/core/logging.py
from __future__ import annotations

from logging.config import dictConfig

from feedback_api.core.config import Settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings: Settings) -> None:
    """JSON logs in production; plain console lines in dev and tests."""
    formatter = "json" if settings.is_production else "console"
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": _FORMAT},
            "json": {"()": "pythonjsonlogger.json.JsonFormatter", "fmt": _FORMAT},
        },
        "handlers": {
            "default": {"class": "logging.StreamHandler", "formatter": formatter},
        },
        "root": {"level": settings.LOG_LEVEL.upper(), "handlers": ["default"]},
    })
