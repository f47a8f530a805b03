"""Logging configuration for the chart conversion service.

Human-readable console logging by default, JSON lines (python-json-logger)
when running behind a log collector.
"""

import copy
import logging
import logging.config
from typing import Any

LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
        "console": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "chart_service": {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False,
        },
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        json_output: If True, emit JSON records on the console handler
        log_level: Level for the chart_service loggers (DEBUG, INFO, ...)
    """
    config = copy.deepcopy(LOGGING_CONFIG)

    if json_output:
        config["handlers"]["console"]["formatter"] = "json"

    if log_level:
        config["handlers"]["console"]["level"] = log_level
        config["loggers"]["chart_service"]["level"] = log_level

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module; pass structured fields via ``extra=``."""
    return logging.getLogger(name)
