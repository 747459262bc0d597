from __future__ import annotations

import sys
from logging.config import dictConfig


def configure_logging(level: str = "INFO") -> None:
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "default",
                },
            },
            "loggers": {
                # propagates so host-level handlers (and pytest caplog) see records;
                # root is left without handlers, so nothing prints twice
                "smartnotes": {"level": level, "handlers": ["console"], "propagate": True},
                "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            },
        }
    )
