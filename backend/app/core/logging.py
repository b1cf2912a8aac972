"""Structured JSON logging configuration."""

import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from app.core.config import settings

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "pymongo", "botocore", "boto3", "urllib3", "multipart")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, tagged with the service and environment.

    The rendered message is emitted as ``event``; anything passed through
    ``extra=`` lands at the top level next to it.
    """

    def add_fields(self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["event"] = record.getMessage()
        log_record["service"] = settings.PROJECT_NAME
        log_record["env"] = settings.ENV
        if record.levelno >= logging.WARNING:
            log_record["location"] = f"{record.module}.{record.funcName}:{record.lineno}"

        log_record.pop("message", None)
        log_record.pop("asctime", None)


def setup_logging(level: str | None = None) -> None:
    """Route the root logger to stdout as JSON.

    ``level`` overrides LOG_LEVEL (the maintenance scripts pass DEBUG for
    ``--verbose``).
    """
    root_logger = logging.getLogger()
    level_name = (level or settings.LOG_LEVEL).upper()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(logger)s", datefmt="%Y-%m-%dT%H:%M:%S"))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
