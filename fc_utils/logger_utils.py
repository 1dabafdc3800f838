import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from flashcards.infrastructure.config import settings

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(message)s'


class QuizJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping every record with the app name, version and environment."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("app", settings.APP_NAME)
        log_record.setdefault("version", settings.VERSION)
        log_record.setdefault("env", settings.FLASK_ENV)


def get_logger(name: str, log_level: Optional[str] = None) -> logging.Logger:
    """
    Return a logger writing structured JSON lines to stdout.

    The level defaults to settings.LOG_LEVEL. Handlers are only attached once,
    so calling this repeatedly for the same name is safe.
    """
    logger = logging.getLogger(name)
    logger.setLevel((log_level or settings.LOG_LEVEL).upper())
    logger.propagate = False

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(QuizJsonFormatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


# Default logger instance
logger = get_logger("flashcards")
