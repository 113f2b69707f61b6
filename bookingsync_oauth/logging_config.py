"""
Logging configuration.

Logs go to stdout as one JSON object per line. The level comes from
LOG_LEVEL (default INFO).
"""

import json
import logging
import os
from datetime import UTC, datetime


# Attributes every LogRecord has; anything else was passed via ``extra``.
_RECORD_ATTRIBUTES = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """
    Custom JSON log formatter.

    Fields passed through ``extra=`` are merged into the JSON object.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            A JSON string representing the log record.
        """
        log_object = {
            "timestamp": datetime.now(UTC).isoformat(),
            "severity": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES and key not in log_object:
                log_object[key] = value

        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def setup_global_logging() -> None:
    """
    Configure global logging.

    Installs a single stdout handler with the JSON formatter on the root
    logger.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    # Remove other handlers to avoid duplicate logs
    for h in root_logger.handlers[:]:
        if h is not handler:
            root_logger.removeHandler(h)
