"""Logging configuration for URL shortener."""

import logging
import sys
from typing import Optional


REQUEST_FIELDS = ("request_id", "method", "path")


class RequestFieldsFormatter(logging.Formatter):
    """Formatter that renders request fields passed via ``extra=``.

    Plain lines get a bracketed suffix after the logger name; JSON lines
    get the bare ``key=value`` list.
    """

    def __init__(self, fmt: str, datefmt: Optional[str] = None, json_format: bool = False):
        super().__init__(fmt, datefmt=datefmt)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        fields = " ".join(
            f"{name}={getattr(record, name)}"
            for name in REQUEST_FIELDS
            if getattr(record, name, None) is not None
        )
        if self.json_format:
            record.request_fields = fields
        else:
            record.request_fields = f" [{fields}]" if fields else ""
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON format

    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("url_shortener")
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    if json_format:
        formatter = RequestFieldsFormatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "message": "%(message)s", "request": "%(request_fields)s"}',
            json_format=True,
        )
    else:
        formatter = RequestFieldsFormatter(
            "%(asctime)s [%(levelname)s] %(name)s%(request_fields)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "url_shortener") -> logging.Logger:
    """Get logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
