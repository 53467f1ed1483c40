"""Logging setup for the application."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# HTTP client libraries that log every request at INFO
CHATTY_LOGGERS = ("httpx", "httpcore", "urllib3")


def setup_logger(log_level: str = "INFO", name: str = "pullwise") -> logging.Logger:
    """
    Configure the root handler once and return the application logger.

    Module loggers created with ``logging.getLogger(__name__)`` are left at
    NOTSET, so they follow the root level set here. Output goes to stdout,
    which serverless and container log collectors pick up.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL; anything else means INFO
        name: Name of the returned logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout,
        force=True,
    )

    # Request lines from the Supabase HTTP client only at DEBUG
    chatty_level = numeric_level if numeric_level == logging.DEBUG else max(numeric_level, logging.WARNING)
    for chatty in CHATTY_LOGGERS:
        logging.getLogger(chatty).setLevel(chatty_level)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    return logger
