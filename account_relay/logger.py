import logging
import sys
import traceback
from colorlog import ColoredFormatter
from account_relay.config import settings

LOGGER_NAME = "account_relay"


def setup_logger(debug_mode=False):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)

    return logger


def print_stack_trace():
    """Log the current exception's stack trace when DEBUG is enabled."""
    if settings.DEBUG:
        logger.error(traceback.format_exc())


logger = setup_logger(debug_mode=settings.DEBUG)
