"""
Logging Configuration Module.

Loggers for the timeline layout modules. The engine is a library, so it
never configures the root logger: it hangs a NullHandler on its package
logger and leaves output to the host application. enable_debug_logging()
attaches a console handler when a layout needs tracing.
"""

import logging
from typing import Optional

PACKAGE_LOGGER = "src.core"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    Convenience function to get a logger with the given name.

    Args:
        name (str): The name of the logger (usually __name__).

    Returns:
        logging.Logger: The logger instance.
    """
    return logging.getLogger(name)


def enable_debug_logging(
    handler: Optional[logging.Handler] = None, level: int = logging.DEBUG
) -> logging.Handler:
    """
    Sends the layout modules' records to a handler.

    Args:
        handler: Handler to attach. Defaults to a StreamHandler on stderr.
        level: Level for the package logger and the handler.

    Returns:
        logging.Handler: The attached handler, for disable_debug_logging().
    """
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    return handler


def disable_debug_logging(handler: logging.Handler) -> None:
    """Detaches a handler added by enable_debug_logging()."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    handler.close()
