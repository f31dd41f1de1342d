# --- src/spicelib_core/log_config.py ---
import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER_NAME = "spicelib_core"
LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level=logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attaches a single console handler to the package logger.

    Only the `spicelib_core` logger hierarchy is touched; the host application's
    root logger configuration is left alone. Calling it again replaces the handler
    installed by the previous call instead of stacking duplicates.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    for handler in package_logger.handlers[:]:
        if getattr(handler, "_spicelib_console", False):
            package_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._spicelib_console = True
    package_logger.setLevel(level)
    package_logger.addHandler(console_handler)
    package_logger.debug(f"Logging configured at level {logging.getLevelName(level)}.")
    return package_logger
