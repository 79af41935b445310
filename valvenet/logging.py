"""Package logger for valvenet.

All module loggers hang off the "valvenet" logger, which carries the only
handler. Worker processes call set_global_log_level() to follow the parent.
"""

import logging
import sys

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger() -> None:
    """Attach a stdout handler to the "valvenet" logger, once per process."""
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger("valvenet")
    root_logger.setLevel(logging.INFO)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(handler)
    # Propagate so pytest's caplog sees search logs
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a valvenet module (pass __name__)."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the "valvenet" logger and its handler."""
    setup_root_logger()
    root_logger = logging.getLogger("valvenet")
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)
