"""
Logger factory shared by the decorators and schedulers.
"""

import logging

from callgate.config.settings import get_log_level


def get_logger(name: str) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name, typically __name__ from the caller.

    Returns:
        A logging.Logger with a single stream handler and the level taken
        from the LOG_LEVEL environment variable.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(get_log_level())
    return logger
