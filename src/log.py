"""Log utilities."""

import logging
from rich.logging import RichHandler

# level of loggers created by get_logger, changed by set_verbosity
_level = logging.DEBUG
_logger_names: set[str] = set()


def get_logger(name: str) -> logging.Logger:
    """Retrieve logger with the provided name."""
    logger = logging.getLogger(name)
    logger.setLevel(_level)
    logger.handlers = [RichHandler()]
    logger.propagate = False
    _logger_names.add(name)
    return logger


def set_verbosity(verbose: bool) -> None:
    """Switch service loggers to DEBUG level when verbose output is requested.

    The level is applied to the root logger and to all loggers retrieved by
    `get_logger`, including the ones retrieved later.
    """
    global _level  # pylint: disable=global-statement
    _level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger().setLevel(_level)
    for name in _logger_names:
        logging.getLogger(name).setLevel(_level)
