"""
Logger setup for Roots modules: stdout, optionally a file, one set of handlers per name
"""

import logging
import sys


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return number


def _handlers(log_file: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    return handlers


def setup_logger(name: str, level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """
    Configure the named logger once; later calls return it unchanged

    Args:
        name: Logger name, usually the module's __name__
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Also append records to this file

    Raises:
        ValueError: level is not a logging level name
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_level_number(level))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_project_logger(module_name: str, verbose: bool = False) -> logging.Logger:
    return setup_logger(module_name, "DEBUG" if verbose else "INFO")
