"""Module loggers writing to stderr at a process-wide level set from -v."""

import logging
from typing import Optional

# Level applied to every module logger created through get_module_logger
_GLOBAL_LOG_LEVEL = logging.WARNING


def verbosity_to_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def set_global_log_level(level: int):
    """Set the global log level that will be used by all loggers"""
    global _GLOBAL_LOG_LEVEL
    _GLOBAL_LOG_LEVEL = level

    # Update all existing loggers
    for name in list(logging.Logger.manager.loggerDict):
        logger = logging.getLogger(name)
        if logger.handlers:  # Only update loggers that have been configured by us
            logger.setLevel(level)


def get_module_logger(mod_name: str, log_level: Optional[int] = None):
    '''Return a stderr logger for mod_name at the global (or given) level.'''
    level = log_level if log_level is not None else _GLOBAL_LOG_LEVEL

    logger = logging.getLogger(mod_name)

    # Only add handler if logger doesn't already have one
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s %(name)-12s %(levelname)-8s %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False  # Prevent duplicate messages

    logger.setLevel(level)
    return logger
