"""Logging configuration for matcher runs."""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Union

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_FILE_PREFIX = 'similarity'

_HANDLER_MARK = '_settings_matcher_handler'


def configure_logging(
    log_dir: Union[str, Path] = 'logs',
    verbose: bool = False,
    level: int = logging.INFO
) -> logging.Logger:
    """
    Attach a minutely rotated file handler to the package logger.

    Every pair/metric evaluation is logged at INFO, so the log file is the
    audit trail of a run. Calling this again replaces earlier handlers.

    Args:
        log_dir: Directory for the rotated log files
        verbose: Also echo log records to stderr
        level: Level for the package logger

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger('settings_matcher')

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = TimedRotatingFileHandler(
        log_dir / LOG_FILE_PREFIX,
        when='M',
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    setattr(file_handler, _HANDLER_MARK, True)
    logger.addHandler(file_handler)

    if verbose:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        setattr(stream_handler, _HANDLER_MARK, True)
        logger.addHandler(stream_handler)

    logger.setLevel(level)
    return logger
