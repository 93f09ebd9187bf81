import os
import logging
from contextlib import contextmanager

from probackup.utils.console import SUCCESS, BackupFormatter, ConsoleHandler


__version__ = '3.3.0'

RUN_LOGGER_NAME = 'probackup.run'


def configure_logging(context):
    """
    Build the logger for a single backup run.

    Args:
        context: BackupContext whose backup_dir must already exist

    Returns:
        Logger writing to the console and appending to context.log_file
    """
    settings = context.settings
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    formatter = BackupFormatter(settings.LOG_FORMAT, datefmt=settings.LOG_DATE_FORMAT)

    # Console handler
    console_handler = ConsoleHandler(level=log_level)
    console_handler.setFormatter(formatter)

    # File handler, append-only, never rotated
    file_handler = logging.FileHandler(context.log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    logger = logging.getLogger(RUN_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False
    _close_handlers(logger)
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    logger.debug(f"Logging configured (level: {logging.getLevelName(log_level)}, file: {context.log_file})")
    return logger


@contextmanager
def run_logger(context):
    """Create the backup directory, yield a configured logger, then release its handlers."""
    os.makedirs(context.backup_dir, exist_ok=True)
    logger = configure_logging(context)
    try:
        yield logger
    finally:
        _close_handlers(logger)


def _close_handlers(logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


__all__ = ['SUCCESS', 'configure_logging', 'run_logger', '__version__']
