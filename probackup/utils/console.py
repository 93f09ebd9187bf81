"""
Console and log formatting helpers.

The same message body goes to the log file (plain text) and to the
terminal (styled by level through rich).
"""

import logging

from rich.console import Console


SUCCESS = 25
logging.addLevelName(SUCCESS, 'SUCCESS')

# Level names as they appear in backup.log
LEVEL_NAMES = {
    logging.WARNING: 'WARN',
}

LEVEL_STYLES = {
    logging.DEBUG: 'dim',
    logging.INFO: 'cyan',
    SUCCESS: 'green',
    logging.WARNING: 'bold yellow',
    logging.ERROR: 'red',
    logging.CRITICAL: 'bold red',
}

SEPARATOR = '=' * 70

console = Console(highlight=False)


class BackupFormatter(logging.Formatter):
    """Formatter producing `timestamp [LEVEL] - message` lines."""

    def format(self, record):
        levelname = LEVEL_NAMES.get(record.levelno)
        if levelname:
            # Copy so other handlers still see the original record
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = levelname
        return super().format(record)


class ConsoleHandler(logging.Handler):
    """Logging handler that prints formatted records with a level style."""

    def __init__(self, output: Console = None, level=logging.NOTSET):
        super().__init__(level)
        self.console = output or console

    def emit(self, record):
        try:
            message = self.format(record)
            style = getattr(record, 'style', None) or LEVEL_STYLES.get(record.levelno)
            self.console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)
        except Exception:
            self.handleError(record)


def print_separator(output: Console = None):
    """Print a horizontal rule to the terminal only."""
    (output or console).print(SEPARATOR, style='blue', markup=False, highlight=False)


def print_blank_line(output: Console = None):
    (output or console).print()
