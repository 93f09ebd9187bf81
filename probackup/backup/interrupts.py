"""
Scoped interrupt handling for the archiving window.
"""

import signal
import threading
from contextlib import contextmanager


class BackupInterrupted(Exception):
    """Raised when the user cancels a running backup."""

    def __init__(self, signal_name: str):
        self.signal_name = signal_name
        super().__init__(f"Backup interrupted by {signal_name}")


GUARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@contextmanager
def interrupt_guard(signals=GUARDED_SIGNALS):
    """
    Turn SIGINT/SIGTERM into BackupInterrupted while the block runs.

    Previous handlers are restored on exit, whatever the outcome, so a
    signal arriving after the block no longer triggers backup cleanup.
    Signal handlers can only be installed from the main thread; elsewhere
    this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handle(signum, frame):
        raise BackupInterrupted(signal.Signals(signum).name)

    previous = {}
    try:
        for signum in signals:
            previous[signum] = signal.signal(signum, _handle)
        yield
    finally:
        for signum, handler in previous.items():
            # None means the handler was not set from Python
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
