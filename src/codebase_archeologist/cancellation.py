"""Cooperative cancellation for long-running scans."""

import threading
from typing import Optional

from .exceptions import ScanCancelledError


class CancellationToken:
    """Thread-safe flag checked by the pipeline between units of work.

    A caller on another thread (or another task) calls ``cancel()``; the scan
    raises ``ScanCancelledError`` at its next checkpoint.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, stage: str) -> None:
        if self._event.is_set():
            raise ScanCancelledError(stage)


def check_cancelled(token: Optional[CancellationToken], stage: str) -> None:
    """Checkpoint helper that tolerates a missing token."""
    if token is not None:
        token.raise_if_cancelled(stage)
