"""
Soft deadline / cancellation token for one extraction.

Checked between pages only; a page already being decoded or recognized is
allowed to finish.
"""

from __future__ import annotations

import time
from typing import Optional

from .errors import ExtractionTimeoutError


class Deadline:
    def __init__(self, expires_at: Optional[float] = None) -> None:
        self._expires_at = expires_at
        self._cancelled = False

    @classmethod
    def after(cls, seconds: Optional[float]) -> "Deadline":
        if seconds is None:
            return cls()
        return cls(time.monotonic() + seconds)

    @classmethod
    def never(cls) -> "Deadline":
        return cls()

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def remaining(self) -> Optional[float]:
        """Seconds left, or None when there is no time limit."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        if self._cancelled:
            return True
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def check(self, stage: str = "") -> None:
        if self._cancelled:
            raise ExtractionTimeoutError(f"Extraction cancelled{f' during {stage}' if stage else ''}")
        if self.expired:
            raise ExtractionTimeoutError(f"Extraction deadline exceeded{f' during {stage}' if stage else ''}")
