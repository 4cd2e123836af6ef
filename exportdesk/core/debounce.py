from __future__ import annotations

import time
from typing import Callable, Optional

FOLDER_CLICK_WINDOW_MS = 300


class ClickDebouncer:
    """
    Drops events that arrive within `window_ms` of the previously accepted one.

    Dropped events are discarded outright: nothing is queued or coalesced, and a
    dropped event does not extend the window.
    """

    def __init__(self, window_ms: int = FOLDER_CLICK_WINDOW_MS, *, clock: Callable[[], float] = time.monotonic):
        self.window_ms = int(window_ms)
        self._clock = clock
        self._last_accepted: Optional[float] = None

    def accept(self) -> bool:
        now = float(self._clock())
        if self._last_accepted is not None and (now - self._last_accepted) * 1000.0 < self.window_ms:
            return False
        self._last_accepted = now
        return True

    def reset(self) -> None:
        self._last_accepted = None
