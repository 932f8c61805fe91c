import time
from typing import Callable, Optional

from src.schemas.charts import Viewport


class ViewportSignal:
    """Coalesces bursts of viewport changes for one chart.

    Every `push` restarts the quiet window; `settle` hands back the latest size
    once the window has elapsed without a newer push, and only once.
    """

    def __init__(self, window_ms: int, clock: Callable[[], float] = time.monotonic) -> None:
        self._window = window_ms / 1000.0
        self._clock = clock
        self._pending: Optional[Viewport] = None
        self._last_push = 0.0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def push(self, viewport: Viewport) -> None:
        self._pending = viewport
        self._last_push = self._clock()

    def settle(self) -> Optional[Viewport]:
        if self._pending is None:
            return None
        if self._clock() - self._last_push < self._window:
            return None
        viewport, self._pending = self._pending, None
        return viewport
