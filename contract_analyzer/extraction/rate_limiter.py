import threading
import time
from collections.abc import Callable

from contract_analyzer.logging.logger import Log


class CallSpacer:
    """Keeps consecutive provider calls at least min_interval_seconds apart.

    Shared by every extraction in the process so the spacing also holds
    across documents processed by different threads.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._min_interval = max(0.0, min_interval_seconds)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_call: float | None = None

    @property
    def min_interval_seconds(self) -> float:
        return self._min_interval

    def wait(self) -> None:
        """Block until the next call is allowed, then reserve the slot."""
        with self._lock:
            if self._last_call is not None and self._min_interval > 0:
                remaining = self._min_interval - (self._clock() - self._last_call)
                if remaining > 0:
                    Log.debug(f"Spacing provider calls, sleeping {remaining:.1f}s")
                    self._sleep(remaining)
            self._last_call = self._clock()
