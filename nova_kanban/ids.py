"""Time-shaped identifiers that never repeat within a process."""
import threading
import time


class IdGenerator:
    """
    Issues millisecond-epoch integers, bumped by one whenever the clock has
    not advanced since the previous id. Ids keep the "Date.now()" shape that
    existing clients parse, but two rapid calls never collide.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = threading.Lock()

    def next_int(self) -> int:
        with self._lock:
            candidate = self._clock()
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate

    def next_str(self) -> str:
        return str(self.next_int())
