"""Single-slot TTL cache used for the shared market snapshot."""
import time
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class TTLCache(Generic[T]):
    """Holds one value for ``ttl`` seconds.

    The clock is injectable so tests can move time forward without sleeping.
    Values are replaced as a whole; readers never see a partial update.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._value: T | None = None
        self._stored_at: float | None = None

    def is_expired(self) -> bool:
        if self._stored_at is None:
            return True
        return self._clock() - self._stored_at >= self.ttl

    def get(self) -> T | None:
        if self._value is None or self.is_expired():
            return None
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._value = None
        self._stored_at = None
