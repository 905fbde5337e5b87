import threading
import logging
from contextlib import contextmanager
from typing import Set

from edumanage.errors import OperationInProgressError

logger = logging.getLogger(__name__)


class InFlightGuard:
    """Allows at most one in-flight call per operation key.

    A second call with the same key while the first is running is rejected
    instead of racing it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._keys: Set[str] = set()

    @contextmanager
    def hold(self, key: str):
        with self._lock:
            if key in self._keys:
                logger.warning(f"Rejected concurrent call for {key}")
                raise OperationInProgressError(key)
            self._keys.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._keys.discard(key)

    def is_held(self, key: str) -> bool:
        with self._lock:
            return key in self._keys
