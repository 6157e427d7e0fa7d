import os
import threading
from contextlib import contextmanager
from typing import Dict, Optional

from todo_api.errors import GuardTimeoutError


class ConcurrencyGuard:
    """Serializes every load/mutate/save cycle against one todo file."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    @contextmanager
    def critical_section(self, timeout: Optional[float] = None):
        if timeout is None:
            acquired = self._lock.acquire()
        else:
            acquired = self._lock.acquire(timeout=timeout)
        if not acquired:
            raise GuardTimeoutError(
                f"Timed out after {timeout}s waiting for access to {self.path}"
            )
        try:
            yield
        finally:
            self._lock.release()

    def locked(self) -> bool:
        return self._lock.locked()


_guards: Dict[str, ConcurrencyGuard] = {}
_guards_lock = threading.Lock()


def guard_for(path: str) -> ConcurrencyGuard:
    """Return the process-wide guard for a todo file, creating it on first use."""
    key = os.path.realpath(path)
    with _guards_lock:
        guard = _guards.get(key)
        if guard is None:
            guard = ConcurrencyGuard(key)
            _guards[key] = guard
        return guard
