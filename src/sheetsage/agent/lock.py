"""Advisory lock serializing auto-edit passes."""

import threading
from abc import ABC, abstractmethod


class AdvisoryLock(ABC):
    """Best-effort mutual exclusion with a bounded wait and no queueing."""

    @abstractmethod
    def try_acquire(self, timeout_ms: int) -> bool:
        """Wait up to ``timeout_ms`` for the lock. Returns False if it stayed taken."""
        pass

    @abstractmethod
    def release(self) -> None:
        pass


class ProcessLock(AdvisoryLock):
    """Lock shared by every request served by this process."""

    def __init__(self):
        self._lock = threading.Lock()

    def try_acquire(self, timeout_ms: int) -> bool:
        return self._lock.acquire(timeout=max(timeout_ms, 0) / 1000)

    def release(self) -> None:
        self._lock.release()

    @property
    def locked(self) -> bool:
        return self._lock.locked()
