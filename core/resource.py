"""
Shared resource with a bounded-wait acquire.

Ownership is tracked with an explicit holder field guarded by the resource's
own condition variable. Callers identify themselves on every call, so the
ownership query answers "is this resource held by *me*" without relying on
thread identity.
"""
import time
import threading
from typing import Any, Optional

from core.cancellation import CancellationToken, Cancelled


class OwnershipError(RuntimeError):
    """Release by a non-owner, or acquire by the current owner."""


class Resource:
    """
    A mutual-exclusion primitive shared by two neighbouring actors.

    At most one holder owns the resource at any instant. ``acquire`` never
    blocks longer than its timeout.
    """

    def __init__(self, resource_id: int):
        self.resource_id = resource_id
        self._holder: Optional[Any] = None
        self._condition = threading.Condition(threading.Lock())

    def acquire(self, holder: Any, timeout: float,
                cancel: Optional[CancellationToken] = None) -> bool:
        """
        Take ownership for ``holder``, waiting at most ``timeout`` seconds.

        Returns True iff ownership was obtained within the bound. When a
        cancellation token is given, ``Cancelled`` is raised if it is set on
        entry or while waiting.
        """
        if holder is None:
            raise ValueError("holder identity is required")
        deadline = time.monotonic() + timeout
        with self._condition:
            if self._holder is not None and self._holder == holder:
                raise OwnershipError(
                    f"{holder!r} already holds resource {self.resource_id}")
            if cancel is not None:
                cancel.attach(self._condition)
            try:
                while True:
                    if cancel is not None and cancel.cancelled:
                        raise Cancelled()
                    if self._holder is None:
                        self._holder = holder
                        return True
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        return False
                    self._condition.wait(remaining)
            finally:
                if cancel is not None:
                    cancel.detach(self._condition)

    def release(self, holder: Any):
        with self._condition:
            if self._holder is None or self._holder != holder:
                raise OwnershipError(
                    f"{holder!r} released resource {self.resource_id} "
                    f"held by {self._holder!r}")
            self._holder = None
            self._condition.notify()

    def is_held_by(self, holder: Any) -> bool:
        with self._condition:
            return self._holder is not None and self._holder == holder

    def locked(self) -> bool:
        with self._condition:
            return self._holder is not None

    def __repr__(self):
        return f"Resource(id={self.resource_id}, locked={self.locked()})"
