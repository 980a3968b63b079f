"""
Cooperative cancellation shared by every actor of a simulation.

A single token is handed to all actors. Cancelling it wakes actors that are
sleeping through a phase and actors blocked in a bounded resource wait.
"""
import threading
from collections import Counter


class Cancelled(Exception):
    """Raised at a suspension point once the token has been cancelled."""


class CancellationToken:
    """
    Shared stop signal.

    Resources waiting on a ``threading.Condition`` attach it while they wait so
    that ``cancel()`` can notify them instead of letting the wait run out.
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        # Several waiters on one resource share its condition
        self._conditions: Counter = Counter()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        self._event.set()
        with self._lock:
            conditions = list(self._conditions)
        for condition in conditions:
            with condition:
                condition.notify_all()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise Cancelled()

    def sleep(self, duration: float):
        """Suspend for ``duration`` seconds, or raise as soon as cancelled."""
        if self._event.wait(duration):
            raise Cancelled()

    def attach(self, condition: threading.Condition):
        with self._lock:
            self._conditions[condition] += 1

    def detach(self, condition: threading.Condition):
        with self._lock:
            self._conditions[condition] -= 1
            if self._conditions[condition] <= 0:
                del self._conditions[condition]

    def __repr__(self):
        return f"CancellationToken(cancelled={self.cancelled})"
