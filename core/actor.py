"""
Actor state machine: think, get hungry, eat, repeat.

Each actor shares its left resource with one neighbour and its right resource
with the other. There is no coordinator and no global lock order. Deadlock is
avoided because an actor never waits on its second resource for longer than
the bounded timeout while holding the first: it puts the first one back and
starts over.
"""
import time
import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional

from core.cancellation import CancellationToken, Cancelled
from core.interaction import Interaction
from core.resource import OwnershipError, Resource
from core.state import ActorStats
from core.timing import DEFAULT_MAX_DURATION, DEFAULT_TIMEOUT, DurationSource, SeededDurations
from observers.log_observer import LoggingObserver


class Phase(Enum):
    THINKING = 'thinking'
    HUNGRY = 'hungry'
    EATING = 'eating'


class Actor:
    """
    One dining actor.

    Construct with an id, the two shared resources, the global seed and the
    verbose flag, then call ``run(token)`` from a dedicated thread. The
    duration source is seeded with ``seed + actor_id`` and bounded by
    ``max_duration``; pass either ``max_duration`` or a ready ``durations``
    source, not both.
    """

    def __init__(self, actor_id: int, left: Resource, right: Resource,
                 seed: int, verbose: bool = False, *,
                 timeout: float = DEFAULT_TIMEOUT,
                 max_duration: Optional[float] = None,
                 durations: Optional[DurationSource] = None,
                 observers: Iterable = (),
                 clock: Callable[[], float] = time.perf_counter):
        self.actor_id = actor_id
        self.left = left
        self.right = right
        self.seed = seed
        self.verbose = verbose
        self.timeout = timeout
        if durations is None:
            if max_duration is None:
                max_duration = DEFAULT_MAX_DURATION
            durations = SeededDurations(seed + actor_id, max_duration)
        elif max_duration is not None:
            raise ValueError("max_duration only applies to the seeded duration source")
        self.durations = durations
        self.observers: List = list(observers)
        if verbose:
            self.observers.append(LoggingObserver(actor_id))
        self._clock = clock
        self.logger = logging.getLogger(f"Actor-{actor_id}")

        self.phase = Phase.THINKING

        self.thinking_turns = 0
        self.hungry_turns = 0
        self.eating_turns = 0
        self.thinking_time = 0.0
        self.hungry_time = 0.0
        self.eating_time = 0.0

    # ── Statistics ───────────────────────────────────────────────────────────

    @property
    def average_thinking_time(self) -> float:
        return self.thinking_time / self.thinking_turns

    @property
    def average_hungry_time(self) -> float:
        return self.hungry_time / self.hungry_turns

    @property
    def average_eating_time(self) -> float:
        return self.eating_time / self.eating_turns

    def stats(self) -> ActorStats:
        return ActorStats(
            actor_id=self.actor_id,
            thinking_turns=self.thinking_turns,
            hungry_turns=self.hungry_turns,
            eating_turns=self.eating_turns,
            thinking_time=self.thinking_time,
            hungry_time=self.hungry_time,
            eating_time=self.eating_time,
        )

    # ── Run loop ─────────────────────────────────────────────────────────────

    def run(self, token: CancellationToken):
        """
        Cycle through the three phases until ``token`` is cancelled.

        Cancellation is the normal way out. Whatever the actor holds at that
        point is put back before returning.
        """
        try:
            while not token.cancelled:
                self.thinking(token)
                self.hungry(token)
                self.eating(token)
        except Cancelled:
            self.logger.debug(f"Cancelled while {self.phase.value}")
        finally:
            self._put_down_held()
            self._emit('quit')

    def thinking(self, token: CancellationToken):
        token.raise_if_cancelled()
        self._enter(Phase.THINKING)
        self.thinking_turns += 1

        duration = self.durations.next_duration()
        token.sleep(duration)
        self.thinking_time += duration

    def hungry(self, token: CancellationToken):
        token.raise_if_cancelled()
        self._enter(Phase.HUNGRY)
        self.hungry_turns += 1

        has_both = False
        started = self._clock()
        while not has_both and not token.cancelled:
            if self.left.acquire(self, self.timeout, token):
                self._emit('pickup', self.left)

                if self.right.acquire(self, self.timeout, token):
                    self._emit('pickup', self.right)
                else:
                    # Never keep the left one while the right is out of reach
                    self._put_down(self.left)

            if self.right.is_held_by(self) and self.left.is_held_by(self):
                has_both = True

        if not has_both:
            raise Cancelled()
        self.hungry_time += self._clock() - started

    def eating(self, token: CancellationToken):
        token.raise_if_cancelled()
        self._enter(Phase.EATING)
        self.eating_turns += 1

        duration = self.durations.next_duration()
        token.sleep(duration)
        self.eating_time += duration

        self._put_down(self.right)
        self._put_down(self.left)

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _enter(self, phase: Phase):
        self.phase = phase
        self._emit(phase.value)

    def _put_down(self, resource: Resource):
        # Only the holder can release, so ownership cannot change between
        # this check and the release below
        if not resource.is_held_by(self):
            raise OwnershipError(
                f"actor {self.actor_id} does not hold resource {resource.resource_id}")
        # Announce before releasing so a recorded trace never shows overlap
        self._emit('putdown', resource)
        resource.release(self)

    def _put_down_held(self):
        for resource in (self.right, self.left):
            if resource.is_held_by(self):
                self._put_down(resource)

    def _emit(self, action: str, resource: Optional[Resource] = None):
        if not self.observers:
            return
        interaction = Interaction(
            actor=self.actor_id,
            action=action,
            resource=resource.resource_id if resource is not None else None,
            time=time.perf_counter(),
        )
        for observer in self.observers:
            observer.record(interaction)

    def __repr__(self):
        return (f"Actor(id={self.actor_id}, left={self.left.resource_id}, "
                f"right={self.right.resource_id})")
