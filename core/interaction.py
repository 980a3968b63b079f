"""
Event emitted by an actor to its observers
"""
from dataclasses import dataclass, asdict
from typing import Literal, Optional

Action = Literal['thinking', 'hungry', 'eating', 'pickup', 'putdown', 'quit']

PHASE_ACTIONS = ('thinking', 'hungry', 'eating')
RESOURCE_ACTIONS = ('pickup', 'putdown')


@dataclass(frozen=True)
class Interaction:
    """
    One observable step of an actor.

    Phase events (thinking, hungry, eating) mark the start of a phase;
    resource events (pickup, putdown) name the resource involved; quit marks
    the end of the run loop.
    """
    actor: int
    action: Action
    resource: Optional[int] = None
    time: float = 0.0

    @property
    def is_phase(self) -> bool:
        return self.action in PHASE_ACTIONS

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, d):
        return cls(**d)

    def __repr__(self):
        if self.resource is None:
            return f"({self.actor}, {self.action}, t={self.time:.3f})"
        return f"({self.actor}, {self.action}, r{self.resource}, t={self.time:.3f})"

    def __str__(self):
        if self.resource is None:
            return f"a{self.actor}.{self.action}"
        return f"a{self.actor}.{self.action}(r{self.resource})"
