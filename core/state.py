"""
Per-actor timing statistics
"""
from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class ActorStats:
    """
    Snapshot of one actor's counters.

    Times are cumulative seconds. The ``average_*`` accessors divide by the
    turn count and are undefined (ZeroDivisionError) while that count is zero;
    check the turn count before asking for an average.
    """
    actor_id: int
    thinking_turns: int = 0
    hungry_turns: int = 0
    eating_turns: int = 0
    thinking_time: float = 0.0
    hungry_time: float = 0.0
    eating_time: float = 0.0

    def average_thinking_time(self) -> float:
        return self.thinking_time / self.thinking_turns

    def average_hungry_time(self) -> float:
        return self.hungry_time / self.hungry_turns

    def average_eating_time(self) -> float:
        return self.eating_time / self.eating_turns

    def to_dict(self):
        d = asdict(self)
        d['average_thinking_time'] = _average_or_none(self.thinking_time, self.thinking_turns)
        d['average_hungry_time'] = _average_or_none(self.hungry_time, self.hungry_turns)
        d['average_eating_time'] = _average_or_none(self.eating_time, self.eating_turns)
        return d

    @classmethod
    def from_dict(cls, d):
        return cls(
            actor_id=d['actor_id'],
            thinking_turns=d['thinking_turns'],
            hungry_turns=d['hungry_turns'],
            eating_turns=d['eating_turns'],
            thinking_time=d['thinking_time'],
            hungry_time=d['hungry_time'],
            eating_time=d['eating_time'],
        )


def _average_or_none(total: float, turns: int) -> Optional[float]:
    if turns == 0:
        return None
    return total / turns
