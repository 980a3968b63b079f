"""
Trace Recorder

Records every interaction emitted by the actors it is attached to. The trace
is checked after the run with the constraints in ``core.constraints``.
"""
import threading
from typing import Dict, List, Optional

from core.constraints import evaluate_all_constraints, DEFAULT_CONSTRAINTS
from core.interaction import Interaction


class TraceRecorder:
    """
    Thread-safe, append-only trace shared by all actors of a run.

    Appends are serialized by one lock, so the trace order is a valid
    linearization of the events as each actor emitted them.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.trace: List[Interaction] = []

    def record(self, interaction: Interaction):
        with self.lock:
            self.trace.append(interaction)

    def snapshot(self) -> List[Interaction]:
        with self.lock:
            return list(self.trace)

    def violations(self) -> Dict[str, int]:
        """Number of violations per constraint over the current trace."""
        return evaluate_all_constraints(self.snapshot(), DEFAULT_CONSTRAINTS)

    def is_compliant(self) -> bool:
        return not any(self.violations().values())

    def phase_sequence(self, actor: int) -> List[str]:
        return [u.action for u in self.snapshot() if u.actor == actor and u.is_phase]

    def count(self, action: str, actor: Optional[int] = None) -> int:
        return sum(1 for u in self.snapshot()
                   if u.action == action and (actor is None or u.actor == actor))

    def get_trace_length(self) -> int:
        with self.lock:
            return len(self.trace)

    def reset(self):
        with self.lock:
            self.trace = []
