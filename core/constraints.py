"""
Trace constraints for the dining simulation

Post-hoc checks over a recorded sequence of interactions:
1. C_excl: mutual exclusion (a resource has at most one holder)
2. C_dup: no self-duplication (a holder never picks up the same resource again)
3. C_cycle: phase cyclicity (thinking -> hungry -> eating -> thinking ...)
4. C_release: guaranteed release (putdown only by the holder, nothing held after quit)

Each check returns the offending interactions; an empty list means the trace
satisfies the constraint. The trace must be in recording order.
"""
from typing import Callable, Dict, List, Sequence

from core.interaction import Interaction, PHASE_ACTIONS


# Type alias for constraint functions
ConstraintFunc = Callable[[Sequence[Interaction]], List[Interaction]]


def C_excl(trace: Sequence[Interaction]) -> List[Interaction]:
    """
    Mutual exclusion.

    A pickup violates the constraint when the resource is currently held by a
    different actor.
    """
    holders: Dict[int, int] = {}
    violations = []
    for u in trace:
        if u.action == 'pickup':
            holder = holders.get(u.resource)
            if holder is not None and holder != u.actor:
                violations.append(u)
            holders[u.resource] = u.actor
        elif u.action == 'putdown' and holders.get(u.resource) == u.actor:
            del holders[u.resource]
    return violations


def C_dup(trace: Sequence[Interaction]) -> List[Interaction]:
    """A pickup of a resource the same actor already holds."""
    held = set()
    violations = []
    for u in trace:
        key = (u.actor, u.resource)
        if u.action == 'pickup':
            if key in held:
                violations.append(u)
            held.add(key)
        elif u.action == 'putdown':
            held.discard(key)
    return violations


def C_cycle(trace: Sequence[Interaction]) -> List[Interaction]:
    """
    Phase cyclicity.

    Every actor's first phase is thinking and each later phase is the
    successor of the previous one.
    """
    last: Dict[int, str] = {}
    violations = []
    for u in trace:
        if not u.is_phase:
            continue
        previous = last.get(u.actor)
        if previous is None:
            expected = PHASE_ACTIONS[0]
        else:
            expected = PHASE_ACTIONS[(PHASE_ACTIONS.index(previous) + 1) % len(PHASE_ACTIONS)]
        if u.action != expected:
            violations.append(u)
        last[u.actor] = u.action
    return violations


def C_release(trace: Sequence[Interaction]) -> List[Interaction]:
    """
    Guaranteed release.

    A putdown by an actor that does not hold the resource is a violation, and
    so is an actor quitting while it still holds something (the quit event is
    reported once per resource left behind).
    """
    held: Dict[int, set] = {}
    violations = []
    for u in trace:
        resources = held.setdefault(u.actor, set())
        if u.action == 'pickup':
            resources.add(u.resource)
        elif u.action == 'putdown':
            if u.resource not in resources:
                violations.append(u)
            resources.discard(u.resource)
        elif u.action == 'quit':
            violations.extend(u for _ in resources)
            resources.clear()
    return violations


DEFAULT_CONSTRAINTS: Dict[str, ConstraintFunc] = {
    'C_excl': C_excl,
    'C_dup': C_dup,
    'C_cycle': C_cycle,
    'C_release': C_release,
}


def evaluate_all_constraints(trace: Sequence[Interaction],
                             constraints: Dict[str, ConstraintFunc] = None) -> Dict[str, int]:
    """
    Count violations per constraint.

    Args:
        trace: Recorded interactions, in recording order
        constraints: Named constraint functions (default: all four)

    Returns:
        Dictionary of constraint name -> number of violations
    """
    if constraints is None:
        constraints = DEFAULT_CONSTRAINTS

    return {name: len(check(trace)) for name, check in constraints.items()}
