#!/usr/bin/env python3
"""
Unit tests for the resource, cancellation, timing, statistics and trace
constraint components
"""
import time
import threading

import pytest

from config import SimulationConfig
from core import (
    Resource, OwnershipError, CancellationToken, Cancelled,
    SeededDurations, SequenceDurations, ActorStats, Interaction,
    C_excl, C_dup, C_cycle, C_release, evaluate_all_constraints
)
from observers import TraceRecorder


# ── Resource ─────────────────────────────────────────────────────────────────

def test_resource_acquire_release():
    """A free resource is taken immediately and given back."""
    r = Resource(7)
    assert r.resource_id == 7
    assert not r.locked()

    assert r.acquire('a1', timeout=0.1)
    assert r.locked()
    assert r.is_held_by('a1')
    assert not r.is_held_by('a2')

    r.release('a1')
    assert not r.locked()
    assert not r.is_held_by('a1')


def test_resource_bounded_wait_times_out():
    """A held resource makes a contender give up after the timeout."""
    r = Resource(0)
    assert r.acquire('a1', timeout=0.1)

    t0 = time.perf_counter()
    assert r.acquire('a2', timeout=0.05) is False
    waited = time.perf_counter() - t0

    assert waited >= 0.049
    assert waited < 0.5
    assert r.is_held_by('a1')


def test_resource_wait_succeeds_when_released_in_time():
    r = Resource(0)
    r.acquire('a1', timeout=0.1)

    timer = threading.Timer(0.05, r.release, args=('a1',))
    timer.start()
    try:
        assert r.acquire('a2', timeout=2.0)
        assert r.is_held_by('a2')
    finally:
        timer.join()


def test_release_by_non_owner_fails_fast():
    r = Resource(0)
    with pytest.raises(OwnershipError):
        r.release('a1')

    r.acquire('a1', timeout=0.1)
    with pytest.raises(OwnershipError):
        r.release('a2')
    # Ownership is untouched by the failed release
    assert r.is_held_by('a1')


def test_acquire_by_holder_is_rejected():
    """No self-duplication: a holder cannot take the same resource twice."""
    r = Resource(0)
    r.acquire('a1', timeout=0.1)
    with pytest.raises(OwnershipError):
        r.acquire('a1', timeout=0.1)
    assert r.is_held_by('a1')


def test_acquire_requires_holder():
    with pytest.raises(ValueError):
        Resource(0).acquire(None, timeout=0.1)


def test_acquire_with_cancelled_token_raises():
    r = Resource(0)
    token = CancellationToken()
    token.cancel()
    with pytest.raises(Cancelled):
        r.acquire('a1', timeout=0.1, cancel=token)
    assert not r.locked()


def test_cancel_wakes_waiting_acquire():
    """Cancelling interrupts a bounded wait long before its timeout."""
    r = Resource(0)
    r.acquire('a1', timeout=0.1)
    token = CancellationToken()
    outcome = {}

    def contender():
        t0 = time.perf_counter()
        try:
            r.acquire('a2', timeout=5.0, cancel=token)
            outcome['result'] = 'acquired'
        except Cancelled:
            outcome['result'] = 'cancelled'
        outcome['waited'] = time.perf_counter() - t0

    t = threading.Thread(target=contender)
    t.start()
    time.sleep(0.05)
    token.cancel()
    t.join(2.0)

    assert not t.is_alive()
    assert outcome['result'] == 'cancelled'
    assert outcome['waited'] < 1.0
    assert r.is_held_by('a1')


def test_cancel_wakes_remaining_waiter_after_another_left():
    """Two waiters share a token; the one still waiting is woken by cancel."""
    r = Resource(0)
    r.acquire('h', timeout=0.1)
    token = CancellationToken()
    outcome = {}

    def waiter(name, timeout):
        try:
            outcome[name] = r.acquire(name, timeout=timeout, cancel=token)
        except Cancelled:
            outcome[name] = 'cancelled'
        outcome[f'{name}_done'] = time.perf_counter()

    short = threading.Thread(target=waiter, args=('w1', 0.1))
    slow = threading.Thread(target=waiter, args=('w2', 3.0))
    short.start()
    slow.start()
    short.join(2.0)
    assert outcome['w1'] is False

    t_cancel = time.perf_counter()
    token.cancel()
    slow.join(3.5)

    assert outcome['w2'] == 'cancelled'
    assert outcome['w2_done'] - t_cancel < 0.5
    assert r.is_held_by('h')


def test_mutual_exclusion_under_contention():
    """At most one thread is ever inside the critical section."""
    r = Resource(0)
    inside = []
    max_inside = []
    guard = threading.Lock()

    def worker(name):
        for _ in range(200):
            if r.acquire(name, timeout=1.0):
                with guard:
                    inside.append(name)
                    max_inside.append(len(inside))
                time.sleep(0)
                with guard:
                    inside.remove(name)
                r.release(name)

    threads = [threading.Thread(target=worker, args=(f'a{i}',)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert max_inside
    assert max(max_inside) == 1
    assert not r.locked()


# ── Cancellation token ───────────────────────────────────────────────────────

def test_token_sleep_completes_when_not_cancelled():
    token = CancellationToken()
    t0 = time.perf_counter()
    token.sleep(0.02)
    assert time.perf_counter() - t0 >= 0.019
    assert not token.cancelled
    token.raise_if_cancelled()


def test_token_sleep_interrupted_by_cancel():
    token = CancellationToken()
    threading.Timer(0.05, token.cancel).start()

    t0 = time.perf_counter()
    with pytest.raises(Cancelled):
        token.sleep(5.0)
    assert time.perf_counter() - t0 < 1.0
    assert token.cancelled
    with pytest.raises(Cancelled):
        token.raise_if_cancelled()


# ── Durations ────────────────────────────────────────────────────────────────

def test_seeded_durations_are_reproducible():
    a = SeededDurations(103, max_duration=1.0)
    b = SeededDurations(103, max_duration=1.0)
    first = [a.next_duration() for _ in range(20)]
    assert first == [b.next_duration() for _ in range(20)]
    assert all(0.0 <= d < 1.0 for d in first)

    other = SeededDurations(104, max_duration=1.0)
    assert first != [other.next_duration() for _ in range(20)]


def test_seeded_durations_respect_bound():
    d = SeededDurations(1, max_duration=0.01)
    assert all(0.0 <= d.next_duration() < 0.01 for _ in range(500))
    with pytest.raises(ValueError):
        SeededDurations(1, max_duration=0)


def test_sequence_durations_cycle():
    d = SequenceDurations([0.1, 0.2])
    assert [d.next_duration() for _ in range(5)] == [0.1, 0.2, 0.1, 0.2, 0.1]
    with pytest.raises(ValueError):
        SequenceDurations([])
    with pytest.raises(ValueError):
        SequenceDurations([-1.0])


# ── Statistics ───────────────────────────────────────────────────────────────

def test_stats_averages():
    s = ActorStats(actor_id=2, thinking_turns=4, hungry_turns=2, eating_turns=1,
                   thinking_time=2.0, hungry_time=0.5, eating_time=0.25)
    assert s.average_thinking_time() == 0.5
    assert s.average_hungry_time() == 0.25
    assert s.average_eating_time() == 0.25

    d = s.to_dict()
    assert d['average_thinking_time'] == 0.5
    assert ActorStats.from_dict(d) == s


def test_stats_average_undefined_without_turns():
    s = ActorStats(actor_id=0)
    with pytest.raises(ZeroDivisionError):
        s.average_eating_time()
    assert s.to_dict()['average_eating_time'] is None


# ── Trace constraints ────────────────────────────────────────────────────────

def test_constraints_accept_valid_trace():
    trace = [
        Interaction(0, 'thinking'),
        Interaction(0, 'hungry'),
        Interaction(0, 'pickup', 0),
        Interaction(0, 'pickup', 1),
        Interaction(0, 'eating'),
        Interaction(0, 'putdown', 1),
        Interaction(0, 'putdown', 0),
        Interaction(1, 'thinking'),
        Interaction(1, 'hungry'),
        Interaction(1, 'pickup', 1),
        Interaction(0, 'thinking'),
        Interaction(1, 'quit'),
    ]
    # Actor 1 quit while holding resource 1
    assert evaluate_all_constraints(trace) == {
        'C_excl': 0, 'C_dup': 0, 'C_cycle': 0, 'C_release': 1
    }


def test_C_excl_detects_overlap():
    trace = [
        Interaction(0, 'pickup', 3),
        Interaction(1, 'pickup', 3),
    ]
    assert C_excl(trace) == [trace[1]]


def test_C_dup_detects_double_pickup():
    trace = [
        Interaction(0, 'pickup', 3),
        Interaction(0, 'pickup', 3),
    ]
    assert C_dup(trace) == [trace[1]]
    assert C_excl(trace) == []


def test_C_cycle_detects_skipped_phase():
    trace = [
        Interaction(0, 'thinking'),
        Interaction(0, 'eating'),
        Interaction(1, 'hungry'),
    ]
    assert C_cycle(trace) == [trace[1], trace[2]]


def test_C_release_detects_foreign_putdown():
    trace = [
        Interaction(0, 'pickup', 1),
        Interaction(1, 'putdown', 1),
    ]
    assert C_release(trace) == [trace[1]]


def test_interaction_dict_round_trip():
    u = Interaction(3, 'pickup', 4, time=1.5)
    assert Interaction.from_dict(u.to_dict()) == u
    assert str(u) == 'a3.pickup(r4)'
    assert not u.is_phase
    assert Interaction(3, 'eating').is_phase


# ── Recorder ─────────────────────────────────────────────────────────────────

def test_recorder_collects_and_checks():
    recorder = TraceRecorder()
    for u in [Interaction(0, 'thinking'), Interaction(0, 'hungry'),
              Interaction(0, 'pickup', 0), Interaction(0, 'putdown', 0)]:
        recorder.record(u)

    assert recorder.get_trace_length() == 4
    assert recorder.phase_sequence(0) == ['thinking', 'hungry']
    assert recorder.count('pickup') == 1
    assert recorder.count('pickup', actor=1) == 0
    assert recorder.is_compliant()

    recorder.reset()
    assert recorder.get_trace_length() == 0


# ── Configuration ────────────────────────────────────────────────────────────

def test_config_defaults():
    config = SimulationConfig()
    assert config.n_actors == 5
    assert config.seed == 100
    assert config.timeout == pytest.approx(1.001)
    assert config.max_duration == 1.0
    assert config.validate() is config


def test_config_from_env():
    config = SimulationConfig.from_env({
        'N_ACTORS': '3', 'SEED': '7', 'RUN_TIME': '0.5',
        'TIMEOUT': '0.02', 'MAX_DURATION': '0.01', 'VERBOSE': 'true',
    })
    assert config == SimulationConfig(n_actors=3, seed=7, run_time=0.5,
                                      timeout=0.02, max_duration=0.01, verbose=True)


def test_config_validation():
    with pytest.raises(ValueError):
        SimulationConfig(n_actors=1).validate()
    with pytest.raises(ValueError):
        SimulationConfig(timeout=0).validate()


def run_all_tests():
    """Run the tests that need no fixtures."""
    print("="*70)
    print("DINING ACTORS - UNIT TESTS")
    print("="*70)

    tests = [value for name, value in sorted(globals().items())
             if name.startswith('test_') and callable(value)]
    for test in tests:
        test()
        print(f"  ✓ {test.__name__}")

    print("\n" + "="*70)
    print("ALL TESTS PASSED ✓")
    print("="*70)
    return 0


if __name__ == '__main__':
    exit(run_all_tests())
