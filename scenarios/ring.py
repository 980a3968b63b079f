"""
Ring Scenario: actors around a table

Wires N resources and N actors in a ring (actor i holds resource i on its
left and resource (i+1) mod N on its right), runs them for a wall-clock
window, cancels them and checks that:
- every actor ate at least once
- every resource is unowned shortly after cancellation
- the recorded trace satisfies all trace constraints
"""
import time
import logging
import threading
import numpy as np
from typing import List, Dict, Optional

from config import SimulationConfig
from core import Actor, Resource, CancellationToken
from observers import TraceRecorder


class RingScenario:
    """
    Configuration:
    - n = 5 actors, 5 resources
    - seed = 100
    - timeout = 1.001 s, max phase duration = 1.0 s
    - run for 5 s, then cancel
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = (config or SimulationConfig()).validate()
        self.logger = logging.getLogger('RingScenario')

    def build(self, seed: int, recorder: Optional[TraceRecorder] = None):
        """Create the resources and the actors sitting between them."""
        n = self.config.n_actors
        resources = [Resource(i) for i in range(n)]
        observers = [recorder] if recorder is not None else []
        actors = [
            Actor(i, resources[i], resources[(i + 1) % n], seed, self.config.verbose,
                  timeout=self.config.timeout,
                  max_duration=self.config.max_duration,
                  observers=observers)
            for i in range(n)
        ]
        return resources, actors

    def run_single_replication(self, seed: Optional[int] = None) -> Dict:
        """
        Run the ring once.

        Returns:
            Dictionary with per-actor statistics, release checks and trace
            violation counts
        """
        if seed is None:
            seed = self.config.seed
        recorder = TraceRecorder()
        resources, actors = self.build(seed, recorder)
        token = CancellationToken()

        threads = [
            threading.Thread(target=actor.run, args=(token,),
                             name=f"actor-{actor.actor_id}", daemon=True)
            for actor in actors
        ]
        for t in threads:
            t.start()

        time.sleep(self.config.run_time)
        t_cancel = time.perf_counter()
        token.cancel()

        # Every actor must be out within one bounded-wait interval
        join_deadline = t_cancel + self.config.timeout
        for t in threads:
            t.join(max(0.0, join_deadline - time.perf_counter()))
        release_latency = time.perf_counter() - t_cancel

        still_running = [t.name for t in threads if t.is_alive()]
        if still_running:
            self.logger.warning(f"Actors still running after cancellation: {still_running}")

        all_released = not any(r.locked() for r in resources)
        stats = [actor.stats() for actor in actors]
        violations = recorder.violations()

        return {
            'seed': seed,
            'stats': stats,
            'all_released': all_released,
            'release_latency': release_latency,
            'still_running': still_running,
            'violations': violations,
            'trace_length': recorder.get_trace_length(),
            'everyone_ate': all(s.eating_turns > 0 for s in stats),
        }

    def run_experiment(self, n_replications: int = 10) -> Dict:
        """
        Run several replications with consecutive seeds and aggregate them.

        Returns:
            Dictionary with mean ± std per metric, plus the raw replications
        """
        results = []
        for replication in range(n_replications):
            seed = self.config.seed + replication * self.config.n_actors
            self.logger.info(f"Replication {replication + 1}/{n_replications} (seed={seed})")
            results.append(self.run_single_replication(seed))

        return {
            'aggregate': self._aggregate_results(results),
            'replications': results,
        }

    def _aggregate_results(self, results: List[Dict]) -> Dict:
        """Aggregate results across replications (mean ± std)."""
        aggregated = {}

        for phase in ('thinking', 'hungry', 'eating'):
            turns = [getattr(s, f'{phase}_turns') for r in results for s in r['stats']]
            totals = [getattr(s, f'{phase}_time') for r in results for s in r['stats']]
            averages = [total / n for total, n in zip(totals, turns) if n > 0]
            aggregated[phase] = {
                'turns': {'mean': float(np.mean(turns)), 'std': float(np.std(turns))},
                'average_time': {
                    'mean': float(np.mean(averages)) if averages else None,
                    'std': float(np.std(averages)) if averages else None,
                },
            }

        latencies = [r['release_latency'] for r in results]
        aggregated['release_latency'] = {
            'mean': float(np.mean(latencies)),
            'max': float(np.max(latencies)),
        }
        aggregated['all_released'] = all(r['all_released'] for r in results)
        aggregated['everyone_ate'] = all(r['everyone_ate'] for r in results)
        aggregated['violations'] = {
            name: int(sum(r['violations'][name] for r in results))
            for name in results[0]['violations']
        } if results else {}

        return aggregated


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(name)s] %(message)s')

    scenario = RingScenario(SimulationConfig.from_env())
    result = scenario.run_single_replication()

    print("\n" + "="*80)
    print("RING SCENARIO")
    print("="*80)
    for s in result['stats']:
        print(f"  Actor {s.actor_id}: ate {s.eating_turns} times, "
              f"thought {s.thinking_turns} times, hungry {s.hungry_turns} times")
    print(f"\nAll resources released: {result['all_released']} "
          f"({result['release_latency'] * 1000:.1f} ms after cancel)")
    print(f"Violations: {result['violations']}")
