#!/usr/bin/env python3
"""
Main Simulation Script for the Dining Actors

Runs the ring scenario with the configuration taken from the environment,
prints the per-actor statistics and saves them as JSON.
"""
import json
import time
import logging
from pathlib import Path

from config import SimulationConfig
from scenarios import RingScenario, ContentionScenario

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(name)s] %(message)s')
logger = logging.getLogger('Simulation')


def print_stats_table(stats):
    print(f"\n{'Actor':<7}{'Think':<7}{'Hungry':<8}{'Eat':<6}"
          f"{'Avg think (ms)':<16}{'Avg hungry (ms)':<17}{'Avg eat (ms)':<14}")
    print("-" * 75)
    for s in stats:
        # An average only exists once the phase has been entered at least once
        avg_think = f"{s.average_thinking_time() * 1000:.1f}" if s.thinking_turns else "-"
        avg_hungry = f"{s.average_hungry_time() * 1000:.1f}" if s.hungry_turns else "-"
        avg_eat = f"{s.average_eating_time() * 1000:.1f}" if s.eating_turns else "-"
        print(f"{s.actor_id:<7}{s.thinking_turns:<7}{s.hungry_turns:<8}{s.eating_turns:<6}"
              f"{avg_think:<16}{avg_hungry:<17}{avg_eat:<14}")


def run_simulation(output_dir: str = "results", config: SimulationConfig = None):
    """Run the ring and contention scenarios and save results."""
    config = (config or SimulationConfig.from_env()).validate()

    Path(output_dir).mkdir(parents=True, exist_ok=True)

    print("="*80)
    print("DINING ACTORS SIMULATION")
    print("="*80)
    print(f"\n{config.n_actors} actors | seed {config.seed} | run {config.run_time:.2f}s | "
          f"max phase {config.max_duration:.3f}s | timeout {config.timeout:.3f}s")
    print(f"Results will be saved to: {output_dir}/")

    # -------------------------------------------------------------------------
    # RING
    # -------------------------------------------------------------------------
    start_time = time.time()

    result = RingScenario(config).run_single_replication()
    print_stats_table(result['stats'])

    print(f"\nEvery actor ate: {'YES' if result['everyone_ate'] else 'NO'}")
    print(f"All resources released: {'YES' if result['all_released'] else 'NO'} "
          f"({result['release_latency'] * 1000:.1f} ms after cancel)")
    print(f"Trace violations: {result['violations']}")
    if result['still_running']:
        logger.warning(f"Threads still alive: {result['still_running']}")

    elapsed = time.time() - start_time
    print(f"\nCompleted in {elapsed:.1f}s")

    with open(f"{output_dir}/ring_results.json", 'w') as f:
        serializable = dict(result)
        serializable['stats'] = [s.to_dict() for s in result['stats']]
        serializable['config'] = config.to_dict()
        json.dump(serializable, f, indent=2)

    # -------------------------------------------------------------------------
    # CONTENTION
    # -------------------------------------------------------------------------
    contention = ContentionScenario().run()
    print(f"\nBounded wait: contender acquired={contention['acquired']} "
          f"after {contention['waited'] * 1000:.1f} ms")

    with open(f"{output_dir}/contention_results.json", 'w') as f:
        json.dump(contention, f, indent=2)

    return result


if __name__ == '__main__':
    import sys

    output_dir = sys.argv[1] if len(sys.argv) > 1 else "results"

    run_simulation(output_dir)
