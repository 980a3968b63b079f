"""
Simulation configuration.

Defaults reproduce the reference run: five actors around a table, seed 100,
phases of up to one second and a bounded wait one millisecond longer than the
longest phase. Every field can be overridden from the environment.
"""
import os
from dataclasses import dataclass, asdict

from core.timing import DEFAULT_MAX_DURATION, DEFAULT_TIMEOUT


@dataclass
class SimulationConfig:
    n_actors: int = 5
    seed: int = 100
    run_time: float = 5.0           # seconds of wall-clock time before cancelling
    timeout: float = DEFAULT_TIMEOUT
    max_duration: float = DEFAULT_MAX_DURATION
    verbose: bool = False

    @classmethod
    def from_env(cls, environ=None) -> 'SimulationConfig':
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            n_actors=int(env.get('N_ACTORS', defaults.n_actors)),
            seed=int(env.get('SEED', defaults.seed)),
            run_time=float(env.get('RUN_TIME', defaults.run_time)),
            timeout=float(env.get('TIMEOUT', defaults.timeout)),
            max_duration=float(env.get('MAX_DURATION', defaults.max_duration)),
            verbose=str(env.get('VERBOSE', defaults.verbose)).lower() in ('1', 'true', 'yes'),
        )

    def validate(self) -> 'SimulationConfig':
        if self.n_actors < 2:
            raise ValueError("At least two actors are required to share resources.")
        if self.run_time <= 0 or self.timeout <= 0 or self.max_duration <= 0:
            raise ValueError("All time parameters must be positive.")
        return self

    def to_dict(self):
        return asdict(self)
