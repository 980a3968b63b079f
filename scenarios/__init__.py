"""
Simulation scenarios for the dining actors
"""
from .ring import RingScenario
from .contention import ContentionScenario

__all__ = ['RingScenario', 'ContentionScenario']
