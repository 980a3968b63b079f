"""
Observers of actor events
"""
from .log_observer import LoggingObserver
from .recorder import TraceRecorder

__all__ = [
    'LoggingObserver',
    'TraceRecorder'
]
