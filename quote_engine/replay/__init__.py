"""
Replay system for rule set reconstruction.

Replay applies the reducer to the event log to rebuild the rule set.
Same events -> same state.
"""

from .runner import ReplayResult, build, default_reducer, replay

__all__ = [
    "ReplayResult",
    "build",
    "default_reducer",
    "replay",
]
