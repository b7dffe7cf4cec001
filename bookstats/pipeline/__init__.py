# bookstats/pipeline/__init__.py
"""
Loading and orchestration around the statistics engine.
"""

from .dashboard import StatsDashboard
from .loader import CollectionLoader, StatsLoadError

__all__ = [
    "CollectionLoader",
    "StatsDashboard",
    "StatsLoadError"
]
