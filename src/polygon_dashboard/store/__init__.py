"""
Dashboard state management.

Provides the explicit state container, its change events, defaults and
local persistence.
"""

from .changes import ChangeKind, StateChange
from .dashboard_store import DashboardStore
from .defaults import default_data_sources, default_state, default_timeline
from .persistence import PersistedState, StatePersistence

__all__ = [
    "ChangeKind",
    "StateChange",
    "DashboardStore",
    "PersistedState",
    "StatePersistence",
    "default_data_sources",
    "default_state",
    "default_timeline",
]
