"""Track editor state store.

This package handles:
- Immutable state snapshots
- Actions and the pure reducer applying them
- The caller-owned Store container
- Selectors for rendering
"""

from . import actions, selectors
from .actions import Action, ActionType
from .reducer import reduce, reduce_all
from .state import SaveProcess, State, Track, create_initial_state
from .store import Store

__all__ = [
    "actions",
    "selectors",
    "Action",
    "ActionType",
    "reduce",
    "reduce_all",
    "SaveProcess",
    "State",
    "Track",
    "create_initial_state",
    "Store",
]
