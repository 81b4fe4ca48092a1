"""Caller-owned container for the track editor state.

Create one Store at startup and pass it explicitly to whatever dispatches
actions or renders state. Dispatches are serialized, including subscriber
notification, so subscribers see snapshots in the order they were produced
and the last snapshot a subscriber receives is always the current one.
"""

import threading
from collections.abc import Callable
from typing import Optional

from loguru import logger

from .actions import Action
from .reducer import reduce
from .state import State, create_initial_state

Subscriber = Callable[[State], None]


class Store:
    """Holds the current state snapshot and applies dispatched actions."""

    def __init__(
        self,
        initial_state: Optional[State] = None,
        reducer: Callable[[State, Action], State] = reduce,
    ) -> None:
        self._state = initial_state if initial_state is not None else create_initial_state()
        self._reducer = reducer
        # Reentrant so a subscriber may dispatch or unsubscribe while being notified
        self._lock = threading.RLock()
        self._version = 0
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> State:
        """Current state snapshot."""
        return self._state

    def dispatch(self, action: Action) -> State:
        """
        Apply an action and notify subscribers with the new snapshot.

        The lock is held until every subscriber has been notified. A failing
        subscriber is logged and does not prevent the remaining subscribers
        from being notified. When a subscriber dispatches, the nested
        dispatch notifies everyone with the newer snapshot and the outer
        notification stops.

        Returns:
            The new state snapshot
        """
        with self._lock:
            previous = self._state
            state = self._reducer(previous, action)
            if state is previous:
                return state

            self._state = state
            self._version += 1
            version = self._version

            for subscriber in list(self._subscribers):
                if self._version != version:
                    break
                try:
                    subscriber(state)
                except Exception as e:
                    logger.exception(f"State subscriber failed: {e}")

            return state

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return unsubscribe
