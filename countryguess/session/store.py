"""
Game Store - The single holder of the current game.

LIFECYCLE:
1. Host creates the store (fresh setup-phase state, default settings)
2. hydrate() restores a saved game once, before anything is shown
3. Every event goes through dispatch():
   - events are applied one at a time under a lock
   - the reducer returns a whole new state, which replaces the old one
   - subscribers are notified; a failing subscriber is logged, never raised
   - the new state is saved after the lock is released, so a slow disk
     does not hold up the next event
4. clear() throws the game away and forgets the saved copy

PERSISTENCE RULES:
- Saving is best-effort; a failed save never blocks or alters play
- Saves are versioned; a write that lost the race to a newer one is skipped
- A missing or invalid saved game means a fresh start
"""

from __future__ import annotations
from typing import Callable
import logging
import threading

from ..engine_core.state import DEFAULT_SETTINGS, GameSettings, GameState, initial_state
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..storage import BlobStore, MemoryBlobStore, clear_game, load_game, save_game

logger = logging.getLogger(__name__)

Listener = Callable[[GameState, Action], None]


class GameStore:
    """
    Holds the current GameState and GameSettings.

    Usage:
        store = GameStore(FileBlobStore())
        store.hydrate()

        store.dispatch(Action.start_game(settings, ["Ann", "Bo"]))
        store.dispatch(Action.submit_guess("France", now_ms()))

        render(store.state)

    State is only ever replaced as a whole by the reducer; readers get
    immutable values and never a handle to mutate.
    """

    def __init__(
        self,
        blob_store: BlobStore | None = None,
        reducer: Reducer | None = None,
        settings: GameSettings = DEFAULT_SETTINGS,
    ):
        self._blob_store = blob_store if blob_store is not None else MemoryBlobStore()
        self._reducer = reducer or Reducer()
        self._state = initial_state()
        self._settings = settings
        self._lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._version = 0
        self._saved_version = 0
        self._listeners: list[Listener] = []
        self._hydrated = False

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    def hydrate(self) -> bool:
        """
        Restore the saved game, once.

        Returns True when a saved game replaced the initial state.
        """
        with self._lock:
            if self._hydrated:
                return False
            self._hydrated = True

            loaded = load_game(self._blob_store)
            if loaded is None:
                return False

            self._settings = loaded.settings
            self._apply(Action.rehydrate(loaded.game_state))
            logger.info("Restored saved game in phase %s", loaded.game_state.phase.value)
            return True

    def dispatch(self, action: Action, if_state: GameState | None = None) -> bool:
        """
        Apply one event.

        With if_state, the event is only applied while the current state
        is still that exact value (events computed from a stale read are
        dropped).

        Returns True if the event changed the state, False if it was ignored.
        """
        with self._lock:
            if if_state is not None and if_state is not self._state:
                return False
            if not self._apply(action):
                return False
            snapshot = self._snapshot()
        self._write(snapshot)
        return True

    def update_settings(self, settings: GameSettings) -> None:
        """Replace the stored settings used for the next game."""
        with self._lock:
            self._settings = settings
            snapshot = self._snapshot()
        self._write(snapshot)

    def clear(self) -> None:
        """Reset to a fresh game and forget the saved copy."""
        with self._lock:
            self._state = self._reducer.apply(self._state, Action.reset())
            self._version += 1
            snapshot = (self._version, None, None)
        self._write(snapshot)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener(new_state, action) after every accepted event.

        Returns a function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, action: Action) -> bool:
        new_state = self._reducer.apply(self._state, action)
        if new_state is self._state:
            return False

        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state, action)
            except Exception:
                logger.exception("Listener failed on %s", action.action_type.value)
        return True

    def _snapshot(self) -> tuple[int, GameState, GameSettings]:
        """Stamp the current state and settings for saving. Caller holds the lock."""
        self._version += 1
        return self._version, self._state, self._settings

    def _write(self, snapshot) -> None:
        """Save (or, with no state, clear) unless a newer snapshot got there first."""
        version, state, settings = snapshot
        with self._save_lock:
            if version <= self._saved_version:
                return
            self._saved_version = version
            if state is None:
                clear_game(self._blob_store)
            elif not save_game(self._blob_store, state, settings):
                logger.debug("Continuing without a saved copy")
