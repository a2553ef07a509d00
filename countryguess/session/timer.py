"""
Turn Timer - Drives TIMER_TICK / TIMER_TIMEOUT from wall-clock time.

The loop:
1. Once per second, if the game is active and a timer is configured
2. While time remains, dispatch TIMER_TICK
3. When the countdown reads zero, dispatch TIMER_TIMEOUT exactly once
4. Stay quiet until the countdown has been reset by a turn change

The reducer never times out on its own; this driver is the only
source of timeouts.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import threading

from ..engine_core.action import Action
from .store import GameStore

logger = logging.getLogger(__name__)


class TimerEvent(Enum):
    """What a timer step did."""
    IDLE = "idle"
    TICK = "tick"
    TIMEOUT = "timeout"


@dataclass
class TurnTimer:
    """
    Issues timer events against a GameStore.

    Usage:
        timer = TurnTimer(store)
        timer.start()       # background thread, one step per second
        ...
        timer.stop()

    Hosts with their own event loop call step() once per second instead.
    """
    store: GameStore
    interval: float = 1.0

    def __post_init__(self):
        self._timeout_sent = False
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()

    def step(self) -> TimerEvent:
        """Advance the countdown by one interval."""
        state = self.store.state
        if not state.is_active or not state.has_timer:
            self._timeout_sent = False
            return TimerEvent.IDLE

        remaining = state.timer_remaining
        if remaining is None:
            remaining = state.timer_seconds

        if remaining > 0:
            self._timeout_sent = False
            self.store.dispatch(Action.timer_tick(), if_state=state)
            return TimerEvent.TICK

        if self._timeout_sent:
            return TimerEvent.IDLE

        self._timeout_sent = self.store.dispatch(Action.timer_timeout(), if_state=state)
        return TimerEvent.TIMEOUT if self._timeout_sent else TimerEvent.IDLE

    def run(self, stop_event: threading.Event) -> None:
        """Step once per interval until stop_event is set."""
        while not stop_event.wait(self.interval):
            try:
                self.step()
            except Exception:
                logger.exception("Turn timer step failed; still running")

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run, args=(self._stop,), name="turn-timer", daemon=True,
        )
        self._thread.start()
        logger.debug("Turn timer started")

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None
