"""
Tests for the session layer: GameStore and TurnTimer.

Tests:
- Dispatch reports accepted vs ignored events
- Saves after accepted events, restores once on hydrate
- Persistence faults never interrupt play
- Timer ticks down and times out exactly once per expiry
"""

import threading

import pytest

from ..engine_core.state import GameSettings, GamePhase, initial_state
from ..engine_core.action import Action, ActionType
from ..session import GameStore, TurnTimer, TimerEvent
from ..storage import MemoryBlobStore, load_game, save_game
from .test_storage import BrokenBlobStore


class SlowBlobStore(MemoryBlobStore):
    """The first write stalls until released, like a disk that hangs."""

    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()
        self._stalled = False

    def set(self, key, value):
        if not self._stalled:
            self._stalled = True
            self.entered.set()
            self.release.wait(timeout=5)
        super().set(key, value)


def failing_listener(state, action):
    raise RuntimeError("subscriber crashed")


class TestGameStore:

    def test_starts_fresh(self, store):
        assert store.state == initial_state()
        assert store.settings == GameSettings()

    def test_dispatch_accepted(self, store, plain_settings):
        assert store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        assert store.state.phase == GamePhase.ACTIVE

    def test_dispatch_ignored(self, store):
        before = store.state
        assert not store.dispatch(Action.submit_guess("France", 1))
        assert store.state is before

    def test_saves_after_accepted_event(self, store, blob_store, plain_settings):
        store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        store.dispatch(Action.submit_guess("Chile", 5))

        loaded = load_game(blob_store)
        assert loaded.game_state == store.state
        assert "CL" in loaded.game_state.guessed_countries

    def test_hydrate_restores_once(self, blob_store, strict_settings, three_player_game):
        save_game(blob_store, three_player_game, strict_settings)

        store = GameStore(blob_store)
        assert store.hydrate()
        assert store.state == three_player_game
        assert store.settings == strict_settings

        store.dispatch(Action.advance_turn())
        assert not store.hydrate()
        assert store.state.current_player_index == 1

    def test_hydrate_with_nothing_saved(self, store):
        assert not store.hydrate()
        assert store.state == initial_state()

    def test_hydrate_ignores_corrupt_save(self):
        store = GameStore(MemoryBlobStore({"country-guesser-game": '{"game_state": 1}'}))
        assert not store.hydrate()
        assert store.state == initial_state()

    def test_broken_storage_does_not_block_play(self, plain_settings):
        store = GameStore(BrokenBlobStore())
        assert not store.hydrate()
        assert store.dispatch(Action.start_game(plain_settings, ["Ann"]))
        assert store.dispatch(Action.submit_guess("Kenya", 1))
        assert "KE" in store.state.guessed_countries
        store.clear()
        assert store.state == initial_state()

    def test_update_settings_persists(self, store, blob_store):
        settings = GameSettings(timer_enabled=True, timer_seconds=15)
        store.update_settings(settings)
        assert store.settings == settings
        assert load_game(blob_store).settings == settings

    def test_clear_forgets_saved_game(self, store, blob_store, plain_settings):
        store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        store.clear()

        assert store.state == initial_state()
        assert load_game(blob_store) is None

    def test_if_state_guard(self, store, plain_settings):
        store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        stale = store.state
        store.dispatch(Action.advance_turn())

        assert not store.dispatch(Action.advance_turn(), if_state=stale)
        assert store.dispatch(Action.advance_turn(), if_state=store.state)

    def test_listeners(self, store, plain_settings):
        seen = []
        unsubscribe = store.subscribe(lambda state, action: seen.append(action.action_type))

        store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        store.dispatch(Action.timer_tick())  # no timer: ignored
        unsubscribe()
        store.dispatch(Action.advance_turn())

        assert seen == [ActionType.START_GAME]

    def test_failing_listener_does_not_reject_event(self, store, blob_store, plain_settings):
        seen = []
        store.subscribe(failing_listener)
        store.subscribe(lambda state, action: seen.append(action.action_type))

        assert store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        assert store.dispatch(Action.submit_guess("France", 1))

        assert store.state.phase == GamePhase.ACTIVE
        assert "FR" in store.state.guessed_countries
        assert seen == [ActionType.START_GAME, ActionType.SUBMIT_GUESS]
        assert load_game(blob_store).game_state == store.state

    def test_slow_save_does_not_hold_up_events(self, plain_settings):
        blob_store = SlowBlobStore()
        store = GameStore(blob_store)
        advanced = threading.Event()
        store.subscribe(
            lambda state, action: action.action_type == ActionType.ADVANCE_TURN and advanced.set()
        )

        first = threading.Thread(
            target=store.dispatch, args=(Action.start_game(plain_settings, ["Ann", "Bo"]),)
        )
        first.start()
        assert blob_store.entered.wait(timeout=5)

        second = threading.Thread(target=store.dispatch, args=(Action.advance_turn(),))
        second.start()
        try:
            # Applied while the first save is still stuck on disk
            assert advanced.wait(timeout=5)
            assert store.state.current_player_index == 1
        finally:
            blob_store.release.set()
            first.join(timeout=5)
            second.join(timeout=5)

        assert load_game(blob_store).game_state == store.state

    def test_concurrent_guesses_are_serialized(self, store, plain_settings):
        store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        countries = ["France", "Spain", "Italy", "Germany", "Poland", "Greece", "Egypt", "Peru"]

        threads = [
            threading.Thread(target=store.dispatch, args=(Action.submit_guess(c, i),))
            for i, c in enumerate(countries)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.state.guessed_countries) == len(countries)
        assert store.state.current_player_index == 0


class TestTurnTimer:

    @pytest.fixture
    def timed_store(self, store) -> GameStore:
        settings = GameSettings(timer_enabled=True, timer_seconds=5, strikes_enabled=True, max_strikes=3)
        store.dispatch(Action.start_game(settings, ["Ann", "Bo"]))
        return store

    def test_idle_without_game(self, store):
        assert TurnTimer(store).step() == TimerEvent.IDLE

    def test_idle_without_timer(self, store, plain_settings):
        store.dispatch(Action.start_game(plain_settings, ["Ann", "Bo"]))
        assert TurnTimer(store).step() == TimerEvent.IDLE

    def test_ticks_down(self, timed_store):
        timer = TurnTimer(timed_store)
        assert timer.step() == TimerEvent.TICK
        assert timed_store.state.timer_remaining == 4

    def test_times_out_once(self, timed_store):
        timer = TurnTimer(timed_store)
        events = [timer.step() for _ in range(6)]

        assert events == [TimerEvent.TICK] * 5 + [TimerEvent.TIMEOUT]
        state = timed_store.state
        assert state.players[0].strikes == 1
        assert state.current_player_index == 1
        assert state.timer_remaining == 5

    def test_no_second_timeout_at_zero(self, timed_store):
        # A zeroed countdown that was not reset by a turn change
        timer = TurnTimer(timed_store)
        timed_store.dispatch(Action.rehydrate(timed_store.state._copy_with(timer_remaining=0)))

        assert timer.step() == TimerEvent.TIMEOUT
        timed_store.dispatch(Action.rehydrate(timed_store.state._copy_with(timer_remaining=0)))
        assert timer.step() == TimerEvent.IDLE
        assert timed_store.state.players[1].strikes == 0

    def test_background_thread(self, timed_store):
        timer = TurnTimer(timed_store, interval=0.01)
        seen = threading.Event()
        timed_store.subscribe(
            lambda state, action: action.action_type == ActionType.TIMER_TIMEOUT and seen.set()
        )

        timer.start()
        try:
            assert seen.wait(timeout=5)
        finally:
            timer.stop()

        assert timed_store.state.players[0].strikes >= 1

    def test_background_thread_survives_failing_listener(self, timed_store):
        timed_store.subscribe(failing_listener)
        timer = TurnTimer(timed_store, interval=0.01)
        ticked = threading.Event()
        timed_store.subscribe(
            lambda state, action: state.timer_remaining is not None
            and state.timer_remaining <= 3 and ticked.set()
        )

        timer.start()
        try:
            assert ticked.wait(timeout=5)
            assert timer._thread.is_alive()
        finally:
            timer.stop()

    def test_run_keeps_going_after_a_failed_step(self, timed_store, monkeypatch):
        timer = TurnTimer(timed_store, interval=0.01)
        real_step = timer.step
        calls = []
        stop = threading.Event()

        def flaky_step():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("step blew up")
            if len(calls) >= 3:
                stop.set()
            return real_step()

        monkeypatch.setattr(timer, "step", flaky_step)
        timer.run(stop)

        assert len(calls) >= 3
        assert timed_store.state.timer_remaining < 5
