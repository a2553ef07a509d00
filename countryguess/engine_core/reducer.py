"""
Reducer - Applies actions to game state.

The reducer is the single point of state change.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Never raises: an inapplicable action returns the input state
  unchanged (the same object), which callers treat as "ignored"
- Guess interpretation is delegated to the country resolver
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from ..gazetteer import ResolvedCountry, resolve
from .state import (
    DEFAULT_SETTINGS, GamePhase, GameState, GuessedCountry, GuessOutcome, Player,
    initial_state,
)
from .action import Action, ActionType
from .turns import (
    count_remaining_players, effective_round_settings, ensure_player_ids,
    next_player_index,
)

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The resolver maps raw guess text to a canonical country.
    """
    resolver: Callable[[str], ResolvedCountry | None] = field(default=resolve)

    def apply(self, state: GameState, action: Action) -> GameState:
        """
        Apply an action to the game state.

        Returns the new state, or the input state when the action
        does not apply.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return state

        try:
            return handler(state, action)
        except Exception:
            logger.exception("Ignoring %s: handler failed", action.action_type.value)
            return state

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.SUBMIT_GUESS: self._handle_submit_guess,
            ActionType.APPLY_STRIKE: self._handle_apply_strike,
            ActionType.ELIMINATE: self._handle_eliminate,
            ActionType.ADVANCE_TURN: self._handle_advance_turn,
            ActionType.TIMER_TICK: self._handle_timer_tick,
            ActionType.TIMER_TIMEOUT: self._handle_timer_timeout,
            ActionType.RESET: self._handle_reset,
            ActionType.NEW_GAME: self._handle_new_game,
            ActionType.REHYDRATE: self._handle_rehydrate,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Handlers
    # =========================================================================

    def _handle_start_game(self, state: GameState, action: Action) -> GameState:
        """
        Build an active game from settings and a roster.

        Blank names are dropped; with nobody left the action is ignored.
        """
        settings = action.payload.settings or DEFAULT_SETTINGS
        named = [
            Player(id=p.id, name=p.name.strip())
            for p in action.payload.players
            if isinstance(p.name, str) and p.name.strip()
        ]
        if not named:
            return state

        players = tuple(p.fresh() for p in ensure_player_ids(named))
        return GameState(
            phase=GamePhase.ACTIVE,
            players=players,
            current_player_index=0,
            guessed_countries={},
            **effective_round_settings(settings),
        )

    def _handle_submit_guess(self, state: GameState, action: Action) -> GameState:
        """
        Judge a guess for the current player, then pass the turn.

        Unknown and already-guessed countries are treated alike. A player
        struck out while holding the turn scores nothing and just passes it.
        """
        player = state.current_player
        if not state.is_active or player is None:
            return state
        if player.eliminated:
            return self._advance(state._copy_with(last_guess_outcome=None))

        resolved = self.resolver(action.payload.raw_guess)

        if resolved is None or resolved.iso_code in state.guessed_countries:
            outcome = GuessOutcome.UNKNOWN if resolved is None else GuessOutcome.DUPLICATE
            new_state = state
            if state.strikes_enabled:
                new_state = self._strike(new_state, player.id)
            new_state = new_state._copy_with(last_guess_outcome=outcome)
            return self._advance(new_state)

        guess = GuessedCountry(
            iso_code=resolved.iso_code,
            display_name=resolved.display_name,
            guessed_by_player_id=player.id,
            timestamp=int(action.payload.timestamp or 0),
        )
        new_state = state.with_guess(guess)._copy_with(
            last_guess_outcome=GuessOutcome.CORRECT,
        )
        return self._advance(new_state)

    def _handle_apply_strike(self, state: GameState, action: Action) -> GameState:
        """Strike a player without passing the turn."""
        if not state.is_active:
            return state

        target_id = action.payload.player_id
        if target_id is None:
            current = state.current_player
            if current is None:
                return state
            target_id = current.id

        return self._strike(state, target_id)

    def _handle_eliminate(self, state: GameState, action: Action) -> GameState:
        """Knock a player out regardless of strikes, then pass the turn."""
        player = state.get_player(action.payload.player_id)
        if player is None:
            return state

        new_state = state.with_player(player.eliminate())
        if state.is_active and count_remaining_players(new_state.players) <= 1:
            new_state = new_state._copy_with(phase=GamePhase.FINISHED)
        return self._advance(new_state)

    def _handle_advance_turn(self, state: GameState, action: Action) -> GameState:
        """Skip to the next player."""
        if not state.is_active:
            return state
        return self._advance(state._copy_with(last_guess_outcome=None))

    def _handle_timer_tick(self, state: GameState, action: Action) -> GameState:
        """Count the turn timer down by one second, stopping at zero."""
        if not state.is_active or not state.has_timer:
            return state

        remaining = state.timer_remaining
        if remaining is None:
            remaining = state.timer_seconds
        if remaining <= 0:
            return state
        return state._copy_with(timer_remaining=remaining - 1)

    def _handle_timer_timeout(self, state: GameState, action: Action) -> GameState:
        """
        The current player ran out of time.

        With strikes enabled this costs a strike; either way the turn passes.
        """
        player = state.current_player
        if not state.is_active or player is None:
            return state

        new_state = state._copy_with(last_guess_outcome=None)
        if player.eliminated:
            return self._advance(new_state)
        if state.strikes_enabled:
            new_state = self._strike(new_state, player.id)
        return self._advance(new_state)

    def _handle_reset(self, state: GameState, action: Action) -> GameState:
        return initial_state()

    def _handle_new_game(self, state: GameState, action: Action) -> GameState:
        """
        Play again with the same roster and order.

        New settings, when given, replace the previous round's.
        """
        if not state.players:
            return state

        settings = action.payload.settings
        if settings is not None:
            round_fields = effective_round_settings(settings)
        else:
            round_fields = {
                "strikes_enabled": state.strikes_enabled,
                "max_strikes": state.max_strikes,
                "timer_seconds": state.timer_seconds,
                "timer_remaining": state.timer_seconds,
            }

        return GameState(
            phase=GamePhase.ACTIVE,
            players=tuple(p.fresh() for p in state.players),
            current_player_index=0,
            guessed_countries={},
            **round_fields,
        )

    def _handle_rehydrate(self, state: GameState, action: Action) -> GameState:
        """Replace the state wholesale with a persisted one."""
        restored = action.payload.state
        return restored if restored is not None else state

    # =========================================================================
    # Transition helpers
    # =========================================================================

    def _strike(self, state: GameState, player_id: str) -> GameState:
        """
        Add a strike, eliminating at the threshold.

        Ends the game when the elimination leaves one player or fewer.
        Eliminated players' strikes are frozen.
        """
        player = state.get_player(player_id)
        if player is None or player.eliminated:
            return state

        updated = player.with_strike()
        if (
            state.strikes_enabled
            and state.max_strikes is not None
            and updated.strikes >= state.max_strikes
        ):
            updated = updated.eliminate()

        new_state = state.with_player(updated)
        if updated.eliminated and count_remaining_players(new_state.players) <= 1:
            new_state = new_state._copy_with(phase=GamePhase.FINISHED)
        return new_state

    def _advance(self, state: GameState) -> GameState:
        """Move to the next non-eliminated player and restart the countdown."""
        if not state.is_active:
            return state

        index = next_player_index(state)
        if index < 0:
            index = state.current_player_index

        changes = {"current_player_index": index}
        if state.has_timer:
            changes["timer_remaining"] = state.timer_seconds
        return state._copy_with(**changes)


def apply_action(state: GameState, action: Action) -> GameState:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
