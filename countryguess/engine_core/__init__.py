"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Holds an immutable GameState
2. Accepts Actions (events)
3. Applies them via the pure reducer
4. Exposes read-only selectors for renderers
"""

from .state import (
    GameState,
    GamePhase,
    GameSettings,
    GuessedCountry,
    GuessOutcome,
    Difficulty,
    Player,
    DEFAULT_SETTINGS,
    initial_state,
)
from .action import Action, ActionType, ActionPayload
from .reducer import Reducer, apply_action
from .turns import (
    count_remaining_players,
    next_player_index,
    is_game_over,
    can_start_game,
    ensure_player_ids,
    effective_round_settings,
)

__all__ = [
    "GameState",
    "GamePhase",
    "GameSettings",
    "GuessedCountry",
    "GuessOutcome",
    "Difficulty",
    "Player",
    "DEFAULT_SETTINGS",
    "initial_state",
    "Action",
    "ActionType",
    "ActionPayload",
    "Reducer",
    "apply_action",
    "count_remaining_players",
    "next_player_index",
    "is_game_over",
    "can_start_game",
    "ensure_player_ids",
    "effective_round_settings",
]
