"""
Selectors - Read-only views derived from GameState.

Renderers and drivers read through these instead of poking at
state fields directly.
"""

from __future__ import annotations

from .state import GamePhase, GameState, GuessedCountry, Player


def current_player(state: GameState) -> Player | None:
    """The player to move, or None outside an active game."""
    if state.phase != GamePhase.ACTIVE or not state.players:
        return None
    return state.current_player


def active_players(state: GameState) -> list[Player]:
    return [p for p in state.players if not p.eliminated]


def eliminated_players(state: GameState) -> list[Player]:
    return [p for p in state.players if p.eliminated]


def guessed_countries_list(state: GameState) -> list[GuessedCountry]:
    """Guessed countries, oldest first."""
    return sorted(state.guessed_countries.values(), key=lambda g: g.timestamp)


def guessed_count(state: GameState) -> int:
    return len(state.guessed_countries)


def country_count_for_player(state: GameState, player_id: str) -> int:
    return sum(
        1 for g in state.guessed_countries.values()
        if g.guessed_by_player_id == player_id
    )


def standings(state: GameState) -> list[tuple[Player, int]]:
    """Players with their country counts, best first; ties keep turn order."""
    counted = [(p, country_count_for_player(state, p.id)) for p in state.players]
    return sorted(counted, key=lambda pc: pc[1], reverse=True)


def winner(state: GameState) -> Player | None:
    """The last player standing in a finished game."""
    if state.phase != GamePhase.FINISHED:
        return None
    remaining = active_players(state)
    return remaining[0] if len(remaining) == 1 else None


def format_time(seconds: int) -> str:
    """Format a countdown as m:ss."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"
