"""
Turn helpers - Pure routines for rotation and player bookkeeping.

Used by the reducer; safe to call from clients for previews.
"""

from __future__ import annotations

from .state import (
    GamePhase, GameSettings, GameState, Player, Difficulty,
    TIMER_SECONDS_MIN, TIMER_SECONDS_MAX, MAX_STRIKES_MIN, MAX_STRIKES_MAX,
)


def count_remaining_players(players) -> int:
    """Number of players that are not eliminated."""
    return sum(1 for p in players if not p.eliminated)


def next_player_index(state: GameState) -> int:
    """
    Index of the next non-eliminated player after the current one, wrapping.

    Returns -1 with no players, and the current index when at most
    one player remains.
    """
    players = state.players
    if not players:
        return -1
    if count_remaining_players(players) <= 1:
        return state.current_player_index

    n = len(players)
    nxt = (state.current_player_index + 1) % n
    for _ in range(n):
        if not players[nxt].eliminated:
            return nxt
        nxt = (nxt + 1) % n
    return state.current_player_index


def is_game_over(state: GameState) -> bool:
    """Whether the game is over (finished, or at most one player left)."""
    if state.phase == GamePhase.FINISHED:
        return True
    return count_remaining_players(state.players) <= 1


def can_start_game(players) -> bool:
    """At least one player has a non-empty name."""
    return any(isinstance(p.name, str) and p.name.strip() for p in players)


def ensure_player_ids(players) -> tuple[Player, ...]:
    """
    Give every player a usable id.

    Missing, blank or duplicate ids are replaced with "player-<position>".
    """
    seen: set[str] = set()
    result = []
    for i, p in enumerate(players):
        pid = p.id.strip() if isinstance(p.id, str) else ""
        if not pid or pid in seen:
            pid = f"player-{i}"
            while pid in seen:
                pid = f"{pid}-{i}"
        seen.add(pid)
        result.append(Player(id=pid, name=p.name, strikes=p.strikes, eliminated=p.eliminated))
    return tuple(result)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def effective_round_settings(settings: GameSettings) -> dict:
    """
    Round-scoped state fields derived from settings.

    Hard difficulty forces strikes on with a single strike allowed.
    """
    if settings.difficulty == Difficulty.HARD:
        strikes_enabled = True
        max_strikes = 1
    else:
        strikes_enabled = bool(settings.strikes_enabled)
        max_strikes = _clamp(settings.max_strikes, MAX_STRIKES_MIN, MAX_STRIKES_MAX)

    if settings.timer_enabled:
        timer_seconds = _clamp(settings.timer_seconds, TIMER_SECONDS_MIN, TIMER_SECONDS_MAX)
        timer_remaining = timer_seconds
    else:
        timer_seconds = None
        timer_remaining = None

    return {
        "strikes_enabled": strikes_enabled,
        "max_strikes": max_strikes,
        "timer_seconds": timer_seconds,
        "timer_remaining": timer_remaining,
    }
