"""
Action System - Events that drive the game state machine.

Actions represent:
1. Player input (start game, guess, skip)
2. Timer events (tick, timeout)
3. Host events (strike, eliminate, reset, new game)
4. Persistence replay (rehydrate)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .state import GameSettings, GameState, Player


class ActionType(str, Enum):
    """Types of actions in the system."""
    START_GAME = "START_GAME"
    SUBMIT_GUESS = "SUBMIT_GUESS"
    APPLY_STRIKE = "APPLY_STRIKE"
    ELIMINATE = "ELIMINATE"
    ADVANCE_TURN = "ADVANCE_TURN"
    TIMER_TICK = "TIMER_TICK"
    TIMER_TIMEOUT = "TIMER_TIMEOUT"
    RESET = "RESET"
    NEW_GAME = "NEW_GAME"
    REHYDRATE = "REHYDRATE"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields; unused fields
    stay None.
    """
    # START_GAME / NEW_GAME
    settings: GameSettings | None = None
    players: tuple[Player, ...] = field(default_factory=tuple)

    # SUBMIT_GUESS
    raw_guess: str | None = None
    timestamp: int | None = None

    # APPLY_STRIKE / ELIMINATE
    player_id: str | None = None

    # REHYDRATE
    state: GameState | None = None


@dataclass(frozen=True)
class Action:
    """A complete event to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def start_game(cls, settings: GameSettings, players) -> Action:
        """
        Factory for starting a game with a settings object and roster.

        Players may be given as Player objects or bare names.
        """
        roster = tuple(
            Player(id="", name=p) if isinstance(p, str) else p
            for p in players
        )
        return cls(
            action_type=ActionType.START_GAME,
            payload=ActionPayload(settings=settings, players=roster),
        )

    @classmethod
    def submit_guess(cls, raw_guess: str, timestamp: int) -> Action:
        return cls(
            action_type=ActionType.SUBMIT_GUESS,
            payload=ActionPayload(raw_guess=raw_guess, timestamp=timestamp),
        )

    @classmethod
    def apply_strike(cls, player_id: str | None = None) -> Action:
        """Strike the given player, or the current one when omitted."""
        return cls(
            action_type=ActionType.APPLY_STRIKE,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def eliminate(cls, player_id: str) -> Action:
        return cls(
            action_type=ActionType.ELIMINATE,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def advance_turn(cls) -> Action:
        return cls(action_type=ActionType.ADVANCE_TURN)

    @classmethod
    def timer_tick(cls) -> Action:
        return cls(action_type=ActionType.TIMER_TICK)

    @classmethod
    def timer_timeout(cls) -> Action:
        return cls(action_type=ActionType.TIMER_TIMEOUT)

    @classmethod
    def reset(cls) -> Action:
        return cls(action_type=ActionType.RESET)

    @classmethod
    def new_game(cls, settings: GameSettings | None = None) -> Action:
        """Factory for replaying with the same roster."""
        return cls(
            action_type=ActionType.NEW_GAME,
            payload=ActionPayload(settings=settings),
        )

    @classmethod
    def rehydrate(cls, state: GameState) -> Action:
        return cls(
            action_type=ActionType.REHYDRATE,
            payload=ActionPayload(state=state),
        )
