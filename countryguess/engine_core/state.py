"""
Game State - Immutable state container for a guessing game.

Design principles:
- Immutable: every transition returns a new state value
- Serializable: plain fields that map 1:1 onto the persisted record
- Round-scoped fields (timer, strikes) live flat on the state and
  are only meaningful while the game is active
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class GamePhase(str, Enum):
    """High-level game phases."""
    SETUP = "setup"
    ACTIVE = "active"
    FINISHED = "finished"


class Difficulty(str, Enum):
    """Difficulty levels. Hard forces single-strike elimination."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GuessOutcome(str, Enum):
    """How the most recent guess was judged."""
    CORRECT = "correct"
    DUPLICATE = "duplicate"
    UNKNOWN = "unknown"


TIMER_SECONDS_MIN = 5
TIMER_SECONDS_MAX = 300
MAX_STRIKES_MIN = 1
MAX_STRIKES_MAX = 10


@dataclass(frozen=True)
class Player:
    """A player in turn order."""
    id: str
    name: str
    strikes: int = 0
    eliminated: bool = False

    def with_strike(self) -> Player:
        return replace(self, strikes=self.strikes + 1)

    def eliminate(self) -> Player:
        return replace(self, eliminated=True)

    def fresh(self) -> Player:
        """Same identity, no strikes, back in the game."""
        return replace(self, strikes=0, eliminated=False)


@dataclass(frozen=True)
class GuessedCountry:
    """
    A country revealed by a correct guess.

    Created once per country per game and never overwritten.
    """
    iso_code: str
    display_name: str
    guessed_by_player_id: str
    timestamp: int  # ms epoch


@dataclass(frozen=True)
class GameSettings:
    """Options chosen before a game starts."""
    timer_enabled: bool = False
    timer_seconds: int = 60
    strikes_enabled: bool = False
    max_strikes: int = 3
    difficulty: Difficulty = Difficulty.MEDIUM


DEFAULT_SETTINGS = GameSettings()


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    phase: GamePhase = GamePhase.SETUP
    players: tuple[Player, ...] = ()
    current_player_index: int = 0
    guessed_countries: Mapping[str, GuessedCountry] = field(default_factory=dict)
    last_guessed_country_iso: str | None = None

    # Round configuration, set when a game starts
    timer_remaining: int | None = None
    timer_seconds: int | None = None
    strikes_enabled: bool | None = None
    max_strikes: int | None = None

    last_guess_outcome: GuessOutcome | None = None

    def __post_init__(self):
        # Read-only view over a private copy; callers never share the dict
        object.__setattr__(
            self, "guessed_countries", MappingProxyType(dict(self.guessed_countries))
        )

    @property
    def is_active(self) -> bool:
        return self.phase == GamePhase.ACTIVE

    @property
    def has_timer(self) -> bool:
        return self.timer_seconds is not None

    @property
    def current_player(self) -> Player | None:
        """The player whose turn it is, if the index points at one."""
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def with_player(self, player: Player) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.id == player.id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def with_guess(self, guess: GuessedCountry) -> GameState:
        """Return new state with a guessed country added."""
        new_guesses = dict(self.guessed_countries)
        new_guesses[guess.iso_code] = guess
        return self._copy_with(
            guessed_countries=new_guesses,
            last_guessed_country_iso=guess.iso_code,
        )

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


def initial_state() -> GameState:
    """A fresh setup-phase state with no players."""
    return GameState()
