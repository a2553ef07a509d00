"""
Persisted Game - Save/load of the current game and its settings.

The persistence boundary:
- One fixed key holds {game_state, settings} as JSON
- Writes never raise; a failed save is logged and gameplay goes on
- Reads are validated strictly before anything reaches the reducer:
  wrong types, unknown phases or difficulties, malformed players are
  rejected rather than coerced, and treated as "no saved game"
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..engine_core.state import (
    Difficulty, GamePhase, GameSettings, GameState, GuessedCountry, GuessOutcome, Player,
    TIMER_SECONDS_MIN, TIMER_SECONDS_MAX, MAX_STRIKES_MIN, MAX_STRIKES_MAX,
)
from .blob import BlobStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "country-guesser-game"

_STRICT = ConfigDict(strict=True, extra="forbid")


# =============================================================================
# Records (wire format)
# =============================================================================

class PlayerRecord(BaseModel):
    model_config = _STRICT

    id: str
    name: str
    strikes: int = Field(ge=0)
    eliminated: bool


class GuessedCountryRecord(BaseModel):
    model_config = _STRICT

    iso_code: str
    display_name: str
    guessed_by_player_id: str
    timestamp: int


class GameStateRecord(BaseModel):
    """Structural mirror of GameState."""
    model_config = _STRICT

    phase: Literal["setup", "active", "finished"]
    players: list[PlayerRecord]
    current_player_index: int
    guessed_countries: dict[str, GuessedCountryRecord]
    last_guessed_country_iso: Optional[str] = None
    timer_remaining: Optional[int] = None
    timer_seconds: Optional[int] = None
    strikes_enabled: Optional[bool] = None
    max_strikes: Optional[int] = None
    last_guess_outcome: Optional[Literal["correct", "duplicate", "unknown"]] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> GameStateRecord:
        if self.players and not 0 <= self.current_player_index < len(self.players):
            raise ValueError("current_player_index out of range")
        for key, guess in self.guessed_countries.items():
            if key != guess.iso_code:
                raise ValueError(f"guessed country keyed {key!r} has iso_code {guess.iso_code!r}")
        return self

    @classmethod
    def from_state(cls, state: GameState) -> GameStateRecord:
        return cls(
            phase=GamePhase(state.phase).value,
            players=[
                PlayerRecord(id=p.id, name=p.name, strikes=p.strikes, eliminated=p.eliminated)
                for p in state.players
            ],
            current_player_index=state.current_player_index,
            guessed_countries={
                iso: GuessedCountryRecord(
                    iso_code=g.iso_code,
                    display_name=g.display_name,
                    guessed_by_player_id=g.guessed_by_player_id,
                    timestamp=g.timestamp,
                )
                for iso, g in state.guessed_countries.items()
            },
            last_guessed_country_iso=state.last_guessed_country_iso,
            timer_remaining=state.timer_remaining,
            timer_seconds=state.timer_seconds,
            strikes_enabled=state.strikes_enabled,
            max_strikes=state.max_strikes,
            last_guess_outcome=(
                GuessOutcome(state.last_guess_outcome).value
                if state.last_guess_outcome is not None else None
            ),
        )

    def to_state(self) -> GameState:
        return GameState(
            phase=GamePhase(self.phase),
            players=tuple(
                Player(id=p.id, name=p.name, strikes=p.strikes, eliminated=p.eliminated)
                for p in self.players
            ),
            current_player_index=self.current_player_index,
            guessed_countries={
                iso: GuessedCountry(
                    iso_code=g.iso_code,
                    display_name=g.display_name,
                    guessed_by_player_id=g.guessed_by_player_id,
                    timestamp=g.timestamp,
                )
                for iso, g in self.guessed_countries.items()
            },
            last_guessed_country_iso=self.last_guessed_country_iso,
            timer_remaining=self.timer_remaining,
            timer_seconds=self.timer_seconds,
            strikes_enabled=self.strikes_enabled,
            max_strikes=self.max_strikes,
            last_guess_outcome=(
                GuessOutcome(self.last_guess_outcome)
                if self.last_guess_outcome is not None else None
            ),
        )


class SettingsRecord(BaseModel):
    model_config = _STRICT

    timer_enabled: bool
    timer_seconds: int = Field(ge=TIMER_SECONDS_MIN, le=TIMER_SECONDS_MAX)
    strikes_enabled: bool
    max_strikes: int = Field(ge=MAX_STRIKES_MIN, le=MAX_STRIKES_MAX)
    difficulty: Literal["easy", "medium", "hard"]

    @classmethod
    def from_settings(cls, settings: GameSettings) -> SettingsRecord:
        return cls(
            timer_enabled=settings.timer_enabled,
            timer_seconds=settings.timer_seconds,
            strikes_enabled=settings.strikes_enabled,
            max_strikes=settings.max_strikes,
            difficulty=Difficulty(settings.difficulty).value,
        )

    def to_settings(self) -> GameSettings:
        return GameSettings(
            timer_enabled=self.timer_enabled,
            timer_seconds=self.timer_seconds,
            strikes_enabled=self.strikes_enabled,
            max_strikes=self.max_strikes,
            difficulty=Difficulty(self.difficulty),
        )


class PersistedGameRecord(BaseModel):
    model_config = _STRICT

    game_state: GameStateRecord
    settings: SettingsRecord


@dataclass(frozen=True)
class PersistedGame:
    """A restored game/settings pair."""
    game_state: GameState
    settings: GameSettings


# =============================================================================
# Boundary operations
# =============================================================================

def save_game(store: BlobStore, state: GameState, settings: GameSettings) -> bool:
    """
    Serialize and write the game. Never raises.

    Returns True when the write went through.
    """
    try:
        record = PersistedGameRecord(
            game_state=GameStateRecord.from_state(state),
            settings=SettingsRecord.from_settings(settings),
        )
        store.set(STORAGE_KEY, record.model_dump_json())
        return True
    except Exception as e:
        logger.warning("Could not save game: %s", e)
        return False


def load_game(store: BlobStore) -> PersistedGame | None:
    """
    Read and validate the saved game.

    Returns None when nothing is saved, the store cannot be read,
    or the record does not match the expected structure.
    """
    try:
        raw = store.get(STORAGE_KEY)
    except Exception as e:
        logger.warning("Could not read saved game: %s", e)
        return None

    if raw is None:
        return None

    try:
        record = PersistedGameRecord.model_validate_json(raw)
    except ValidationError as e:
        logger.info("Discarding saved game that failed validation (%d errors)", e.error_count())
        return None

    return PersistedGame(
        game_state=record.game_state.to_state(),
        settings=record.settings.to_settings(),
    )


def clear_game(store: BlobStore) -> None:
    """Remove the saved game. Never raises."""
    try:
        store.delete(STORAGE_KEY)
    except Exception as e:
        logger.warning("Could not clear saved game: %s", e)
