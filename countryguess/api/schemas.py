"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a browser client and the engine.
Gameplay never fails at this layer: an event that does not apply comes
back with accepted=false and the unchanged game.

Error Codes:
- COUNTRY_NOT_FOUND: Code is not in the gazetteer
- VALIDATION_ERROR: Request body failed validation
- INTERNAL_ERROR: Unexpected server failure
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.state import (
    Difficulty, GamePhase, GameSettings, GuessOutcome,
    TIMER_SECONDS_MIN, TIMER_SECONDS_MAX, MAX_STRIKES_MIN, MAX_STRIKES_MAX,
)


class ErrorCode(str, Enum):
    """Structured error codes."""
    COUNTRY_NOT_FOUND = "COUNTRY_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class SettingsModel(BaseModel):
    """Game options, as configured before a game starts."""
    timer_enabled: bool = False
    timer_seconds: int = Field(60, ge=TIMER_SECONDS_MIN, le=TIMER_SECONDS_MAX)
    strikes_enabled: bool = False
    max_strikes: int = Field(3, ge=MAX_STRIKES_MIN, le=MAX_STRIKES_MAX)
    difficulty: Difficulty = Difficulty.MEDIUM

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "SettingsModel":
        return cls(
            timer_enabled=settings.timer_enabled,
            timer_seconds=settings.timer_seconds,
            strikes_enabled=settings.strikes_enabled,
            max_strikes=settings.max_strikes,
            difficulty=settings.difficulty,
        )

    def to_settings(self) -> GameSettings:
        return GameSettings(
            timer_enabled=self.timer_enabled,
            timer_seconds=self.timer_seconds,
            strikes_enabled=self.strikes_enabled,
            max_strikes=self.max_strikes,
            difficulty=self.difficulty,
        )


class PlayerInfo(BaseModel):
    """Player information for display."""
    id: str
    name: str
    strikes: int = 0
    eliminated: bool = False
    is_current_turn: bool = False
    countries_found: int = 0


class GuessedCountryInfo(BaseModel):
    """A revealed country."""
    iso_code: str
    display_name: str
    guessed_by_player_id: str
    timestamp: int = Field(description="Milliseconds since the epoch")


class CountryInfo(BaseModel):
    """A gazetteer entry."""
    iso_code: str
    display_name: str


# =============================================================================
# Request Models
# =============================================================================

class PlayerEntry(BaseModel):
    """A roster entry from the setup form."""
    name: str = Field(..., max_length=60)
    id: Optional[str] = Field(None, description="Assigned by position when omitted")


class StartGameRequest(BaseModel):
    """Request to start a game."""
    players: list[PlayerEntry] = Field(..., description="Turn order; blank names are dropped")
    settings: Optional[SettingsModel] = Field(
        None, description="Options for this game; stored settings are used when omitted"
    )


class GuessRequest(BaseModel):
    """A guess for the current player."""
    guess: str = Field(..., max_length=200, description="Free-text country name")
    timestamp: Optional[int] = Field(None, description="Client time in ms; server time when omitted")


class StrikeRequest(BaseModel):
    """Request to strike a player (current player when omitted)."""
    player_id: Optional[str] = None


class EliminateRequest(BaseModel):
    """Request to knock a player out."""
    player_id: str


class NewGameRequest(BaseModel):
    """Play again with the same roster."""
    settings: Optional[SettingsModel] = Field(
        None, description="New options; the previous round's are kept when omitted"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Full game state plus derived display values."""
    phase: GamePhase
    players: list[PlayerInfo]
    current_player_id: Optional[str] = None
    guessed_countries: list[GuessedCountryInfo] = Field(
        default_factory=list, description="Oldest first"
    )
    guessed_count: int = 0
    last_guessed_country_iso: Optional[str] = None
    last_guess_outcome: Optional[GuessOutcome] = None

    # Round configuration
    timer_remaining: Optional[int] = None
    timer_seconds: Optional[int] = None
    timer_display: Optional[str] = Field(None, description="Countdown as m:ss")
    strikes_enabled: Optional[bool] = None
    max_strikes: Optional[int] = None

    game_over: bool = False
    winner_id: Optional[str] = None
    settings: SettingsModel
    api_version: str = "v1"


class EventResponse(BaseModel):
    """Result of dispatching one event."""
    event: str
    accepted: bool = Field(..., description="False when the event did not apply")
    game: GameStateResponse


class ResolveResponse(BaseModel):
    """Result of resolving free text against the gazetteer."""
    query: str
    normalized: str
    resolved: bool
    iso_code: Optional[str] = None
    display_name: Optional[str] = None


class CountryListResponse(BaseModel):
    """The whole gazetteer."""
    countries: list[CountryInfo]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
