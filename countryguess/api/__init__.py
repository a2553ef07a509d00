"""
API Module - Browser client interface.

Exposes the engine via REST API. The client:
1. Starts a game with a roster and settings
2. Submits guesses and skips for the current player
3. Drives (or receives) the turn timer
4. Re-renders from the returned game state

One game per process; the game survives restarts through the
storage module.
"""

from .schemas import (
    # Requests
    StartGameRequest,
    GuessRequest,
    StrikeRequest,
    EliminateRequest,
    NewGameRequest,
    # Responses
    GameStateResponse,
    EventResponse,
    ResolveResponse,
    CountryListResponse,
    ErrorResponse,
    ErrorCode,
    # Shared
    SettingsModel,
    PlayerInfo,
    GuessedCountryInfo,
    CountryInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "StartGameRequest",
    "GuessRequest",
    "StrikeRequest",
    "EliminateRequest",
    "NewGameRequest",
    # Responses
    "GameStateResponse",
    "EventResponse",
    "ResolveResponse",
    "CountryListResponse",
    "ErrorResponse",
    "ErrorCode",
    # Shared
    "SettingsModel",
    "PlayerInfo",
    "GuessedCountryInfo",
    "CountryInfo",
    # Service
    "APIService",
    "create_app",
]
