"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Dispatches them through the GameStore
3. Formats state for the client

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import time

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
from ..engine_core import Action, Player, selectors
from ..engine_core.turns import is_game_over
from ..gazetteer import COUNTRY_ENTRIES, display_name, normalize, resolve
from ..session import GameStore


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


@dataclass
class APIService:
    """
    Main API service for a browser client.

    Usage:
        service = APIService(store=GameStore(FileBlobStore()))

        service.start_game(StartGameRequest(players=[...]))
        response = service.submit_guess(GuessRequest(guess="France"))
        if not response.accepted:
            ...
    """
    store: GameStore = field(default_factory=GameStore)
    clock: Callable[[], int] = field(default=now_ms)

    # =========================================================================
    # Reads
    # =========================================================================

    def get_game(self) -> GameStateResponse:
        """Current state with derived display values."""
        state = self.store.state
        current = selectors.current_player(state)
        winner = selectors.winner(state)

        return GameStateResponse(
            phase=state.phase,
            players=[
                PlayerInfo(
                    id=p.id,
                    name=p.name,
                    strikes=p.strikes,
                    eliminated=p.eliminated,
                    is_current_turn=current is not None and p.id == current.id,
                    countries_found=selectors.country_count_for_player(state, p.id),
                )
                for p in state.players
            ],
            current_player_id=current.id if current else None,
            guessed_countries=[
                GuessedCountryInfo(
                    iso_code=g.iso_code,
                    display_name=g.display_name,
                    guessed_by_player_id=g.guessed_by_player_id,
                    timestamp=g.timestamp,
                )
                for g in selectors.guessed_countries_list(state)
            ],
            guessed_count=selectors.guessed_count(state),
            last_guessed_country_iso=state.last_guessed_country_iso,
            last_guess_outcome=state.last_guess_outcome,
            timer_remaining=state.timer_remaining,
            timer_seconds=state.timer_seconds,
            timer_display=(
                selectors.format_time(state.timer_remaining)
                if state.timer_remaining is not None else None
            ),
            strikes_enabled=state.strikes_enabled,
            max_strikes=state.max_strikes,
            game_over=bool(state.players) and is_game_over(state),
            winner_id=winner.id if winner else None,
            settings=SettingsModel.from_settings(self.store.settings),
        )

    def resolve_country(self, query: str) -> ResolveResponse:
        resolved = resolve(query)
        return ResolveResponse(
            query=query,
            normalized=normalize(query),
            resolved=resolved is not None,
            iso_code=resolved.iso_code if resolved else None,
            display_name=resolved.display_name if resolved else None,
        )

    def list_countries(self) -> CountryListResponse:
        countries = [CountryInfo(iso_code=iso, display_name=name) for iso, name in COUNTRY_ENTRIES]
        return CountryListResponse(countries=countries, count=len(countries))

    def get_country(self, iso_code: str) -> CountryInfo | ErrorResponse:
        code = iso_code.upper()
        name = display_name(code)
        if name is None:
            return ErrorResponse(
                error=f"Unknown country code: {iso_code}",
                error_code=ErrorCode.COUNTRY_NOT_FOUND,
            )
        return CountryInfo(iso_code=code, display_name=name)

    # =========================================================================
    # Events
    # =========================================================================

    def start_game(self, request: StartGameRequest) -> EventResponse:
        """
        Start a game with the given roster.

        Settings sent with the request become the stored settings once
        the game has started; a rejected start leaves them alone.
        """
        settings = (
            request.settings.to_settings() if request.settings is not None
            else self.store.settings
        )
        players = [Player(id=p.id or "", name=p.name) for p in request.players]

        action = Action.start_game(settings, players)
        accepted = self.store.dispatch(action)
        if accepted and request.settings is not None:
            self.store.update_settings(settings)
        return EventResponse(
            event=action.action_type.value, accepted=accepted, game=self.get_game()
        )

    def submit_guess(self, request: GuessRequest) -> EventResponse:
        timestamp = request.timestamp if request.timestamp is not None else self.clock()
        return self._dispatch(Action.submit_guess(request.guess, timestamp))

    def skip_turn(self) -> EventResponse:
        return self._dispatch(Action.advance_turn())

    def apply_strike(self, request: StrikeRequest) -> EventResponse:
        return self._dispatch(Action.apply_strike(request.player_id))

    def eliminate(self, request: EliminateRequest) -> EventResponse:
        return self._dispatch(Action.eliminate(request.player_id))

    def timer_tick(self) -> EventResponse:
        return self._dispatch(Action.timer_tick())

    def timer_timeout(self) -> EventResponse:
        return self._dispatch(Action.timer_timeout())

    def new_game(self, request: NewGameRequest) -> EventResponse:
        """Replay with the same roster, optionally under new settings."""
        settings = request.settings.to_settings() if request.settings is not None else None
        action = Action.new_game(settings)
        accepted = self.store.dispatch(action)
        if accepted and settings is not None:
            self.store.update_settings(settings)
        return EventResponse(
            event=action.action_type.value, accepted=accepted, game=self.get_game()
        )

    def reset(self) -> EventResponse:
        """Discard the game and its saved copy."""
        self.store.clear()
        return EventResponse(event="RESET", accepted=True, game=self.get_game())

    def update_settings(self, settings: SettingsModel) -> SettingsModel:
        self.store.update_settings(settings.to_settings())
        return SettingsModel.from_settings(self.store.settings)

    def _dispatch(self, action: Action) -> EventResponse:
        accepted = self.store.dispatch(action)
        return EventResponse(
            event=action.action_type.value,
            accepted=accepted,
            game=self.get_game(),
        )
