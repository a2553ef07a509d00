"""
FastAPI Application - REST API for a browser client.

Endpoints:
    GET    /api/v1/game                 Current game state
    POST   /api/v1/game/start           Start a game
    POST   /api/v1/game/guess           Submit a guess for the current player
    POST   /api/v1/game/skip            Skip the current player's turn
    POST   /api/v1/game/strike          Strike a player
    POST   /api/v1/game/eliminate       Eliminate a player
    POST   /api/v1/game/timer/tick      Count the turn timer down
    POST   /api/v1/game/timer/timeout   The current player ran out of time
    POST   /api/v1/game/new             Play again with the same roster
    DELETE /api/v1/game                 Discard the game
    GET    /api/v1/settings             Stored settings
    PUT    /api/v1/settings             Replace stored settings
    GET    /api/v1/countries            Gazetteer listing
    GET    /api/v1/countries/resolve    Resolve free text to a country
    GET    /api/v1/countries/{iso}      Look up one country

One game per process. The game is restored from disk at startup and
saved after every accepted event.

All responses are JSON with explicit Pydantic schemas.
"""

from contextlib import asynccontextmanager
from typing import Annotated, Union
import logging

from .. import __version__
from ..config import EnvironmentSettings

logger = logging.getLogger(__name__)


def create_app(service=None, env: EnvironmentSettings | None = None, run_timer: bool = False):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates one backed by
            files under the configured data directory if not provided)
        env: Environment settings (read from the environment if not provided)
        run_timer: Drive the turn timer from the server instead of the client

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, Query
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .service import APIService
    from .schemas import (
        # Request models
        StartGameRequest,
        GuessRequest,
        StrikeRequest,
        EliminateRequest,
        NewGameRequest,
        # Response models
        GameStateResponse,
        EventResponse,
        ResolveResponse,
        CountryListResponse,
        ErrorResponse,
        HealthResponse,
        # Shared
        SettingsModel,
        CountryInfo,
    )
    from ..session import GameStore, TurnTimer
    from ..storage import FileBlobStore

    env = env or EnvironmentSettings.from_env()

    if service is None:
        store = GameStore(FileBlobStore(env.data_dir))
        store.hydrate()
        service = APIService(store=store)

    timer = TurnTimer(service.store) if run_timer else None

    @asynccontextmanager
    async def lifespan(app):
        if timer:
            timer.start()
        logger.info("Country guess API ready (env=%s)", env.env)
        yield
        if timer:
            timer.stop()

    app = FastAPI(
        title="Country Guess API",
        description="""
Turn-based country guessing game.

## Events

Every `POST` under `/api/v1/game` dispatches one event and returns
the resulting game. Events that do not apply (a guess after the game
ended, a strike for an unknown player) are not errors: the response
carries `accepted: false` and the unchanged game.

## Timer

Clients call `/timer/tick` once per second while `timer_remaining > 0`,
then `/timer/timeout` once when it reaches zero.
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=env.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse, status_code: int = 400) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/game",
        response_model=GameStateResponse,
        tags=["Game"],
        summary="Get the current game",
    )
    async def get_game() -> GameStateResponse:
        return service.get_game()

    @app.post(
        "/api/v1/game/start",
        response_model=EventResponse,
        tags=["Game"],
        summary="Start a game",
    )
    async def start_game(request: StartGameRequest) -> EventResponse:
        """
        Start a game with the given players, in turn order.

        Players with blank names are dropped; with nobody left the
        request is not accepted.
        """
        return service.start_game(request)

    @app.post(
        "/api/v1/game/guess",
        response_model=EventResponse,
        tags=["Game"],
        summary="Submit a guess",
    )
    async def submit_guess(request: GuessRequest) -> EventResponse:
        """
        Submit a guess for the current player.

        The turn always passes afterwards. Check `game.last_guess_outcome`
        to see how the guess was judged.
        """
        return service.submit_guess(request)

    @app.post("/api/v1/game/skip", response_model=EventResponse, tags=["Game"], summary="Skip turn")
    async def skip_turn() -> EventResponse:
        return service.skip_turn()

    @app.post(
        "/api/v1/game/strike",
        response_model=EventResponse,
        tags=["Game"],
        summary="Strike a player",
    )
    async def apply_strike(request: StrikeRequest) -> EventResponse:
        return service.apply_strike(request)

    @app.post(
        "/api/v1/game/eliminate",
        response_model=EventResponse,
        tags=["Game"],
        summary="Eliminate a player",
    )
    async def eliminate(request: EliminateRequest) -> EventResponse:
        return service.eliminate(request)

    @app.post("/api/v1/game/timer/tick", response_model=EventResponse, tags=["Timer"])
    async def timer_tick() -> EventResponse:
        return service.timer_tick()

    @app.post("/api/v1/game/timer/timeout", response_model=EventResponse, tags=["Timer"])
    async def timer_timeout() -> EventResponse:
        return service.timer_timeout()

    @app.post(
        "/api/v1/game/new",
        response_model=EventResponse,
        tags=["Game"],
        summary="Play again with the same players",
    )
    async def new_game(request: NewGameRequest) -> EventResponse:
        return service.new_game(request)

    @app.delete(
        "/api/v1/game",
        response_model=EventResponse,
        tags=["Game"],
        summary="Discard the game",
    )
    async def reset_game() -> EventResponse:
        """Back to setup; the saved copy is removed too."""
        return service.reset()

    # =========================================================================
    # Settings Endpoints
    # =========================================================================

    @app.get("/api/v1/settings", response_model=SettingsModel, tags=["Settings"])
    async def get_settings() -> SettingsModel:
        return service.get_game().settings

    @app.put("/api/v1/settings", response_model=SettingsModel, tags=["Settings"])
    async def update_settings(settings: SettingsModel) -> SettingsModel:
        """Replace the settings used for the next game."""
        return service.update_settings(settings)

    # =========================================================================
    # Country Endpoints
    # =========================================================================

    @app.get("/api/v1/countries", response_model=CountryListResponse, tags=["Countries"])
    async def list_countries() -> CountryListResponse:
        return service.list_countries()

    @app.get(
        "/api/v1/countries/resolve",
        response_model=ResolveResponse,
        tags=["Countries"],
        summary="Resolve free text to a country",
    )
    async def resolve_country(
        q: Annotated[str, Query(max_length=200, description="Text to resolve")],
    ) -> ResolveResponse:
        """Unknown text is not an error: `resolved` is false."""
        return service.resolve_country(q)

    @app.get(
        "/api/v1/countries/{iso_code}",
        response_model=CountryInfo,
        responses={404: {"model": ErrorResponse}},
        tags=["Countries"],
    )
    async def get_country(iso_code: str) -> Union[CountryInfo, JSONResponse]:
        result = service.get_country(iso_code)
        if isinstance(result, ErrorResponse):
            return make_error_response(result, status_code=404)
        return result

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="countryguess",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Country Guess API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
