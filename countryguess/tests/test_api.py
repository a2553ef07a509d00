"""
Tests for API layer.

Tests:
- API service methods
- HTTP endpoints via FastAPI's TestClient
- Ignored events are reported, not raised
"""

import pytest

from ..api.schemas import (
    EliminateRequest,
    ErrorCode,
    ErrorResponse,
    GuessRequest,
    NewGameRequest,
    PlayerEntry,
    SettingsModel,
    StartGameRequest,
    StrikeRequest,
)
from ..api.service import APIService
from ..config import EnvironmentSettings
from ..engine_core.state import Difficulty, GamePhase, GuessOutcome
from ..session import GameStore
from ..storage import MemoryBlobStore, load_game


def start_request(*names, **settings) -> StartGameRequest:
    return StartGameRequest(
        players=[PlayerEntry(name=n) for n in names],
        settings=SettingsModel(**settings) if settings else None,
    )


class TestAPIService:

    @pytest.fixture
    def blob_store(self):
        return MemoryBlobStore()

    @pytest.fixture
    def service(self, blob_store):
        """Create a fresh API service with a fixed clock."""
        return APIService(store=GameStore(blob_store), clock=lambda: 1234)

    def test_initial_game(self, service):
        game = service.get_game()
        assert game.phase == GamePhase.SETUP
        assert game.players == []
        assert game.current_player_id is None
        assert game.game_over is False

    def test_start_game(self, service):
        response = service.start_game(start_request("Ann", "Bo"))

        assert response.accepted
        assert response.event == "START_GAME"
        game = response.game
        assert game.phase == GamePhase.ACTIVE
        assert [p.name for p in game.players] == ["Ann", "Bo"]
        assert game.players[0].is_current_turn
        assert game.current_player_id == game.players[0].id

    def test_start_without_names_not_accepted(self, service):
        response = service.start_game(start_request("", "  "))
        assert not response.accepted
        assert response.game.phase == GamePhase.SETUP

    def test_start_with_settings_stores_them(self, service):
        response = service.start_game(
            start_request("Ann", "Bo", timer_enabled=True, timer_seconds=20)
        )
        assert response.game.timer_remaining == 20
        assert response.game.timer_display == "0:20"
        assert response.game.settings.timer_seconds == 20

    def test_rejected_start_keeps_stored_settings(self, service, blob_store):
        response = service.start_game(
            start_request("", "  ", timer_enabled=True, timer_seconds=20)
        )

        assert not response.accepted
        assert response.game.settings == SettingsModel()
        assert service.get_game().settings.timer_enabled is False
        assert load_game(blob_store) is None

    def test_rejected_new_game_keeps_stored_settings(self, service):
        response = service.new_game(NewGameRequest(settings=SettingsModel(difficulty=Difficulty.HARD)))

        assert not response.accepted
        assert response.game.settings.difficulty == Difficulty.MEDIUM

    def test_guess_uses_server_clock(self, service):
        service.start_game(start_request("Ann", "Bo"))
        response = service.submit_guess(GuessRequest(guess="Brazil"))

        game = response.game
        assert response.accepted
        assert game.last_guess_outcome == GuessOutcome.CORRECT
        assert game.last_guessed_country_iso == "BR"
        assert game.guessed_countries[0].timestamp == 1234
        assert game.players[0].countries_found == 1
        assert game.guessed_count == 1

    def test_guess_with_client_timestamp(self, service):
        service.start_game(start_request("Ann", "Bo"))
        game = service.submit_guess(GuessRequest(guess="Canada", timestamp=99)).game
        assert game.guessed_countries[0].timestamp == 99

    def test_guess_before_start_not_accepted(self, service):
        response = service.submit_guess(GuessRequest(guess="France"))
        assert not response.accepted

    def test_skip_strike_eliminate(self, service):
        game = service.start_game(start_request("Ann", "Bo", "Cy", strikes_enabled=True, max_strikes=2)).game
        ann, bo, cy = (p.id for p in game.players)

        game = service.skip_turn().game
        assert game.current_player_id == bo

        game = service.apply_strike(StrikeRequest()).game
        assert game.players[1].strikes == 1

        game = service.apply_strike(StrikeRequest(player_id=cy)).game
        assert game.players[2].strikes == 1

        response = service.eliminate(EliminateRequest(player_id=ann))
        assert response.accepted
        assert response.game.players[0].eliminated

        game = service.eliminate(EliminateRequest(player_id=bo)).game
        assert game.phase == GamePhase.FINISHED
        assert game.game_over
        assert game.winner_id == cy

    def test_timer_endpoints(self, service):
        service.start_game(start_request("Ann", "Bo", timer_enabled=True, timer_seconds=10))

        game = service.timer_tick().game
        assert game.timer_remaining == 9

        response = service.timer_timeout()
        assert response.accepted
        assert response.game.timer_remaining == 10
        assert response.game.current_player_id == response.game.players[1].id

    def test_new_game(self, service):
        service.start_game(start_request("Ann", "Bo"))
        service.submit_guess(GuessRequest(guess="Peru"))

        response = service.new_game(NewGameRequest(settings=SettingsModel(difficulty=Difficulty.HARD)))

        assert response.accepted
        assert response.game.guessed_count == 0
        assert response.game.max_strikes == 1
        assert response.game.settings.difficulty == Difficulty.HARD

    def test_reset_clears_saved_game(self, service, blob_store):
        service.start_game(start_request("Ann", "Bo"))
        assert load_game(blob_store) is not None

        response = service.reset()

        assert response.accepted
        assert response.game.phase == GamePhase.SETUP
        assert load_game(blob_store) is None

    def test_update_settings(self, service):
        result = service.update_settings(SettingsModel(strikes_enabled=True, max_strikes=4))
        assert result.max_strikes == 4
        assert service.get_game().settings.max_strikes == 4

    def test_resolve_country(self, service):
        response = service.resolve_country(" U.S.A. ")
        assert response.resolved
        assert response.normalized == "usa"
        assert response.iso_code == "US"
        assert response.display_name == "United States of America"

        response = service.resolve_country("Narnia")
        assert not response.resolved
        assert response.iso_code is None

    def test_countries(self, service):
        listing = service.list_countries()
        assert listing.count == len(listing.countries)
        assert listing.count > 150

        assert service.get_country("fr").display_name == "France"
        missing = service.get_country("zz")
        assert isinstance(missing, ErrorResponse)
        assert missing.error_code == ErrorCode.COUNTRY_NOT_FOUND


class TestHTTP:

    @pytest.fixture
    def client(self):
        from fastapi.testclient import TestClient
        from ..api.app import create_app

        service = APIService(store=GameStore(), clock=lambda: 42)
        app = create_app(service=service, env=EnvironmentSettings())
        with TestClient(app) as client:
            yield client

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/api/docs"

    def test_game_flow(self, client):
        response = client.post("/api/v1/game/start", json={"players": [{"name": "Ann"}, {"name": "Bo"}]})
        assert response.status_code == 200
        assert response.json()["accepted"] is True

        data = client.post("/api/v1/game/guess", json={"guess": "Japan"}).json()
        assert data["game"]["last_guess_outcome"] == "correct"
        assert data["game"]["guessed_countries"][0]["timestamp"] == 42

        data = client.post("/api/v1/game/guess", json={"guess": "japan"}).json()
        assert data["accepted"] is True
        assert data["game"]["last_guess_outcome"] == "duplicate"

        data = client.post("/api/v1/game/skip").json()
        assert data["game"]["last_guess_outcome"] is None

        game = client.get("/api/v1/game").json()
        assert game["phase"] == "active"
        assert game["guessed_count"] == 1

        data = client.delete("/api/v1/game").json()
        assert data["game"]["phase"] == "setup"

    def test_ignored_event_is_not_an_error(self, client):
        response = client.post("/api/v1/game/timer/tick")
        assert response.status_code == 200
        assert response.json()["accepted"] is False

    def test_eliminate_and_strike(self, client):
        game = client.post(
            "/api/v1/game/start",
            json={"players": [{"name": "Ann", "id": "a"}, {"name": "Bo", "id": "b"}]},
        ).json()["game"]
        assert [p["id"] for p in game["players"]] == ["a", "b"]

        data = client.post("/api/v1/game/strike", json={"player_id": "b"}).json()
        assert data["game"]["players"][1]["strikes"] == 1

        data = client.post("/api/v1/game/eliminate", json={"player_id": "b"}).json()
        assert data["game"]["game_over"] is True
        assert data["game"]["winner_id"] == "a"

        data = client.post("/api/v1/game/new", json={}).json()
        assert data["accepted"] is True
        assert data["game"]["phase"] == "active"

    def test_settings(self, client):
        body = {"timer_enabled": True, "timer_seconds": 30, "strikes_enabled": False,
                "max_strikes": 3, "difficulty": "easy"}
        assert client.put("/api/v1/settings", json=body).json() == body
        assert client.get("/api/v1/settings").json() == body

    def test_settings_validation(self, client):
        response = client.put("/api/v1/settings", json={"timer_seconds": 1})
        assert response.status_code == 422

    def test_countries(self, client):
        data = client.get("/api/v1/countries").json()
        assert data["count"] == len(data["countries"])

        data = client.get("/api/v1/countries/resolve", params={"q": "UK"}).json()
        assert data["iso_code"] == "GB"

        assert client.get("/api/v1/countries/gb").json()["display_name"] == "United Kingdom"

        response = client.get("/api/v1/countries/ZZ")
        assert response.status_code == 404
        assert response.json()["error_code"] == "COUNTRY_NOT_FOUND"
