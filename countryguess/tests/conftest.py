"""
Pytest fixtures for Country Guess tests.
"""

import pytest

from ..engine_core.state import GameSettings, GameState, Difficulty
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..session import GameStore
from ..storage import MemoryBlobStore


@pytest.fixture
def reducer() -> Reducer:
    return Reducer()


@pytest.fixture
def plain_settings() -> GameSettings:
    """No timer, no strikes."""
    return GameSettings()


@pytest.fixture
def strict_settings() -> GameSettings:
    """Timer on at 30s, two strikes allowed."""
    return GameSettings(
        timer_enabled=True,
        timer_seconds=30,
        strikes_enabled=True,
        max_strikes=2,
        difficulty=Difficulty.MEDIUM,
    )


@pytest.fixture
def two_player_game(reducer, plain_settings) -> GameState:
    """Active game for Ann and Bo, Ann to move."""
    return reducer.apply(GameState(), Action.start_game(plain_settings, ["Ann", "Bo"]))


@pytest.fixture
def three_player_game(reducer, strict_settings) -> GameState:
    """Active timed game with strikes for Ann, Bo and Cy."""
    return reducer.apply(
        GameState(), Action.start_game(strict_settings, ["Ann", "Bo", "Cy"])
    )


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def store(blob_store) -> GameStore:
    return GameStore(blob_store)
