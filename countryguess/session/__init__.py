"""
Session Module - Holds and drives the current game.

A session is the process-side driver around the pure reducer:
- GameStore keeps the one current state, serializes events and
  saves after each accepted transition
- TurnTimer turns wall-clock seconds into timer events
"""

from .store import GameStore
from .timer import TurnTimer, TimerEvent

__all__ = [
    "GameStore",
    "TurnTimer",
    "TimerEvent",
]
