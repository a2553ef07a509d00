"""
Country Guess - Turn-based country guessing game engine

Players take turns naming countries. Correct, new guesses reveal the
country on a shared map; wrong or late guesses can cost a strike, and
too many strikes knock a player out. The package provides:
- Country name resolution against a canonical gazetteer
- A pure, deterministic game state machine
- Save/restore of the current game
- A REST API and a terminal client
"""

__version__ = "0.1.0"
