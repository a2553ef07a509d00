"""
Storage Module - Durable save/load of the current game.

The only persistence in the system is one record holding the
current game state and the settings it was started with. Any
failure here degrades to "no saved game"; it never interrupts play.
"""

from .blob import BlobStore, MemoryBlobStore, FileBlobStore
from .persisted import (
    STORAGE_KEY,
    PersistedGame,
    PersistedGameRecord,
    GameStateRecord,
    SettingsRecord,
    save_game,
    load_game,
    clear_game,
)

__all__ = [
    "BlobStore",
    "MemoryBlobStore",
    "FileBlobStore",
    "STORAGE_KEY",
    "PersistedGame",
    "PersistedGameRecord",
    "GameStateRecord",
    "SettingsRecord",
    "save_game",
    "load_game",
    "clear_game",
]
