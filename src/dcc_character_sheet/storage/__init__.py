"""
Storage

One JSON file per record, one directory per record kind. Character saves
run through change detection and keep a history log; the other kinds are
stored as-is.
"""

from .base import JsonRecordStore
from .characters import CharacterStore
from .library import Library
from .maps import MapStore
from .parties import PartyStore
from .world_notes import WorldNoteStore

__all__ = [
    "CharacterStore",
    "JsonRecordStore",
    "Library",
    "MapStore",
    "PartyStore",
    "WorldNoteStore",
]
