"""Data models for stored documents."""

from dcc_character_sheet.models.base import SheetModel, SoftDeletable, local_now
from dcc_character_sheet.models.character import (
    ATTRIBUTE_NAMES,
    Ability,
    Attribute,
    Character,
    CharacterClass,
    CharacterTable,
    Equipment,
    HistoryEntry,
    Saves,
)
from dcc_character_sheet.models.game_map import GameMap, MapBackground, MapIcon
from dcc_character_sheet.models.party import Party
from dcc_character_sheet.models.world_note import WorldNote

__all__ = [
    "ATTRIBUTE_NAMES",
    "Ability",
    "Attribute",
    "Character",
    "CharacterClass",
    "CharacterTable",
    "Equipment",
    "GameMap",
    "HistoryEntry",
    "MapBackground",
    "MapIcon",
    "Party",
    "Saves",
    "SheetModel",
    "SoftDeletable",
    "WorldNote",
    "local_now",
]
