"""World note storage."""

from dcc_character_sheet.config import WORLD_NOTES_DIRNAME
from dcc_character_sheet.models.world_note import WorldNote
from dcc_character_sheet.storage.base import JsonRecordStore


class WorldNoteStore(JsonRecordStore[WorldNote]):
    """Campaign notes, stored whole."""

    kind = "world note"
    dirname = WORLD_NOTES_DIRNAME
    model = WorldNote
