"""Campaign world note model."""

from dcc_character_sheet.models.base import SoftDeletable


class WorldNote(SoftDeletable):
    """A free-form campaign note (NPC, location, quest, ...)."""

    title: str = ""
    content: str = ""
    category: str = ""
