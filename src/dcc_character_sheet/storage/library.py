"""All record stores under one data directory."""

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from dcc_character_sheet.config import Settings
from dcc_character_sheet.events import SaveEventSink
from dcc_character_sheet.storage.characters import CharacterStore
from dcc_character_sheet.storage.maps import MapStore
from dcc_character_sheet.storage.parties import PartyStore
from dcc_character_sheet.storage.world_notes import WorldNoteStore


class Library:
    """
    Opens every store under a single base directory.

    Each kind lives in its own subdirectory and the stores share nothing
    but the clock.
    """

    def __init__(
        self,
        base_dir: Path,
        indent: int = 2,
        rule_width: int = 80,
        clock: Optional[Callable[[], datetime]] = None,
        event_sink: Optional[SaveEventSink] = None,
    ):
        self.base_dir = Path(base_dir)
        self.characters = CharacterStore(
            self.base_dir,
            indent=indent,
            clock=clock,
            event_sink=event_sink,
            rule_width=rule_width,
        )
        self.maps = MapStore(self.base_dir, indent=indent, clock=clock)
        self.parties = PartyStore(self.base_dir, indent=indent, clock=clock)
        self.world_notes = WorldNoteStore(self.base_dir, indent=indent, clock=clock)

    @classmethod
    def from_settings(
        cls, settings: Settings, event_sink: Optional[SaveEventSink] = None
    ) -> "Library":
        return cls(
            settings.data_dir,
            indent=settings.indent,
            rule_width=settings.history_rule_width,
            event_sink=event_sink,
        )

    def counts(self) -> dict[str, tuple[int, int]]:
        """(active, deleted) record counts per kind."""
        stores = {
            "characters": self.characters,
            "maps": self.maps,
            "parties": self.parties,
            "world notes": self.world_notes,
        }
        return {
            name: (len(store.list_records()), len(store.list_deleted()))
            for name, store in stores.items()
        }
