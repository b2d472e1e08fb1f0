"""
Character Store

Persists character sheets and keeps each character's history log. Every
save compares the incoming sheet with the one on disk and appends a
history entry describing the differences.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from dcc_character_sheet.config import CHARACTERS_DIRNAME
from dcc_character_sheet.events import PriorStatus, SaveEvent, SaveEventSink, log_save_event
from dcc_character_sheet.exceptions import RecordNotFoundError, RecordParseError
from dcc_character_sheet.history import ChangeDetector, render_history
from dcc_character_sheet.models.character import Character, HistoryEntry
from dcc_character_sheet.storage.base import JsonRecordStore

logger = logging.getLogger(__name__)

DELETED_NOTE = "Character deleted"
RESTORED_NOTE = "Character restored"


class CharacterStore(JsonRecordStore[Character]):
    """
    File-backed character sheets with automatic history.

    The store owns ``history``: whatever history a caller submits is
    replaced by the history on disk plus, when something changed, one new
    entry. Only a character's very first save keeps the submitted history.

    Usage:
        store = CharacterStore(Path("~/dcc-character-sheet").expanduser())
        store.save(character)
        character.current_health -= 3
        store.save(character, note="Goblin ambush")
        print(store.render_history(character.id))
    """

    kind = "character"
    dirname = CHARACTERS_DIRNAME
    model = Character

    def __init__(
        self,
        base_dir: Path,
        indent: int = 2,
        clock: Optional[Callable[[], datetime]] = None,
        detector: Optional[ChangeDetector] = None,
        event_sink: Optional[SaveEventSink] = None,
        rule_width: int = 80,
    ):
        super().__init__(base_dir, indent=indent, clock=clock)
        self.detector = detector or ChangeDetector()
        self.event_sink = event_sink or log_save_event
        self.rule_width = rule_width

    def _load_prior(self, character_id: str) -> tuple[Optional[Character], PriorStatus]:
        """
        Load the saved version of a character, if there is a usable one.

        Any failure means the save proceeds as a first save. A missing file
        is expected; anything else is logged as a warning.
        """
        try:
            return self.get(character_id), PriorStatus.FOUND
        except RecordNotFoundError:
            return None, PriorStatus.MISSING
        except (RecordParseError, OSError) as exc:
            logger.warning(
                "Could not load saved character %s, history will not carry forward: %s",
                character_id, exc,
            )
            return None, PriorStatus.UNREADABLE

    def save(self, character: Character, note: str = "") -> Character:
        """
        Save a complete character sheet, appending to its history.

        Args:
            character: The full sheet to persist
            note: Reason for the change, stored with the history entry.
                Dropped when nothing changed.

        Returns:
            The character exactly as written to disk. The argument itself
            is not modified.

        Raises:
            OSError: The record could not be written
        """
        now = self.clock()
        with self._locked(character.id):
            prior, prior_status = self._load_prior(character.id)

            changes: list[str] = []
            if prior is None:
                record = character.model_copy(deep=True)
            else:
                changes = self.detector.compare(prior, character)
                history = list(prior.history)
                if changes:
                    history.append(HistoryEntry(timestamp=now, changes=changes, note=note))
                record = character.model_copy(update={"history": history}, deep=True)

            self._write(record)

        self.event_sink(SaveEvent(
            character_id=record.id,
            incoming_health=character.current_health,
            note=note,
            prior_status=prior_status,
            prior_health=prior.current_health if prior is not None else None,
            changes=tuple(changes),
            history_length=len(record.history),
            timestamp=now,
        ))
        return record

    def add_history_note(self, character_id: str, note: str) -> Character:
        """
        Append a note-only history entry without comparing anything.

        Raises:
            RecordNotFoundError: The character does not exist
        """
        with self._locked(character_id):
            character = self.get(character_id)
            entry = HistoryEntry(timestamp=self.clock(), changes=[], note=note)
            record = character.model_copy(update={"history": [*character.history, entry]})
            self._write(record)
        logger.info("Added history note to character %s", character_id)
        return record

    def _set_active(self, record_id: str, active: bool) -> Character:
        # The top-level active flag is never diffed, so a bare delete or
        # restore leaves history unchanged and the note is dropped.
        with self._locked(record_id):
            character = self.get(record_id)
            character.is_active = active
            return self.save(character, RESTORED_NOTE if active else DELETED_NOTE)

    # ------------------------------------------------------------------
    # History report
    # ------------------------------------------------------------------

    def history_path(self, character_id: str) -> Path:
        """Where ``export_history`` writes the report for a character."""
        return self.path_for(character_id).with_name(f"{character_id}-history.txt")

    def render_history(self, character_id: str) -> str:
        """Render the saved character's history as plain text."""
        return render_history(self.get(character_id), rule_width=self.rule_width)

    def export_history(self, character_id: str) -> str:
        """Write the history report next to the record and return its text."""
        text = self.render_history(character_id)
        path = self.history_path(character_id)
        path.write_text(text, encoding="utf-8")
        logger.info("Exported history for %s to %s", character_id, path)
        return text
