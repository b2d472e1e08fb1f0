"""
JSON Record Store

One pretty-printed JSON document per record, named ``<id>.json``, in a
directory per record kind. Records are never removed from disk: deleting
clears ``isActive`` and restoring sets it again.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, ClassVar, Generic, Iterator, Optional, TypeVar

from pydantic import ValidationError

from dcc_character_sheet.exceptions import (
    InvalidRecordIdError,
    RecordNotFoundError,
    RecordParseError,
)
from dcc_character_sheet.models.base import SoftDeletable, local_now

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=SoftDeletable)


class JsonRecordStore(Generic[RecordT]):
    """
    File-backed store for one kind of soft-deletable record.

    Subclasses set ``kind``, ``dirname`` and ``model``.

    Saves are a plain read-modify-write. A per-id lock keeps saves of the
    same record from interleaving within this process; nothing protects
    against other processes writing the same directory.
    """

    kind: ClassVar[str] = "record"
    dirname: ClassVar[str] = "records"
    model: ClassVar[type]

    def __init__(
        self,
        base_dir: Path,
        indent: int = 2,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the store, creating its directory if needed.

        Args:
            base_dir: Root data directory shared by all record kinds
            indent: JSON indent used when writing records
            clock: Source of "now" for timestamps (defaults to local time)
        """
        self.directory = Path(base_dir) / self.dirname
        self.directory.mkdir(parents=True, exist_ok=True)
        self.indent = indent
        self.clock = clock or local_now

        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Paths and locking
    # ------------------------------------------------------------------

    def path_for(self, record_id: str) -> Path:
        """Path of the JSON file holding ``record_id``."""
        if not record_id or record_id.startswith(".") or "/" in record_id or "\\" in record_id:
            raise InvalidRecordIdError(f"Invalid {self.kind} id: {record_id!r}")
        return self.directory / f"{record_id}.json"

    def exists(self, record_id: str) -> bool:
        return self.path_for(record_id).is_file()

    @contextmanager
    def _locked(self, record_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(record_id, threading.RLock())
        with lock:
            yield

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _read(self, path: Path) -> RecordT:
        """Read and validate one record file. Encoding errors count as parse errors."""
        raw = path.read_bytes()
        try:
            return self.model.model_validate_json(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise RecordParseError(path, f"not valid UTF-8: {exc}") from exc
        except ValidationError as exc:
            raise RecordParseError(path, str(exc)) from exc

    def get(self, record_id: str) -> RecordT:
        """
        Load one record.

        Raises:
            RecordNotFoundError: No file exists for this id
            RecordParseError: The file is not a valid record
            OSError: Any other filesystem failure
        """
        path = self.path_for(record_id)
        try:
            return self._read(path)
        except FileNotFoundError as exc:
            raise RecordNotFoundError(self.kind, record_id) from exc

    def list_records(self, active_only: bool = True) -> list[RecordT]:
        """
        Load every record whose ``is_active`` equals ``active_only``.

        Unreadable or invalid files are skipped. Order follows directory
        enumeration and is not guaranteed.
        """
        records: list[RecordT] = []
        if not self.directory.is_dir():
            return records

        for path in self.directory.glob("*.json"):
            if not path.is_file():
                continue
            try:
                record = self._read(path)
            except (OSError, RecordParseError) as exc:
                logger.debug("Skipping %s file %s: %s", self.kind, path.name, exc)
                continue
            if record.is_active == active_only:
                records.append(record)

        return records

    def list_deleted(self) -> list[RecordT]:
        """Records that have been soft deleted."""
        return self.list_records(active_only=False)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def _write(self, record: RecordT) -> None:
        """
        Replace the record file with ``record``.

        Written to a temp file first, so a failed write leaves the previous
        version in place. Errors propagate unchanged.
        """
        path = self.path_for(record.id)
        temp_path = path.with_name(path.name + ".tmp")
        try:
            temp_path.write_text(record.to_json(indent=self.indent), encoding="utf-8")
            temp_path.replace(path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %s %s to %s", self.kind, record.id, path)

    def save(self, record: RecordT) -> RecordT:
        """Write the whole record, replacing any previous version."""
        with self._locked(record.id):
            self._write(record)
        return record

    def delete(self, record_id: str) -> RecordT:
        """Soft delete: clear ``is_active`` and save."""
        return self._set_active(record_id, False)

    def restore(self, record_id: str) -> RecordT:
        """Undo a soft delete."""
        return self._set_active(record_id, True)

    def _set_active(self, record_id: str, active: bool) -> RecordT:
        with self._locked(record_id):
            record = self.get(record_id)
            record.is_active = active
            logger.info("%s %s %s", "Restoring" if active else "Deleting", self.kind, record_id)
            return self.save(record)
