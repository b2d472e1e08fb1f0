"""Error types raised by the storage layer."""

from pathlib import Path


class CharacterSheetError(Exception):
    """Base exception for the DCC Character Sheet project."""


class InvalidRecordIdError(CharacterSheetError, ValueError):
    """Raised when a record id cannot be used as a file name."""


class RecordNotFoundError(CharacterSheetError, LookupError):
    """Raised when no record file exists for the requested id."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} '{record_id}' not found")


class RecordParseError(CharacterSheetError, ValueError):
    """Raised when a record file exists but does not hold a valid record."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse {path}: {reason}")
