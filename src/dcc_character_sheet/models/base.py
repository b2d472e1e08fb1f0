"""Shared base model for everything persisted as JSON."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Timestamps written with nanosecond precision; Python keeps microseconds.
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def local_now() -> datetime:
    """Current time as a timezone-aware local datetime."""
    return datetime.now().astimezone()


def trim_fraction(value):
    """Drop sub-microsecond digits from an ISO timestamp string."""
    if isinstance(value, str):
        return _EXTRA_FRACTION.sub(r"\1", value)
    return value


def none_as_empty_list(value):
    """Older sheets store empty collections as null."""
    return [] if value is None else value


class SheetModel(BaseModel):
    """Base class for all stored documents.

    Attributes are snake_case in Python and camelCase on disk.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class SoftDeletable(SheetModel):
    """A stored document with a stable id and a soft-delete flag."""

    id: str
    is_active: bool = False
