"""Party roster model."""

from datetime import datetime

from pydantic import Field, field_validator

from dcc_character_sheet.models.base import (
    SoftDeletable,
    local_now,
    none_as_empty_list,
    trim_fraction,
)


class Party(SoftDeletable):
    """A named group of characters, referenced by id."""

    name: str = ""
    description: str = ""
    character_ids: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=local_now)
    updated_at: datetime = Field(default_factory=local_now)

    @field_validator("character_ids", mode="before")
    @classmethod
    def null_ids(cls, value):
        return none_as_empty_list(value)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def trim_timestamps(cls, value):
        return trim_fraction(value)
