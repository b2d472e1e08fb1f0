"""Character sheet models."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from dcc_character_sheet.models.base import (
    SheetModel,
    SoftDeletable,
    none_as_empty_list,
    trim_fraction,
)

ATTRIBUTE_NAMES = ("strength", "agility", "stamina", "personality", "intelligence", "luck")


class Attribute(SheetModel):
    """An ability score: a base value with a temporary modifier layered on top."""

    base: int = 0
    temporary: int = 0


class Saves(SheetModel):
    """Saving throw bonuses."""

    reflex: int = 0
    fortitude: int = 0
    willpower: int = 0


class Equipment(SheetModel):
    """An inventory item."""

    id: str
    name: str = ""
    quantity: int = 0
    weight: float = 0.0
    value: float = 0.0
    category: str = ""
    equipped: bool = False
    ac_bonus: int = 0
    reflex_save: int = 0
    fortitude_save: int = 0
    willpower_save: int = 0
    damage_dice: str = ""  # weapons
    attack_bonus: int = 0  # weapons
    description: str = ""
    is_active: bool = False


class Ability(SheetModel):
    """A character ability, spell or trait."""

    id: str
    name: str = ""
    description: str = ""
    type: str = ""  # spell, ability, trait, etc.
    page_number: str = ""
    is_active: bool = False


class CharacterClass(SheetModel):
    """A class the character has levels in."""

    id: str
    name: str = ""
    level: int = 0
    description: str = ""
    is_active: bool = False


class CharacterTable(SheetModel):
    """A reference to a rulebook table the player wants at hand."""

    id: str
    name: str = ""
    number: str = ""
    dice: str = ""
    is_active: bool = False


class HistoryEntry(SheetModel):
    """One save event in a character's audit log. Never modified once written."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    changes: list[str] = Field(default_factory=list)
    note: str = ""

    @field_validator("timestamp", mode="before")
    @classmethod
    def trim_timestamp(cls, value):
        return trim_fraction(value)

    @field_validator("changes", mode="before")
    @classmethod
    def null_changes(cls, value):
        return none_as_empty_list(value)


class Character(SoftDeletable):
    """
    A complete character sheet.

    Each save replaces the whole document, so callers must always submit
    every field. ``history`` is owned by the store and is rebuilt on save.
    """

    name: str = ""
    occupation: str = ""
    level: int = 0
    class_name: str = Field(default="", alias="class")
    class_description: str = ""
    alignment: int = 0  # 0=Neutral, 1=Lawful, 2=Chaotic
    max_health: int = 0
    current_health: int = 0
    current_experience: int = 0
    experience_needed: int = 0
    armor_class: int = 0
    total_experience: int = 0
    speed: int = 0
    initiative: int = 0

    strength: Attribute = Field(default_factory=Attribute)
    agility: Attribute = Field(default_factory=Attribute)
    stamina: Attribute = Field(default_factory=Attribute)
    personality: Attribute = Field(default_factory=Attribute)
    intelligence: Attribute = Field(default_factory=Attribute)
    luck: Attribute = Field(default_factory=Attribute)
    saves: Saves = Field(default_factory=Saves)

    notes: str = ""
    equipment: list[Equipment] = Field(default_factory=list)
    abilities: list[Ability] = Field(default_factory=list)
    classes: list[CharacterClass] = Field(default_factory=list)
    tables: list[CharacterTable] = Field(default_factory=list)

    action_dice: str = ""
    attack: int = 0
    crit_dice: str = ""
    crit_table: str = ""
    melee_attack_bonus: int = 0
    melee_damage_bonus: int = 0
    missile_attack_bonus: int = 0
    missile_damage_bonus: int = 0

    history: list[HistoryEntry] = Field(default_factory=list)

    @field_validator("equipment", "abilities", "classes", "tables", "history", mode="before")
    @classmethod
    def null_lists(cls, value):
        return none_as_empty_list(value)

    def attribute(self, name: str) -> Attribute:
        """Look up one of the six ability scores by name."""
        if name not in ATTRIBUTE_NAMES:
            raise KeyError(name)
        return getattr(self, name)
