"""
Change Detection

Compares two snapshots of the same character and describes every
difference as a short human-readable line. The lines are stored in the
character's history, so their wording and order are part of the on-disk
format and must stay stable.
"""

from typing import Callable, Optional, Sequence, TypeVar

from dcc_character_sheet.models.character import (
    ATTRIBUTE_NAMES,
    Ability,
    Character,
    CharacterClass,
    Equipment,
)

Item = TypeVar("Item", Equipment, Ability, CharacterClass)


def describe_delta(before: int, after: int) -> str:
    """'increased by N (a → b)' or 'decreased by N (a → b)'."""
    diff = after - before
    direction = "increased" if diff > 0 else "decreased"
    return f"{direction} by {abs(diff)} ({before} → {after})"


class ChangeDetector:
    """
    Produces the ordered list of changes between two character snapshots.

    Categories are always checked in the same order: name, level, health,
    max health, experience, the six attributes, then equipment, abilities
    and classes. Neither snapshot is modified.

    The character's own ``is_active`` flag is deliberately not compared,
    so deleting or restoring a character does not by itself produce a
    change line.

    Usage:
        changes = ChangeDetector().compare(saved, incoming)
    """

    def compare(self, old: Character, new: Character) -> list[str]:
        """Return every difference between ``old`` and ``new``; empty if none."""
        changes: list[str] = []

        if old.name != new.name:
            changes.append(f"Name changed from '{old.name}' to '{new.name}'")

        if old.level != new.level:
            changes.append(f"Level changed from {old.level} to {new.level}")

        if old.current_health != new.current_health:
            changes.append(f"Health {describe_delta(old.current_health, new.current_health)}")

        if old.max_health != new.max_health:
            changes.append(f"Max health changed from {old.max_health} to {new.max_health}")

        if old.total_experience != new.total_experience:
            gained = new.total_experience - old.total_experience
            changes.append(f"Experience gained: {gained} (total: {new.total_experience})")

        for attr_name in ATTRIBUTE_NAMES:
            before = old.attribute(attr_name)
            after = new.attribute(attr_name)
            if before.base != after.base or before.temporary != after.temporary:
                changes.append(
                    f"{attr_name.capitalize()} changed: "
                    f"{before.base}/{before.temporary} → {after.base}/{after.temporary}"
                )

        changes.extend(self.compare_equipment(old.equipment, new.equipment))
        changes.extend(self.compare_abilities(old.abilities, new.abilities))
        changes.extend(self.compare_classes(old.classes, new.classes))

        return changes

    def compare_equipment(self, old: Sequence[Equipment], new: Sequence[Equipment]) -> list[str]:
        """Equipment is tracked by quantity."""

        def quantity_change(before: Equipment, after: Equipment) -> Optional[str]:
            if before.quantity != after.quantity:
                return f"Equipment '{after.name}' quantity: {before.quantity} → {after.quantity}"
            return None

        return self._compare_collection(
            old, new,
            label="Equipment",
            describe_added=lambda item: item.name,
            field_change=quantity_change,
        )

    def compare_abilities(self, old: Sequence[Ability], new: Sequence[Ability]) -> list[str]:
        """Abilities are tracked by name."""

        def rename(before: Ability, after: Ability) -> Optional[str]:
            if before.name != after.name:
                return f"Ability renamed: '{before.name}' → '{after.name}'"
            return None

        return self._compare_collection(
            old, new,
            label="Ability",
            describe_added=lambda item: item.name,
            field_change=rename,
        )

    def compare_classes(
        self, old: Sequence[CharacterClass], new: Sequence[CharacterClass]
    ) -> list[str]:
        """Classes are tracked by name, then by level."""

        def rename_or_level(before: CharacterClass, after: CharacterClass) -> Optional[str]:
            if before.name != after.name:
                return f"Class renamed: '{before.name}' → '{after.name}'"
            if before.level != after.level:
                return f"Class '{after.name}' level {describe_delta(before.level, after.level)}"
            return None

        return self._compare_collection(
            old, new,
            label="Class",
            describe_added=lambda item: f"{item.name} (Level {item.level})",
            field_change=rename_or_level,
        )

    def _compare_collection(
        self,
        old: Sequence[Item],
        new: Sequence[Item],
        label: str,
        describe_added: Callable[[Item], str],
        field_change: Callable[[Item, Item], Optional[str]],
    ) -> list[str]:
        """
        Diff two lists of sub-entities keyed by id.

        Each item in ``new`` yields at most one line, from the first rule
        that applies: added, field change, then active flag flip. Active
        items missing from ``new`` entirely are reported as removed.
        """
        old_by_id = {item.id: item for item in old}
        new_ids = {item.id for item in new}
        changes: list[str] = []

        for item in new:
            previous = old_by_id.get(item.id)
            if previous is None:
                # Items added already inactive are invisible
                if item.is_active:
                    changes.append(f"Added {label.lower()}: {describe_added(item)}")
                continue

            field_message = field_change(previous, item)
            if field_message:
                changes.append(field_message)
            elif previous.is_active != item.is_active:
                verb = "restored" if item.is_active else "removed"
                changes.append(f"{label} {verb}: {item.name}")

        for item in old:
            if item.id not in new_ids and item.is_active:
                changes.append(f"{label} removed: {item.name}")

        return changes
