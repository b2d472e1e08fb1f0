"""Tests for the on-disk document format."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from dcc_character_sheet.models import Character, GameMap, HistoryEntry, Party


LEGACY_SHEET = """
{
  "id": "char-1712345678",
  "name": "Brother Hesk",
  "occupation": "Acolyte",
  "level": 1,
  "class": "Cleric",
  "classDescription": "",
  "alignment": 1,
  "maxHealth": 7,
  "currentHealth": 5,
  "totalExperience": 10,
  "isActive": true,
  "strength": {"base": 9, "temporary": 0},
  "luck": {"base": 15, "temporary": -1},
  "saves": {"reflex": 0, "fortitude": 1, "willpower": 2},
  "equipment": null,
  "abilities": null,
  "classes": null,
  "tables": null,
  "history": [
    {
      "timestamp": "2024-04-05T20:14:38.123456789-05:00",
      "changes": null,
      "note": "Survived the funnel"
    }
  ]
}
"""


class TestCharacterFormat:
    """Reading sheets written by earlier versions."""

    def test_null_collections_load_as_empty(self):
        character = Character.model_validate_json(LEGACY_SHEET)
        assert character.equipment == []
        assert character.abilities == []
        assert character.classes == []
        assert character.tables == []
        assert character.history[0].changes == []

    def test_nanosecond_timestamps(self):
        character = Character.model_validate_json(LEGACY_SHEET)
        stamp = character.history[0].timestamp
        assert stamp.microsecond == 123456
        assert stamp.utcoffset() == timedelta(hours=-5)

    def test_missing_fields_use_defaults(self):
        character = Character.model_validate_json(LEGACY_SHEET)
        assert character.agility.base == 0
        assert character.notes == ""
        assert character.speed == 0

    def test_legacy_class_field(self):
        character = Character.model_validate_json(LEGACY_SHEET)
        assert character.class_name == "Cleric"
        assert json.loads(character.to_json())["class"] == "Cleric"

    def test_camel_case_round_trip(self):
        character = Character.model_validate_json(LEGACY_SHEET)
        data = character.to_dict()

        assert data["maxHealth"] == 7
        assert data["saves"]["willpower"] == 2
        assert "max_health" not in data
        assert Character.model_validate(data) == character

    def test_non_ascii_kept(self):
        character = Character(id="c1", name="Æthelric")
        assert "Æthelric" in character.to_json()


class TestHistoryEntry:
    """History entries are immutable."""

    def test_frozen(self):
        entry = HistoryEntry(timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc), changes=["x"])
        with pytest.raises(ValidationError):
            entry.note = "changed"
        assert entry.note == ""


class TestOtherFormats:
    """Maps and parties."""

    def test_map_with_background(self):
        game_map = GameMap.model_validate({
            "id": "map-1",
            "name": "Tower",
            "strokes": {"children": []},
            "icons": None,
            "background": {"filename": "tower.png", "opacity": 0.8, "scale": 2, "offsetX": 5, "offsetY": -5},
            "isActive": True,
        })
        assert game_map.icons == []
        data = game_map.to_dict()
        assert data["background"]["offsetX"] == 5
        assert data["strokes"] == {"children": []}

    def test_party_ids(self):
        party = Party.model_validate({"id": "party-1", "characterIds": None, "createdAt": "2024-01-01T00:00:00Z", "updatedAt": "2024-01-01T00:00:00Z"})
        assert party.character_ids == []
        assert "characterIds" in party.to_dict()
