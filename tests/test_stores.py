"""Tests for the plain map, party and world note stores."""

import json

import pytest

from dcc_character_sheet.exceptions import RecordNotFoundError
from dcc_character_sheet.models import MapBackground, MapIcon, WorldNote


class TestMapStore:
    """Map creation, clearing and soft delete."""

    def test_create(self, library, clock):
        game_map = library.maps.create("Crypt of the Lich", 30, 20, 40)

        assert game_map.id == f"map-{int(clock.current.timestamp())}"
        stored = library.maps.get(game_map.id)
        assert stored.name == "Crypt of the Lich"
        assert stored.grid_color == "#cccccc"
        assert stored.show_grid is True
        assert stored.is_active is True
        assert stored.strokes == {}
        assert stored.icons == []
        assert stored.background is None

    def test_missing_background_is_omitted_on_disk(self, library):
        game_map = library.maps.create("Crypt", 10, 10, 40)
        data = json.loads(library.maps.path_for(game_map.id).read_text(encoding="utf-8"))
        assert "background" not in data
        assert data["gridWidth"] == 10

    def test_clear_keeps_settings(self, library):
        game_map = library.maps.create("Crypt", 10, 10, 40)
        game_map.strokes = {"attrs": {}, "children": [{"className": "Line"}]}
        game_map.icons = [MapIcon(id="i1", filename="skull.png", x=3, y=4, is_active=True)]
        game_map.background = MapBackground(filename="floor.png", opacity=0.5, scale=1.0)
        library.maps.save(game_map)

        library.maps.clear(game_map.id)

        cleared = library.maps.get(game_map.id)
        assert cleared.strokes == {}
        assert cleared.icons == []
        assert cleared.name == "Crypt"
        assert cleared.background.filename == "floor.png"

    def test_soft_delete(self, library):
        game_map = library.maps.create("Crypt", 10, 10, 40)

        library.maps.delete(game_map.id)
        assert library.maps.list_records() == []
        assert [m.id for m in library.maps.list_deleted()] == [game_map.id]

        library.maps.restore(game_map.id)
        assert [m.id for m in library.maps.list_records()] == [game_map.id]

    def test_clear_missing(self, library):
        with pytest.raises(RecordNotFoundError):
            library.maps.clear("map-0")


class TestPartyStore:
    """Party rosters."""

    def test_create(self, library, clock):
        party = library.parties.create("The Doomed", "Funnel survivors", ["char-zed"])

        stored = library.parties.get(party.id)
        assert party.id.startswith("party-")
        assert stored.character_ids == ["char-zed"]
        assert stored.is_active is True
        assert stored.created_at == stored.updated_at == clock.current

    def test_save_refreshes_updated_at(self, library, clock):
        party = library.parties.create("The Doomed")
        created = party.created_at

        party.description = "Now with a wizard"
        library.parties.save(party)

        stored = library.parties.get(party.id)
        assert stored.created_at == created
        assert stored.updated_at == clock.current
        assert stored.updated_at > created

    def test_members_skip_missing_characters(self, library, make_character):
        library.characters.save(make_character(id="char-zed", name="Zed"))
        library.characters.save(make_character(id="char-ana", name="Ana"))
        party = library.parties.create("The Doomed", "", ["char-ana", "char-ghost", "char-zed"])

        members = library.parties.members(party.id, library.characters)

        assert [c.name for c in members] == ["Ana", "Zed"]

    def test_members_skip_non_utf8_characters(self, library, make_character):
        library.characters.save(make_character(id="char-zed", name="Zed"))
        library.characters.path_for("char-jose").write_bytes(b'{"id": "char-jose", "name": "Jos\xe9"}')
        party = library.parties.create("The Doomed", "", ["char-jose", "char-zed"])

        assert [c.name for c in library.parties.members(party.id, library.characters)] == ["Zed"]

    def test_soft_delete(self, library):
        party = library.parties.create("The Doomed")
        library.parties.delete(party.id)
        assert library.parties.get(party.id).is_active is False
        library.parties.restore(party.id)
        assert library.parties.get(party.id).is_active is True


class TestWorldNoteStore:
    """World notes are stored whole."""

    def test_save_and_list(self, library):
        note = WorldNote(id="note-1", title="Hirot", content="A village of woodcutters", category="Location", is_active=True)
        library.world_notes.save(note)

        assert library.world_notes.get("note-1") == note
        assert library.world_notes.path_for("note-1").parent.name == "world-notes"

    def test_soft_delete_keeps_content(self, library):
        note = WorldNote(id="note-1", title="Hirot", content="A village", is_active=True)
        library.world_notes.save(note)

        library.world_notes.delete("note-1")

        deleted = library.world_notes.list_deleted()
        assert len(deleted) == 1
        assert deleted[0].content == "A village"
        assert library.world_notes.list_records() == []


class TestLibrary:
    """The combined view over all stores."""

    def test_directories_created(self, library):
        names = sorted(p.name for p in library.base_dir.iterdir())
        assert names == ["character-sheets", "maps", "parties", "world-notes"]

    def test_counts(self, library, make_character):
        library.characters.save(make_character())
        library.characters.save(make_character(id="char-ana", is_active=False))
        library.maps.create("Crypt", 10, 10, 40)

        counts = library.counts()

        assert counts["characters"] == (1, 1)
        assert counts["maps"] == (1, 0)
        assert counts["parties"] == (0, 0)
        assert counts["world notes"] == (0, 0)
