"""Party storage."""

import logging

from dcc_character_sheet.config import PARTIES_DIRNAME
from dcc_character_sheet.exceptions import CharacterSheetError
from dcc_character_sheet.models.character import Character
from dcc_character_sheet.models.party import Party
from dcc_character_sheet.storage.base import JsonRecordStore
from dcc_character_sheet.storage.characters import CharacterStore

logger = logging.getLogger(__name__)


class PartyStore(JsonRecordStore[Party]):
    """Party rosters. ``updated_at`` is refreshed on every save."""

    kind = "party"
    dirname = PARTIES_DIRNAME
    model = Party

    def create(self, name: str, description: str = "", character_ids: list[str] | None = None) -> Party:
        """Create and save an active party."""
        now = self.clock()
        party = Party(
            id=f"party-{int(now.timestamp())}",
            name=name,
            description=description,
            character_ids=list(character_ids or []),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        return super().save(party)

    def save(self, party: Party) -> Party:
        party.updated_at = self.clock()
        return super().save(party)

    def members(self, party_id: str, characters: CharacterStore) -> list[Character]:
        """
        Load the characters listed in a party, in roster order.

        Characters that are missing or unreadable are skipped.
        """
        party = self.get(party_id)
        members: list[Character] = []
        for character_id in party.character_ids:
            try:
                members.append(characters.get(character_id))
            except (CharacterSheetError, OSError) as exc:
                logger.debug("Skipping party member %s: %s", character_id, exc)
        return members
