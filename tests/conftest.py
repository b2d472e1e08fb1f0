"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from dcc_character_sheet.events import RecordingSink
from dcc_character_sheet.models import Attribute, Character
from dcc_character_sheet.storage import Library


class StepClock:
    """Deterministic clock: each call is one minute after the previous."""

    def __init__(self, start: datetime):
        self.current = start - timedelta(minutes=1)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def clock() -> StepClock:
    return StepClock(datetime(2024, 3, 9, 18, 30, tzinfo=timezone.utc))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def library(tmp_path, clock, sink) -> Library:
    return Library(tmp_path / "data", clock=clock, event_sink=sink)


@pytest.fixture
def make_character():
    """Factory for active characters with sensible stats."""

    def make(**overrides) -> Character:
        fields = dict(
            id="char-zed",
            name="Zed",
            occupation="Gravedigger",
            level=3,
            current_health=12,
            max_health=12,
            total_experience=50,
            is_active=True,
            strength=Attribute(base=14, temporary=0),
            agility=Attribute(base=10, temporary=0),
            stamina=Attribute(base=12, temporary=0),
            personality=Attribute(base=9, temporary=0),
            intelligence=Attribute(base=11, temporary=0),
            luck=Attribute(base=8, temporary=0),
        )
        fields.update(overrides)
        return Character(**fields)

    return make
