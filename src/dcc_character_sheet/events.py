"""
Save events.

Every character save reports what it saw and what it wrote through an
injectable sink. The default sink writes a debug log record; tools and
tests can collect events with ``RecordingSink``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PriorStatus(Enum):
    """What the store found on disk before writing a character."""
    FOUND = "found"
    MISSING = "missing"
    UNREADABLE = "unreadable"  # present but corrupt or not readable


@dataclass(frozen=True)
class SaveEvent:
    """Summary of one character save."""
    character_id: str
    incoming_health: int
    note: str
    prior_status: PriorStatus
    prior_health: Optional[int] = None
    changes: tuple[str, ...] = ()
    history_length: int = 0
    timestamp: Optional[datetime] = None

    @property
    def history_added(self) -> bool:
        return self.prior_status is PriorStatus.FOUND and bool(self.changes)


SaveEventSink = Callable[[SaveEvent], None]


def log_save_event(event: SaveEvent) -> None:
    """Default sink: one debug record per save, one more per change."""
    logger.debug(
        "Saved character %s: hp=%d prior=%s prior_hp=%s changes=%d history=%d note=%r",
        event.character_id,
        event.incoming_health,
        event.prior_status.value,
        event.prior_health,
        len(event.changes),
        event.history_length,
        event.note,
    )
    for i, change in enumerate(event.changes):
        logger.debug("  %d: %s", i, change)


@dataclass
class RecordingSink:
    """Keeps every event it receives, in order."""
    events: list[SaveEvent] = field(default_factory=list)

    def __call__(self, event: SaveEvent) -> None:
        self.events.append(event)

    @property
    def last(self) -> Optional[SaveEvent]:
        return self.events[-1] if self.events else None
