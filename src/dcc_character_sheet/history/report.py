"""Plain-text rendering of a character's history log."""

from dcc_character_sheet.models.character import Character, HistoryEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_entry(entry: HistoryEntry) -> str:
    """Render one history entry, including its trailing blank line."""
    lines = [f"[{entry.timestamp.strftime(TIMESTAMP_FORMAT)}]"]
    lines.extend(f"  - {change}" for change in entry.changes)
    if entry.note:
        lines.append(f"  Note: {entry.note}")
    return "\n".join(lines) + "\n\n"


def render_history(character: Character, rule_width: int = 80) -> str:
    """
    Render the full history report for a character.

    Entries appear in stored order, earliest first.
    """
    header = f"Character History: {character.name}\n" + "=" * rule_width + "\n\n"
    return header + "".join(format_entry(entry) for entry in character.history)
