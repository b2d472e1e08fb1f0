"""DCC Character Sheet - local JSON storage with character change history."""

__version__ = "0.1.0"
