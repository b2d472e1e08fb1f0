"""
Character History

Change detection between character snapshots and rendering of the
resulting audit log.
"""

from .detector import ChangeDetector, describe_delta
from .report import format_entry, render_history

__all__ = [
    "ChangeDetector",
    "describe_delta",
    "format_entry",
    "render_history",
]
