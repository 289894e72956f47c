"""Domain model for word entries and playback sessions."""

from .entries import EntryCatalog, Group, WordEntry
from .session import (
    PlaybackSnapshot,
    SessionState,
    normalize_drill_mode,
    normalize_rate_label,
    rate_speed,
)

__all__ = [
    "EntryCatalog",
    "Group",
    "PlaybackSnapshot",
    "SessionState",
    "WordEntry",
    "normalize_drill_mode",
    "normalize_rate_label",
    "rate_speed",
]
