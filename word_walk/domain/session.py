"""Session state and the observable snapshot derived from it."""
from __future__ import annotations

from dataclasses import dataclass

from ..constants import DEFAULT_RATE, DRILL_MODE_NORMAL, DRILL_MODES, RATE_SPEEDS
from .entries import WordEntry


def normalize_rate_label(value: str) -> str:
    label = str(value or "").strip().lower()
    if label not in RATE_SPEEDS:
        raise ValueError(
            f"Unknown rate: {value!r}. Expected one of: {', '.join(RATE_SPEEDS)}"
        )
    return label


def rate_speed(label: str) -> float:
    return RATE_SPEEDS[normalize_rate_label(label)]


def normalize_drill_mode(value: str) -> str:
    mode = str(value or "").strip().lower()
    if mode not in DRILL_MODES:
        raise ValueError(
            f"Unknown mode: {value!r}. Expected one of: {', '.join(DRILL_MODES)}"
        )
    return mode


@dataclass(slots=True)
class SessionState:
    """Mutable "where we are" state, owned by the playback controller."""

    group_id: int | None = None
    rate: str = DEFAULT_RATE
    mode: str = DRILL_MODE_NORMAL
    index: int = 0
    playing: bool = False
    paused: bool = False
    stopped: bool = False
    run_id: int = 0
    synonym_revealed: bool = False

    def reset_flags(self) -> None:
        self.playing = False
        self.paused = False
        self.synonym_revealed = False


@dataclass(frozen=True)
class PlaybackSnapshot:
    group_id: int | None
    group_name: str
    index: int
    total: int
    entry: WordEntry | None
    playing: bool
    paused: bool
    stopped: bool
    mode: str
    rate: str
    run_id: int
    synonym_revealed: bool

    @property
    def progress(self) -> float:
        """Percentage of the group reached, counting the current entry."""
        if self.total <= 0:
            return 0.0
        return (self.index + 1) / self.total * 100.0
