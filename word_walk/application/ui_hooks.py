"""UI notification hooks for the playback controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..domain.session import PlaybackSnapshot


@dataclass(frozen=True)
class PlaybackHooks:
    on_change: Callable[[PlaybackSnapshot], None]
    on_utterance: Optional[Callable[[str], None]] = None
