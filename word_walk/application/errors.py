"""Error taxonomy for playback sessions."""

from __future__ import annotations


class PlaybackError(Exception):
    """Base class for playback session errors."""


class UnsupportedCapability(PlaybackError):
    """Speech output is not available in this environment."""


class UtteranceFailed(PlaybackError):
    """A single utterance could not be spoken."""


class Superseded(PlaybackError):
    """A run noticed it is no longer the live one."""

    def __init__(self, run_id: int, live_run_id: int) -> None:
        super().__init__(f"Run {run_id} superseded by run {live_run_id}")
        self.run_id = run_id
        self.live_run_id = live_run_id
