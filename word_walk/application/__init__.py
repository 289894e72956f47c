"""Application layer orchestration.

``bootstrap`` is imported from its module directly; it depends on the
integrations package, which in turn uses the errors defined here.
"""

from .cancellation import RunScope, RunToken
from .errors import PlaybackError, Superseded, UnsupportedCapability, UtteranceFailed
from .playback_controller import PlaybackController
from .ports import SpeechService
from .ui_hooks import PlaybackHooks

__all__ = [
    "PlaybackController",
    "PlaybackError",
    "PlaybackHooks",
    "RunScope",
    "RunToken",
    "SpeechService",
    "Superseded",
    "UnsupportedCapability",
    "UtteranceFailed",
]
