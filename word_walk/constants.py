"""Shared constants for playback and speech synthesis."""
from __future__ import annotations

SAMPLE_RATE = 24000
DEFAULT_VOICE = "af_heart"
DEFAULT_REPO_ID = "hexgrad/Kokoro-82M"

RATE_SPEEDS = {
    "slow": 0.8,
    "medium": 1.0,
    "fast": 1.25,
    "max": 1.5,
}
DEFAULT_RATE = "medium"

DRILL_MODE_NORMAL = "normal"
DRILL_MODE_REVISE = "revise"
DRILL_MODES = (DRILL_MODE_NORMAL, DRILL_MODE_REVISE)

SYNONYM_PREFIX = "synonym: "

DEFAULT_WORD_GAP_MS = 200
DEFAULT_REVISE_GAP_MS = 1500
DEFAULT_ENTRY_GAP_MS = 1200
DEFAULT_PAUSE_POLL_MS = 100
DEFAULT_PLAYBACK_TICK_MS = 50
