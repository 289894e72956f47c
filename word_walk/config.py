"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .constants import (
    DEFAULT_ENTRY_GAP_MS,
    DEFAULT_PAUSE_POLL_MS,
    DEFAULT_PLAYBACK_TICK_MS,
    DEFAULT_RATE,
    DEFAULT_REPO_ID,
    DEFAULT_REVISE_GAP_MS,
    DEFAULT_VOICE,
    DEFAULT_WORD_GAP_MS,
    DRILL_MODE_NORMAL,
    DRILL_MODES,
    RATE_SPEEDS,
)
from .utils import parse_bool_env, parse_choice_env, parse_int_env, resolve_path

BASE_DIR = str(Path(__file__).resolve().parents[1])


@dataclass(frozen=True)
class PlaybackTimings:
    """Pacing used by the playback controller, in seconds."""

    word_gap: float = DEFAULT_WORD_GAP_MS / 1000.0
    revise_gap: float = DEFAULT_REVISE_GAP_MS / 1000.0
    entry_gap: float = DEFAULT_ENTRY_GAP_MS / 1000.0
    pause_poll: float = DEFAULT_PAUSE_POLL_MS / 1000.0


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    catalog_path: str
    repo_id: str
    tts_voice: str
    tts_use_gpu: bool
    tts_prewarm_enabled: bool
    default_rate: str
    default_mode: str
    word_gap_ms: int = DEFAULT_WORD_GAP_MS
    revise_gap_ms: int = DEFAULT_REVISE_GAP_MS
    entry_gap_ms: int = DEFAULT_ENTRY_GAP_MS
    pause_poll_ms: int = DEFAULT_PAUSE_POLL_MS
    playback_tick_ms: int = DEFAULT_PLAYBACK_TICK_MS

    def playback_timings(self) -> PlaybackTimings:
        return PlaybackTimings(
            word_gap=self.word_gap_ms / 1000.0,
            revise_gap=self.revise_gap_ms / 1000.0,
            entry_gap=self.entry_gap_ms / 1000.0,
            pause_poll=self.pause_poll_ms / 1000.0,
        )


def load_config() -> AppConfig:
    base_dir = BASE_DIR
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"word_walk_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    catalog_path = resolve_path(
        os.getenv("WORDWALK_CATALOG_PATH", "data/words.json").strip(),
        base_dir,
    )
    repo_id = os.getenv("KOKORO_REPO_ID", DEFAULT_REPO_ID).strip() or DEFAULT_REPO_ID
    tts_voice = os.getenv("TTS_VOICE", DEFAULT_VOICE).strip() or DEFAULT_VOICE
    tts_use_gpu = parse_bool_env("TTS_USE_GPU", "1")
    tts_prewarm_enabled = parse_bool_env("TTS_PREWARM_ENABLED", "1")
    default_rate = parse_choice_env("DEFAULT_RATE", DEFAULT_RATE, RATE_SPEEDS)
    default_mode = parse_choice_env("DEFAULT_MODE", DRILL_MODE_NORMAL, DRILL_MODES)
    word_gap_ms = parse_int_env(
        "WORD_GAP_MS", DEFAULT_WORD_GAP_MS, min_value=0, max_value=5000
    )
    revise_gap_ms = parse_int_env(
        "REVISE_GAP_MS", DEFAULT_REVISE_GAP_MS, min_value=0, max_value=10000
    )
    entry_gap_ms = parse_int_env(
        "ENTRY_GAP_MS", DEFAULT_ENTRY_GAP_MS, min_value=0, max_value=10000
    )
    pause_poll_ms = parse_int_env(
        "PAUSE_POLL_MS", DEFAULT_PAUSE_POLL_MS, min_value=10, max_value=1000
    )
    playback_tick_ms = parse_int_env(
        "PLAYBACK_TICK_MS", DEFAULT_PLAYBACK_TICK_MS, min_value=5, max_value=500
    )
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        catalog_path=catalog_path,
        repo_id=repo_id,
        tts_voice=tts_voice,
        tts_use_gpu=tts_use_gpu,
        tts_prewarm_enabled=tts_prewarm_enabled,
        default_rate=default_rate,
        default_mode=default_mode,
        word_gap_ms=word_gap_ms,
        revise_gap_ms=revise_gap_ms,
        entry_gap_ms=entry_gap_ms,
        pause_poll_ms=pause_poll_ms,
        playback_tick_ms=playback_tick_ms,
    )
