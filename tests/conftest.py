"""Shared fixtures: a small catalog and zero-gap playback timings."""

from __future__ import annotations

import pytest

from word_walk.config import PlaybackTimings
from word_walk.domain.entries import EntryCatalog, Group, WordEntry


@pytest.fixture
def catalog() -> EntryCatalog:
    return EntryCatalog(
        [
            Group(
                id=1,
                name="Group 1",
                entries=(
                    WordEntry("ebullient", "exuberant", "She was ebullient after the win."),
                    WordEntry("terse", "concise", "His terse reply ended the talk."),
                ),
            ),
            Group(
                id=2,
                name="Group 2",
                entries=(WordEntry("candid", "frank", "She gave a candid answer."),),
            ),
            Group(id=3, name="Empty", entries=()),
        ]
    )


@pytest.fixture
def timings() -> PlaybackTimings:
    return PlaybackTimings(word_gap=0.0, revise_gap=0.0, entry_gap=0.0, pause_poll=0.001)
