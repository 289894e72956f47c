"""UI-neutral helpers shared by front ends."""
from __future__ import annotations

from typing import Iterable

from ..constants import DRILL_MODE_REVISE, RATE_SPEEDS
from ..domain.entries import Group
from ..domain.session import PlaybackSnapshot

APP_TITLE = "WordWalk"
EMPTY_FIELD = "—"
CONCEAL_CHAR = "•"

COMMAND_HELP = (
    "Commands:\n"
    "  play | pause | resume | stop | restart\n"
    "  next (n) | prev (p)\n"
    "  group <id> | groups\n"
    f"  rate <{'|'.join(RATE_SPEEDS)}>\n"
    "  mode <normal|revise>\n"
    "  status | help | quit\n"
)


def progress_text(snapshot: PlaybackSnapshot) -> str:
    position = min(snapshot.index + 1, snapshot.total)
    return f"Word {position} of {snapshot.total} ({snapshot.progress:.0f}%)"


def progress_bar(snapshot: PlaybackSnapshot, width: int = 20) -> str:
    filled = int(round(width * snapshot.progress / 100.0))
    filled = max(0, min(width, filled))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def playback_status_text(snapshot: PlaybackSnapshot) -> str:
    if snapshot.playing:
        return "Playing"
    if snapshot.paused:
        return "Paused"
    if snapshot.stopped:
        return "Stopped"
    return "Idle"


def conceal(text: str) -> str:
    return CONCEAL_CHAR * max(3, len(text))


def synonym_display(snapshot: PlaybackSnapshot) -> str:
    """Synonym text as shown: concealed in revise mode until it is spoken."""
    entry = snapshot.entry
    if entry is None or not entry.synonym:
        return EMPTY_FIELD
    if snapshot.mode == DRILL_MODE_REVISE and not snapshot.synonym_revealed:
        return conceal(entry.synonym)
    return entry.synonym


def sentence_display(snapshot: PlaybackSnapshot) -> str:
    entry = snapshot.entry
    if snapshot.mode == DRILL_MODE_REVISE:
        return "(hidden in revise mode)"
    if entry is None or not entry.sentence:
        return EMPTY_FIELD
    return entry.sentence


def render_entry_card(snapshot: PlaybackSnapshot) -> str:
    word = snapshot.entry.word if snapshot.entry is not None else EMPTY_FIELD
    header = (
        f"{APP_TITLE} | {snapshot.group_name} | rate={snapshot.rate} "
        f"| mode={snapshot.mode} | {playback_status_text(snapshot)}"
    )
    return "\n".join(
        [
            header,
            f"{progress_bar(snapshot)} {progress_text(snapshot)}",
            f"  Word:     {word}",
            f"  Synonym:  {synonym_display(snapshot)}",
            f"  Sentence: {sentence_display(snapshot)}",
        ]
    )


def group_list_text(groups: Iterable[Group], active_group_id: int | None) -> str:
    lines = []
    for group in groups:
        marker = "*" if group.id == active_group_id else " "
        lines.append(f"{marker} {group.id}: {group.name} ({len(group)} words)")
    return "\n".join(lines)
