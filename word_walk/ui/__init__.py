"""User interface layer."""

from .common import (
    APP_TITLE,
    COMMAND_HELP,
    group_list_text,
    playback_status_text,
    progress_text,
    render_entry_card,
    sentence_display,
    synonym_display,
)
from .console_app import ConsoleApp

__all__ = [
    "APP_TITLE",
    "COMMAND_HELP",
    "ConsoleApp",
    "group_list_text",
    "playback_status_text",
    "progress_text",
    "render_entry_card",
    "sentence_display",
    "synonym_display",
]
