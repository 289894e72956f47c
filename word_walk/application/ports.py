"""Application-level ports for speech output."""

from __future__ import annotations

from typing import Protocol


class SpeechService(Protocol):
    """Port for speaking one utterance at a time.

    ``speak`` resolves exactly once: ``True`` when the text was spoken,
    ``False`` when it failed or was cancelled.  It may also raise
    ``UtteranceFailed``.  ``cancel`` aborts the current utterance, resolves
    it as failed and drops any pending pause.
    """

    def is_available(self) -> bool: ...

    async def speak(self, text: str, rate: float) -> bool: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def cancel(self) -> None: ...
