"""Speech service used when no synthesis backend could be built."""

from __future__ import annotations


class SilentSpeechService:
    """Reports itself unavailable so the controller refuses to play."""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason

    def is_available(self) -> bool:
        return False

    async def speak(self, text: str, rate: float) -> bool:
        return False

    def pause(self) -> None:
        pass

    def resume(self) -> None:
        pass

    def cancel(self) -> None:
        pass
