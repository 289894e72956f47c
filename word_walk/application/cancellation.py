"""Generation-counter cancellation scope for asynchronous playback runs.

A ``RunScope`` holds the live run id.  Each run captures a ``RunToken`` when it
starts and re-validates it after every suspension point; once the scope has
advanced, the token is stale and ``check()`` raises ``Superseded``.
"""

from __future__ import annotations

import asyncio

from ..domain.session import SessionState
from .errors import Superseded


class RunScope:
    """Allocates run tokens; the counter lives on the session state."""

    def __init__(self, state: SessionState) -> None:
        self._state = state

    @property
    def live_run_id(self) -> int:
        return self._state.run_id

    def advance(self) -> "RunToken":
        """Invalidate every outstanding token and hand out a fresh live one."""
        self._state.run_id += 1
        return RunToken(self, self._state.run_id)

    def invalidate(self) -> None:
        self._state.run_id += 1


class RunToken:
    __slots__ = ("_scope", "run_id")

    def __init__(self, scope: RunScope, run_id: int) -> None:
        self._scope = scope
        self.run_id = run_id

    def __repr__(self) -> str:
        return f"RunToken(run_id={self.run_id}, live={self.is_live})"

    @property
    def is_live(self) -> bool:
        return self._scope.live_run_id == self.run_id

    def check(self) -> None:
        if not self.is_live:
            raise Superseded(self.run_id, self._scope.live_run_id)

    async def sleep(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)
        else:
            await asyncio.sleep(0)
        self.check()
