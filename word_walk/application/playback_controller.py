"""Playback session controller: sequences spoken entries one run at a time."""
from __future__ import annotations

import asyncio
import logging

from ..config import PlaybackTimings
from ..constants import DEFAULT_RATE, DRILL_MODE_NORMAL, DRILL_MODE_REVISE, SYNONYM_PREFIX
from ..domain.entries import EntryCatalog, Group, WordEntry
from ..domain.session import (
    PlaybackSnapshot,
    SessionState,
    normalize_drill_mode,
    normalize_rate_label,
    rate_speed,
)
from .cancellation import RunScope, RunToken
from .errors import Superseded, UnsupportedCapability, UtteranceFailed
from .ports import SpeechService
from .ui_hooks import PlaybackHooks

logger = logging.getLogger(__name__)


class PlaybackController:
    """Drives one authoritative traversal of the active group at a time.

    Command methods are synchronous and must be called from the thread running
    the event loop.  Each traversal runs as a task holding a ``RunToken``;
    commands that supersede it advance the ``RunScope`` and the stale task
    abandons itself at its next checkpoint.
    """

    def __init__(
        self,
        catalog: EntryCatalog,
        speech: SpeechService,
        *,
        timings: PlaybackTimings | None = None,
        group_id: int | None = None,
        rate: str = DEFAULT_RATE,
        mode: str = DRILL_MODE_NORMAL,
        hooks: PlaybackHooks | None = None,
        logger_instance=None,
    ) -> None:
        if not len(catalog):
            raise ValueError("Catalog has no groups")
        if group_id is None:
            group_id = catalog.first_group_id
        catalog.get(group_id)
        self.catalog = catalog
        self.speech = speech
        self.timings = timings or PlaybackTimings()
        self.hooks = hooks
        self.logger = logger_instance or logger
        self._state = SessionState(
            group_id=group_id,
            rate=normalize_rate_label(rate),
            mode=normalize_drill_mode(mode),
        )
        self._scope = RunScope(self._state)
        self._tasks: set[asyncio.Task[None]] = set()

    # -- observable state -------------------------------------------------

    @property
    def group(self) -> Group:
        return self.catalog.get(self._state.group_id)

    @property
    def index(self) -> int:
        return self._state.index

    @property
    def run_id(self) -> int:
        return self._state.run_id

    @property
    def is_playing(self) -> bool:
        return self._state.playing

    @property
    def is_paused(self) -> bool:
        return self._state.paused

    @property
    def is_stopped(self) -> bool:
        return self._state.stopped

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def rate(self) -> str:
        return self._state.rate

    def snapshot(self) -> PlaybackSnapshot:
        state = self._state
        group = self.group
        return PlaybackSnapshot(
            group_id=state.group_id,
            group_name=group.name,
            index=state.index,
            total=len(group),
            entry=group.entry_at(state.index),
            playing=state.playing,
            paused=state.paused,
            stopped=state.stopped,
            mode=state.mode,
            rate=state.rate,
            run_id=state.run_id,
            synonym_revealed=state.synonym_revealed,
        )

    def set_hooks(self, hooks: PlaybackHooks | None) -> None:
        self.hooks = hooks

    # -- commands ---------------------------------------------------------

    def play(self) -> None:
        self._require_speech()
        state = self._state
        if state.playing:
            return
        if state.paused:
            self.resume()
            return
        if not self.group.entries:
            self.logger.info("Group %s has no entries; nothing to play", state.group_id)
            return
        self._start_run(state.index)

    def pause(self) -> None:
        state = self._state
        if not state.playing:
            return
        state.paused = True
        state.playing = False
        self.speech.pause()
        self.logger.debug("Paused run %s at index %s", state.run_id, state.index)
        self._notify()

    def resume(self) -> None:
        state = self._state
        if not state.paused:
            return
        state.paused = False
        state.playing = True
        self.speech.resume()
        self.logger.debug("Resumed run %s at index %s", state.run_id, state.index)
        self._notify()

    def stop(self) -> None:
        self._halt()
        self.logger.debug("Stopped at index %s", self._state.index)
        self._notify()

    def restart(self) -> None:
        self._require_speech()
        self._halt()
        self._state.index = 0
        if not self.group.entries:
            self._notify()
            return
        self._start_run(0)

    def seek_next(self) -> None:
        """Step forward; while paused this also ends the suspended run and leaves it idle."""
        self._seek(1)

    def seek_prev(self) -> None:
        """Step back; while paused this also ends the suspended run and leaves it idle."""
        self._seek(-1)

    def set_group(self, group_id: int) -> None:
        self.catalog.get(group_id)
        if group_id == self._state.group_id:
            return
        self._halt()
        self._state.group_id = group_id
        self._state.index = 0
        self.logger.info("Switched to group %s", group_id)
        self._notify()

    def set_rate(self, label: str) -> None:
        rate = normalize_rate_label(label)
        if rate == self._state.rate:
            return
        self._halt()
        self._state.rate = rate
        self._state.index = 0
        self.logger.info("Rate set to %s", rate)
        self._notify()

    def set_mode(self, mode: str) -> None:
        mode = normalize_drill_mode(mode)
        if mode == self._state.mode:
            return
        self._halt()
        self._state.mode = mode
        self._state.index = 0
        self.logger.info("Drill mode set to %s", mode)
        self._notify()

    async def join(self) -> None:
        """Wait until every traversal task started so far has finished."""
        pending = [task for task in self._tasks if not task.done()]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        self.stop()
        await self.join()

    # -- internals --------------------------------------------------------

    def _require_speech(self) -> None:
        if not self.speech.is_available():
            raise UnsupportedCapability("Speech synthesis is not available.")

    def _halt(self) -> None:
        state = self._state
        state.stopped = True
        self._scope.invalidate()
        state.reset_flags()
        self.speech.cancel()

    def _seek(self, step: int) -> None:
        state = self._state
        target = self.group.clamp_index(state.index + step)
        if state.playing:
            self.speech.cancel()
            self._start_run(target)
            return
        if state.paused:
            # The suspended run would otherwise publish its own index on resume.
            self._halt()
        state.index = target
        self._notify()

    def _start_run(self, index: int) -> None:
        loop = asyncio.get_running_loop()
        state = self._state
        token = self._scope.advance()
        state.stopped = False
        state.paused = False
        state.synonym_revealed = False
        state.playing = True
        state.index = self.group.clamp_index(index)
        task = loop.create_task(
            self._traverse(token, self.group, state.index),
            name=f"word-walk-run-{token.run_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_run_done)
        self.logger.debug("Started run %s at index %s", token.run_id, state.index)
        self._notify()

    def _on_run_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        try:
            task.result()
        except Exception:
            self.logger.exception("Playback run failed")

    async def _traverse(self, token: RunToken, group: Group, start_index: int) -> None:
        state = self._state
        speed = rate_speed(state.rate)
        mode = state.mode
        last_index = len(group.entries) - 1
        try:
            for index in range(start_index, last_index + 1):
                token.check()
                self._publish_index(index)
                await self._wait_while_paused(token)
                if state.stopped:
                    break
                await self._speak_entry(token, group.entries[index], mode, speed)
                if state.stopped:
                    break
                if index < last_index:
                    await token.sleep(self.timings.entry_gap)
        except Superseded as exc:
            self.logger.debug("Abandoning run: %s", exc)
        finally:
            if token.is_live:
                state.playing = False
                state.synonym_revealed = False
                self.logger.debug("Run %s finished at index %s", token.run_id, state.index)
                self._notify()

    async def _speak_entry(
        self,
        token: RunToken,
        entry: WordEntry,
        mode: str,
        speed: float,
    ) -> None:
        synonym_text = f"{SYNONYM_PREFIX}{entry.synonym}" if entry.synonym else ""
        await self._utter(token, entry.word, speed)
        if mode == DRILL_MODE_REVISE:
            await token.sleep(self.timings.revise_gap)
            await self._wait_while_paused(token)
            self._set_synonym_revealed(True)
            try:
                await self._utter(token, synonym_text, speed)
            finally:
                if token.is_live:
                    self._set_synonym_revealed(False)
            return
        await token.sleep(self.timings.word_gap)
        await self._utter(token, synonym_text, speed)
        await token.sleep(self.timings.word_gap)
        await self._utter(token, entry.sentence, speed)

    async def _utter(self, token: RunToken, text: str, speed: float) -> None:
        await self._wait_while_paused(token)
        token.check()
        if not text.strip():
            return
        if self.hooks is not None and self.hooks.on_utterance is not None:
            try:
                self.hooks.on_utterance(text)
            except Exception:
                self.logger.exception("Utterance hook failed")
        try:
            completed = await self.speech.speak(text, speed)
        except UtteranceFailed as exc:
            self.logger.warning("Utterance failed; continuing: %s", exc)
            completed = False
        token.check()
        if not completed:
            self.logger.debug("Utterance did not complete: %r", text)

    async def _wait_while_paused(self, token: RunToken) -> None:
        state = self._state
        while state.paused and not state.stopped:
            await token.sleep(self.timings.pause_poll)

    def _publish_index(self, index: int) -> None:
        if self._state.index != index:
            self._state.index = index
            self._notify()

    def _set_synonym_revealed(self, revealed: bool) -> None:
        self._state.synonym_revealed = revealed
        self._notify()

    def _notify(self) -> None:
        if self.hooks is None:
            return
        try:
            self.hooks.on_change(self.snapshot())
        except Exception:
            self.logger.exception("Playback change hook failed")
