"""Speech service backed by Kokoro synthesis and sounddevice playback."""

from __future__ import annotations

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..application.errors import UtteranceFailed
from ..constants import DEFAULT_VOICE, SAMPLE_RATE
from .model_manager import ModelManager

try:
    import sounddevice as _sd
except Exception:  # pragma: no cover - PortAudio may be missing at import time
    _sd = None


@dataclass(slots=True)
class _PlaybackCursor:
    """Position tracking for one synthesized utterance."""

    pcm: np.ndarray
    total_frames: int
    current_frame: int = 0
    start_frame: int = 0
    started_at: float = 0.0
    is_playing: bool = False
    is_paused: bool = False
    failed: bool = False


def _to_numpy(audio) -> np.ndarray:
    if hasattr(audio, "detach"):
        audio = audio.detach().cpu()
    return np.asarray(audio, dtype=np.float32).reshape(-1)


class KokoroSpeechService:
    """Speaks one utterance at a time; pause/resume restart from the last frame."""

    def __init__(
        self,
        model_manager: ModelManager,
        logger,
        *,
        voice: str = DEFAULT_VOICE,
        use_gpu: bool = True,
        sample_rate: int = SAMPLE_RATE,
        tick_seconds: float = 0.05,
        sd_module=None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.model_manager = model_manager
        self.logger = logger
        self.voice = voice
        self.use_gpu = use_gpu
        self.sample_rate = int(sample_rate)
        self.tick_seconds = float(tick_seconds)
        self._sd = sd_module if sd_module is not None else _sd
        self._clock = clock
        self._utterance_id = 0
        self._cursor: _PlaybackCursor | None = None
        self._pause_requested = False
        self._cancelled: asyncio.Event | None = None
        self._synth_lock = threading.Lock()

    def is_available(self) -> bool:
        if self._sd is None:
            return False
        try:
            self._sd.query_devices(kind="output")
        except Exception:
            self.logger.debug("No audio output device available", exc_info=True)
            return False
        return True

    def synthesize(self, text: str, speed: float) -> np.ndarray:
        # One inference at a time on the shared model and pipeline.
        with self._synth_lock:
            return self._synthesize(text, speed)

    def _synthesize(self, text: str, speed: float) -> np.ndarray:
        pipeline = self.model_manager.get_pipeline(self.voice)
        pack = self.model_manager.get_voice_pack(self.voice)
        model = self.model_manager.get_model(self.use_gpu)
        chunks: list[np.ndarray] = []
        with self.model_manager.inference_mode():
            for _, ps, _ in pipeline(text, self.voice, speed):
                if not ps:
                    continue
                ref_s = pack[len(ps) - 1]
                chunks.append(_to_numpy(model(ps, ref_s, speed)))
        if not chunks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(chunks)

    def prewarm(self) -> None:
        self.logger.info("Prewarming voice %s", self.voice)
        self.synthesize("Warm up.", 1.0)

    async def speak(self, text: str, rate: float) -> bool:
        self._utterance_id += 1
        utterance_id = self._utterance_id
        self.logger.debug("Speaking (%d chars) at speed %s", len(text), rate)
        cancelled = asyncio.Event()
        self._cancelled = cancelled
        synthesis = asyncio.ensure_future(asyncio.to_thread(self.synthesize, text, rate))
        waiter = asyncio.ensure_future(cancelled.wait())
        try:
            await asyncio.wait({synthesis, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not synthesis.done():
                # The worker thread cannot be interrupted; drop its result.
                synthesis.add_done_callback(self._discard_synthesis)
        if not synthesis.done():
            return False
        if utterance_id != self._utterance_id:
            self._discard_synthesis(synthesis)
            return False
        try:
            pcm = synthesis.result()
        except Exception as exc:
            self.logger.exception("Speech synthesis failed")
            raise UtteranceFailed(f"Synthesis failed for {text!r}") from exc
        if pcm.size == 0:
            raise UtteranceFailed(f"Synthesis produced no audio for {text!r}")

        cursor = _PlaybackCursor(pcm=pcm, total_frames=int(pcm.shape[0]))
        self._cursor = cursor
        try:
            if self._pause_requested:
                cursor.is_paused = True
            else:
                self._start_playback(cursor, 0)
            while True:
                await asyncio.sleep(self.tick_seconds)
                if utterance_id != self._utterance_id:
                    return False
                if cursor.failed:
                    raise UtteranceFailed(f"Playback failed for {text!r}")
                if cursor.is_paused:
                    continue
                if self._current_frame(cursor) >= cursor.total_frames:
                    cursor.is_playing = False
                    return True
        finally:
            if self._cursor is cursor:
                self._cursor = None

    def pause(self) -> None:
        self._pause_requested = True
        cursor = self._cursor
        if cursor is None or not cursor.is_playing:
            return
        cursor.current_frame = self._current_frame(cursor)
        cursor.is_playing = False
        cursor.is_paused = True
        self._stop_stream("Failed to pause sounddevice playback")

    def resume(self) -> None:
        self._pause_requested = False
        cursor = self._cursor
        if cursor is None or not cursor.is_paused:
            return
        try:
            self._start_playback(cursor, cursor.current_frame)
        except UtteranceFailed:
            cursor.failed = True

    def cancel(self) -> None:
        self._utterance_id += 1
        self._pause_requested = False
        if self._cancelled is not None:
            self._cancelled.set()
            self._cancelled = None
        cursor = self._cursor
        self._cursor = None
        if cursor is not None:
            cursor.is_playing = False
            cursor.is_paused = False
        self._stop_stream("Failed to stop sounddevice playback")

    def _discard_synthesis(self, future: asyncio.Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self.logger.debug("Abandoned synthesis failed: %s", exc)

    def _start_playback(self, cursor: _PlaybackCursor, frame: int) -> None:
        frame = int(max(0, min(cursor.total_frames, frame)))
        try:
            self._sd.play(cursor.pcm[frame:], samplerate=self.sample_rate, blocking=False)
        except Exception as exc:
            self.logger.exception("Sounddevice playback failed")
            raise UtteranceFailed("Sounddevice playback failed") from exc
        cursor.start_frame = frame
        cursor.current_frame = frame
        cursor.started_at = self._clock()
        cursor.is_playing = True
        cursor.is_paused = False

    def _current_frame(self, cursor: _PlaybackCursor) -> int:
        if not cursor.is_playing:
            return cursor.current_frame
        elapsed = max(0.0, self._clock() - cursor.started_at)
        frame = cursor.start_frame + int(elapsed * float(self.sample_rate))
        return min(cursor.total_frames, frame)

    def _stop_stream(self, failure_message: str) -> None:
        if self._sd is None:
            return
        try:
            self._sd.stop()
        except Exception:
            self.logger.exception(failure_message)
