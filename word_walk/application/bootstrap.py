"""Application bootstrap assembly for catalog, speech and playback services."""
from __future__ import annotations

from dataclasses import dataclass

from ..config import AppConfig
from ..domain.entries import EntryCatalog
from ..integrations.kokoro_speech import KokoroSpeechService
from ..integrations.model_manager import ModelManager, detect_cuda
from ..integrations.silent_speech import SilentSpeechService
from ..storage.catalog_repository import CatalogRepository
from .playback_controller import PlaybackController
from .ports import SpeechService


@dataclass(frozen=True)
class AppServices:
    catalog: EntryCatalog
    speech_service: SpeechService
    controller: PlaybackController
    model_manager: ModelManager | None = None


def build_speech_service(
    config: AppConfig,
    logger,
) -> tuple[SpeechService, ModelManager | None]:
    """Create the Kokoro speech service, or a silent one when the stack is missing."""
    try:
        cuda_available = detect_cuda()
    except Exception:
        logger.exception("Torch runtime is unavailable; speech output disabled")
        return SilentSpeechService("torch is not installed"), None
    model_manager = ModelManager(
        repo_id=config.repo_id,
        cuda_available=cuda_available,
        logger=logger,
    )
    speech = KokoroSpeechService(
        model_manager,
        logger,
        voice=config.tts_voice,
        use_gpu=config.tts_use_gpu,
        tick_seconds=config.playback_tick_ms / 1000.0,
    )
    logger.info(
        "Speech service ready: voice=%s cuda_available=%s use_gpu=%s",
        config.tts_voice,
        cuda_available,
        config.tts_use_gpu,
    )
    return speech, model_manager


def initialize_app_services(
    config: AppConfig,
    logger,
    *,
    catalog_path: str | None = None,
    group_id: int | None = None,
    rate: str | None = None,
    mode: str | None = None,
    speech_service: SpeechService | None = None,
) -> AppServices:
    catalog = CatalogRepository(catalog_path or config.catalog_path, logger).load()

    model_manager = None
    if speech_service is None:
        speech_service, model_manager = build_speech_service(config, logger)
        if config.tts_prewarm_enabled and speech_service.is_available():
            try:
                speech_service.prewarm()
            except Exception:
                logger.exception("TTS prewarm failed")

    controller = PlaybackController(
        catalog,
        speech_service,
        timings=config.playback_timings(),
        group_id=group_id,
        rate=rate or config.default_rate,
        mode=mode or config.default_mode,
    )
    return AppServices(
        catalog=catalog,
        speech_service=speech_service,
        controller=controller,
        model_manager=model_manager,
    )
