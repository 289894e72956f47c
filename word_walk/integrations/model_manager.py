"""Model and pipeline management for Kokoro."""
from __future__ import annotations

import threading
from typing import Any, Callable

ModelFactory = Callable[[str], Any]
PipelineFactory = Callable[[str, str], Any]


def _default_model_factory(repo_id: str):
    from kokoro import KModel

    return KModel(repo_id=repo_id)


def _default_pipeline_factory(lang_code: str, repo_id: str):
    from kokoro import KPipeline

    return KPipeline(lang_code=lang_code, repo_id=repo_id, model=False)


def detect_cuda() -> bool:
    import torch

    return bool(torch.cuda.is_available())


class ModelManager:
    """Loads Kokoro models, pipelines and voice packs on demand and caches them."""

    def __init__(
        self,
        repo_id: str,
        cuda_available: bool,
        logger,
        *,
        model_factory: ModelFactory | None = None,
        pipeline_factory: PipelineFactory | None = None,
    ) -> None:
        self.repo_id = repo_id
        self.cuda_available = cuda_available
        self.logger = logger
        self.models: dict[bool, Any] = {}
        self.pipelines: dict[str, Any] = {}
        self.voice_cache: dict[str, object] = {}
        self._model_factory = model_factory or _default_model_factory
        self._pipeline_factory = pipeline_factory or _default_pipeline_factory
        self._model_lock = threading.Lock()
        self._pipeline_lock = threading.Lock()
        self._voice_lock = threading.Lock()
        self.logger.info("Models and pipelines will load on demand")

    def get_model(self, use_gpu: bool):
        use_gpu = bool(use_gpu and self.cuda_available)
        key = use_gpu
        model = self.models.get(key)
        if model is not None:
            return model
        with self._model_lock:
            model = self.models.get(key)
            if model is None:
                device = "cuda" if use_gpu else "cpu"
                self.logger.info("Loading model on %s", device)
                try:
                    model = self._model_factory(self.repo_id).to(device).eval()
                except Exception:
                    self.logger.exception("Failed to load model on %s", device)
                    raise
                self.models[key] = model
                self.logger.info("Model ready on %s", device)
        return model

    def get_pipeline(self, voice: str):
        # Kokoro voices are prefixed with their language code, e.g. "af_heart" -> "a".
        lang_code = voice[0] if voice else "a"
        pipeline = self.pipelines.get(lang_code)
        if pipeline is not None:
            return pipeline
        with self._pipeline_lock:
            pipeline = self.pipelines.get(lang_code)
            if pipeline is None:
                self.logger.info("Initializing pipeline for language code=%s", lang_code)
                try:
                    pipeline = self._pipeline_factory(lang_code, self.repo_id)
                except Exception:
                    self.logger.exception(
                        "Failed to initialize pipeline for language code=%s",
                        lang_code,
                    )
                    raise
                self.pipelines[lang_code] = pipeline
        return pipeline

    def get_voice_pack(self, voice: str):
        pack = self.voice_cache.get(voice)
        if pack is not None:
            return pack
        with self._voice_lock:
            pack = self.voice_cache.get(voice)
            if pack is not None:
                return pack
            pipeline = self.get_pipeline(voice)
            self.logger.debug("Loading voice pack: %s", voice)
            try:
                pack = pipeline.load_voice(voice)
            except Exception:
                self.logger.exception("Failed to load voice pack: %s", voice)
                raise
            self.voice_cache[voice] = pack
            self.logger.debug("Voice pack cached: %s", voice)
        return pack

    def inference_mode(self):
        import torch

        return torch.inference_mode()
