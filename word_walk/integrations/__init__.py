"""Integrations for external services and libraries."""

from .kokoro_speech import KokoroSpeechService
from .model_manager import ModelManager, detect_cuda
from .silent_speech import SilentSpeechService

__all__ = [
    "KokoroSpeechService",
    "ModelManager",
    "SilentSpeechService",
    "detect_cuda",
]
