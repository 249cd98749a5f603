"""Services layer: generative backend, speech and error taxonomy."""

from .errors import (
    SambaError,
    ResolutionError,
    SynthesisError,
    CompositionError,
    ChatError,
    PersistenceError,
    ProviderError,
)
from .ai_service import AIService, AIProvider, AIConfig, create_ai_service
from .speech_service import SpeechService

__all__ = [
    "SambaError",
    "ResolutionError",
    "SynthesisError",
    "CompositionError",
    "ChatError",
    "PersistenceError",
    "ProviderError",
    "AIService",
    "AIProvider",
    "AIConfig",
    "create_ai_service",
    "SpeechService",
]
