"""
Provider implementations for the roundtable
"""
from .base import (
    GenerationRequest,
    ResponseGenerator,
    SpeechSynthesizer,
    AudioPlayer,
    AudioStorage
)

# Storage Providers
from .storage.local import LocalAudioStorage

# Playback
from .playback.null import NullAudioPlayer

__all__ = [
    # Base classes
    "GenerationRequest",
    "ResponseGenerator",
    "SpeechSynthesizer",
    "AudioPlayer",
    "AudioStorage",

    # Implementations
    "LocalAudioStorage",
    "NullAudioPlayer",
]
