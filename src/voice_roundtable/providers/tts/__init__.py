"""
TTS Provider implementations
"""

from .elevenlabs import ElevenLabsSpeechSynthesizer

__all__ = [
    "ElevenLabsSpeechSynthesizer",
]
