"""
Audio player implementations

SoundDevicePlayer lives in .device and is imported on demand, since it
needs PortAudio at import time.
"""

from .null import NullAudioPlayer

__all__ = [
    "NullAudioPlayer",
]
