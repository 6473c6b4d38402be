"""
Audio storage implementations
"""

from .local import LocalAudioStorage

__all__ = [
    "LocalAudioStorage",
]
