"""
Conversation errors

Error hierarchy:
    ConversationError (base)
    ├── EmptyParticipantsError  (fatal to start_conversation)
    ├── GenerationError         (recovered with fallback text)
    ├── SynthesisError          (recovered, turn stays text-only)
    └── PlaybackError           (recovered, is_playing cleared)

Stale results are not errors: they are dropped by the epoch check.
"""
from typing import Any, Dict, Optional


class ConversationError(Exception):
    """Base error for the conversation core"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmptyParticipantsError(ConversationError):
    """Raised when a conversation is started without any personas"""

    def __init__(self, message: str = "No personas available for conversation"):
        super().__init__(message)


class GenerationError(ConversationError):
    """Raised by a ResponseGenerator when no usable text could be produced"""


class SynthesisError(ConversationError):
    """Raised by a SpeechSynthesizer when audio could not be produced"""


class PlaybackError(ConversationError):
    """Raised by an AudioPlayer when a resource could not be played"""
