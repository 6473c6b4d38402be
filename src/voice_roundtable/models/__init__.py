"""
Domain models for the voice roundtable
"""
from .persona import (
    Persona,
    PersonalityTag,
    PersonalityProfile,
    VoiceConfig,
    personality_profile
)
from .conversation import (
    Turn,
    TurnSnapshot,
    Session,
    SessionSnapshot,
    SpeakerKind,
    ConversationPhase,
    ConversationConfig
)
from .sentiment import (
    SentimentClass,
    SentimentResult,
    VoiceParameterAdjustment
)
from .metrics import ConversationMetrics

__all__ = [
    # Persona models
    "Persona",
    "PersonalityTag",
    "PersonalityProfile",
    "VoiceConfig",
    "personality_profile",

    # Conversation models
    "Turn",
    "TurnSnapshot",
    "Session",
    "SessionSnapshot",
    "SpeakerKind",
    "ConversationPhase",
    "ConversationConfig",

    # Sentiment models
    "SentimentClass",
    "SentimentResult",
    "VoiceParameterAdjustment",

    # Metrics
    "ConversationMetrics"
]
