"""
Voice Roundtable - Spoken multi-party conversations among synthetic personas

Personas, a moderating host and a human user take turns; generated text is
synthesized with per-persona voices whose parameters follow the sentiment of
what is being said.
"""

__version__ = "1.0.0"

# Make key components available at package level
from .models import (
    ConversationConfig,
    ConversationMetrics,
    Persona,
    PersonalityTag,
    SessionSnapshot,
    VoiceConfig
)

from .services import (
    ConversationOrchestrator,
    PersonaService,
    ProviderFactory
)

__all__ = [
    # Models
    "ConversationConfig",
    "ConversationMetrics",
    "Persona",
    "PersonalityTag",
    "SessionSnapshot",
    "VoiceConfig",

    # Services
    "ConversationOrchestrator",
    "PersonaService",
    "ProviderFactory",
]
