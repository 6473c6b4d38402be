"""
Core services for the voice roundtable
"""
from .orchestrator import ConversationOrchestrator
from .persona_service import PersonaService, load_personas
from .playback import PlaybackSequencer
from .provider_factory import ProviderFactory
from .scheduling import TurnScheduler

__all__ = [
    "ConversationOrchestrator",
    "PersonaService",
    "load_personas",
    "PlaybackSequencer",
    "ProviderFactory",
    "TurnScheduler"
]
