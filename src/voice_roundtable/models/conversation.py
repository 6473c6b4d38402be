"""
Conversation Model - Defines the session, its turns and turn-taking settings
"""
from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import uuid

from .persona import Persona, VoiceConfig

HOST_LABEL = "Host"
USER_LABEL = "User"

# Default host voice (ElevenLabs "Sarah")
DEFAULT_HOST_VOICE_ID = "EXAVITQu4vr4xnSDxMaL"

DEFAULT_FALLBACK_TEXT = "That's fascinating! I'd love to hear more details about that experience."


class SpeakerKind(Enum):
    """Who produced a turn"""
    USER = "user"
    HOST = "host"
    PERSONA = "persona"


class ConversationPhase(Enum):
    """Orchestrator state. IDLE and STOPPED are both at rest."""
    IDLE = "idle"
    GREETING = "greeting"
    SCHEDULING = "scheduling"
    GENERATING = "generating"
    SYNTHESIZING = "synthesizing"
    SPEAKING = "speaking"
    STOPPED = "stopped"


@dataclass(frozen=True)
class TurnSnapshot:
    """Immutable view of a turn handed to observers"""
    id: str
    speaker: SpeakerKind
    speaker_label: str
    text: str
    created_at: datetime
    persona_id: Optional[str] = None
    audio_locator: Optional[str] = None
    is_playing: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "speaker": self.speaker.value,
            "speaker_label": self.speaker_label,
            "persona_id": self.persona_id,
            "text": self.text,
            "created_at": self.created_at.isoformat(),
            "audio_locator": self.audio_locator,
            "is_playing": self.is_playing
        }


@dataclass
class Turn:
    """A single utterance in the transcript"""
    speaker: SpeakerKind
    text: str
    persona: Optional[Persona] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=datetime.now)
    audio_locator: Optional[str] = None
    is_playing: bool = False

    def __post_init__(self):
        if (self.speaker is SpeakerKind.PERSONA) != (self.persona is not None):
            raise ValueError("A persona reference is required exactly when speaker is PERSONA")

    @property
    def speaker_label(self) -> str:
        if self.speaker is SpeakerKind.PERSONA:
            return self.persona.name
        if self.speaker is SpeakerKind.HOST:
            return HOST_LABEL
        return USER_LABEL

    def snapshot(self) -> TurnSnapshot:
        return TurnSnapshot(
            id=self.id,
            speaker=self.speaker,
            speaker_label=self.speaker_label,
            text=self.text,
            created_at=self.created_at,
            persona_id=self.persona.id if self.persona else None,
            audio_locator=self.audio_locator,
            is_playing=self.is_playing
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable copy of the session emitted after every mutation"""
    participants: Tuple[Persona, ...]
    turns: Tuple[TurnSnapshot, ...]
    is_active: bool
    generation_epoch: int
    phase: ConversationPhase
    last_speaker_label: Optional[str] = None
    has_pending_turn: bool = False

    @property
    def playing_turns(self) -> Tuple[TurnSnapshot, ...]:
        return tuple(turn for turn in self.turns if turn.is_playing)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participants": [persona.to_dict() for persona in self.participants],
            "turns": [turn.to_dict() for turn in self.turns],
            "is_active": self.is_active,
            "generation_epoch": self.generation_epoch,
            "phase": self.phase.value,
            "last_speaker_label": self.last_speaker_label,
            "has_pending_turn": self.has_pending_turn
        }


@dataclass
class Session:
    """Mutable state of the single active conversation.

    Replaced wholesale on stop; the epoch carries over so results computed
    for the old session can never match the new one.
    """
    participants: Tuple[Persona, ...] = ()
    turns: List[Turn] = field(default_factory=list)
    is_active: bool = False
    last_speaker_label: Optional[str] = None
    generation_epoch: int = 0
    pending_turn: Optional[Any] = None  # cancellable timer handle
    phase: ConversationPhase = ConversationPhase.IDLE

    def add_turn(self, turn: Turn) -> Turn:
        self.turns.append(turn)
        self.last_speaker_label = turn.speaker_label
        return turn

    def find_turn(self, turn_id: str) -> Optional[Turn]:
        for turn in self.turns:
            if turn.id == turn_id:
                return turn
        return None

    def recent_window(self, last_n: int) -> List[Tuple[str, str]]:
        """Get the last N turns as (speaker_label, text) pairs"""
        recent_turns = self.turns[-last_n:] if last_n > 0 else []
        return [(turn.speaker_label, turn.text) for turn in recent_turns]

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            participants=tuple(self.participants),
            turns=tuple(turn.snapshot() for turn in self.turns),
            is_active=self.is_active,
            generation_epoch=self.generation_epoch,
            phase=self.phase,
            last_speaker_label=self.last_speaker_label,
            has_pending_turn=self.pending_turn is not None
        )


@dataclass
class ConversationConfig:
    """Turn-taking and fallback settings"""
    min_turn_delay: float = 3.5
    max_turn_delay: float = 6.0
    host_probability: float = 0.25
    context_window: int = 10
    directive_max_chars: int = 500
    historical_context_max_chars: int = 1000
    user_cooldown: float = 2.0
    generation_timeout: float = 20.0
    synthesis_timeout: float = 30.0
    fallback_text: str = DEFAULT_FALLBACK_TEXT
    enable_sentiment_adjustment: bool = True
    host_voice: VoiceConfig = field(default_factory=lambda: VoiceConfig(DEFAULT_HOST_VOICE_ID, 0.5, 0.75))

    def __post_init__(self):
        if self.min_turn_delay < 0 or self.max_turn_delay < self.min_turn_delay:
            raise ValueError("Turn delay window must satisfy 0 <= min_turn_delay <= max_turn_delay")
        if not 0.0 <= self.host_probability <= 1.0:
            raise ValueError("host_probability must be within [0, 1]")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "min_turn_delay": self.min_turn_delay,
            "max_turn_delay": self.max_turn_delay,
            "host_probability": self.host_probability,
            "context_window": self.context_window,
            "directive_max_chars": self.directive_max_chars,
            "historical_context_max_chars": self.historical_context_max_chars,
            "user_cooldown": self.user_cooldown,
            "generation_timeout": self.generation_timeout,
            "synthesis_timeout": self.synthesis_timeout,
            "fallback_text": self.fallback_text,
            "enable_sentiment_adjustment": self.enable_sentiment_adjustment,
            "host_voice": self.host_voice.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConversationConfig':
        """Create from dictionary"""
        values = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if isinstance(values.get("host_voice"), dict):
            values["host_voice"] = VoiceConfig.from_dict(values["host_voice"])
        return cls(**values)
