"""
Persona Model - Synthetic conversation participants and their voices
"""
from typing import Dict, Any, Optional
from dataclasses import dataclass
from enum import Enum
import uuid


class PersonalityTag(str, Enum):
    """Closed set of personalities a persona can have"""
    CHEERFUL = "cheerful"
    ROMANTIC = "romantic"
    UNHINGED = "unhinged"
    SARCASTIC = "sarcastic"
    WISE = "wise"
    MYSTERIOUS = "mysterious"
    AGGRESSIVE = "aggressive"
    GENTLE = "gentle"
    CONFIDENT = "confident"
    PLAYFUL = "playful"
    MELANCHOLIC = "melancholic"
    AUTHORITATIVE = "authoritative"

    @classmethod
    def parse(cls, value: Any) -> 'PersonalityTag':
        """Parse a tag from a string, case-insensitively

        Raises:
            ValueError: If the value is not a known personality
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(tag.value for tag in cls)
            raise ValueError(f"Unknown personality '{value}'. Expected one of: {known}") from None


@dataclass(frozen=True)
class PersonalityProfile:
    """Default voice settings and prompt style for a personality"""
    stability: float
    similarity: float
    description: str
    speaking_style: str


PERSONALITY_PROFILES: Dict[PersonalityTag, PersonalityProfile] = {
    PersonalityTag.CHEERFUL: PersonalityProfile(
        0.75, 0.85,
        "Upbeat, positive, and energetic",
        "Respond in an upbeat, positive, and enthusiastic way",
    ),
    PersonalityTag.ROMANTIC: PersonalityProfile(
        0.80, 0.90,
        "Warm, intimate, and affectionate",
        "Respond in a warm, affectionate, and slightly flirtatious way",
    ),
    PersonalityTag.UNHINGED: PersonalityProfile(
        0.25, 0.70,
        "Wild, unpredictable, and chaotic",
        "Respond in a wild, unpredictable, and slightly chaotic way",
    ),
    PersonalityTag.SARCASTIC: PersonalityProfile(
        0.60, 0.75,
        "Witty, dry, and ironic",
        "Respond with wit, sarcasm, and dry humor",
    ),
    PersonalityTag.WISE: PersonalityProfile(
        0.85, 0.80,
        "Calm, thoughtful, and profound",
        "Respond with thoughtful wisdom and deep insights",
    ),
    PersonalityTag.MYSTERIOUS: PersonalityProfile(
        0.70, 0.75,
        "Enigmatic, intriguing, and secretive",
        "Respond in an enigmatic and intriguing way",
    ),
    PersonalityTag.AGGRESSIVE: PersonalityProfile(
        0.40, 0.65,
        "Bold, forceful, and intense",
        "Respond with intensity and boldness",
    ),
    PersonalityTag.GENTLE: PersonalityProfile(
        0.90, 0.85,
        "Soft, soothing, and comforting",
        "Respond with kindness and soft-spoken care",
    ),
    PersonalityTag.CONFIDENT: PersonalityProfile(
        0.80, 0.85,
        "Assured, strong, and authoritative",
        "Respond with self-assurance and authority",
    ),
    PersonalityTag.PLAYFUL: PersonalityProfile(
        0.65, 0.80,
        "Fun, mischievous, and light-hearted",
        "Respond with humor and lighthearted teasing",
    ),
    PersonalityTag.MELANCHOLIC: PersonalityProfile(
        0.75, 0.80,
        "Sad, reflective, and emotional",
        "Respond with thoughtful sadness and introspection",
    ),
    PersonalityTag.AUTHORITATIVE: PersonalityProfile(
        0.85, 0.75,
        "Commanding, professional, and serious",
        "Respond with commanding presence and expertise",
    ),
}


def personality_profile(tag: PersonalityTag) -> PersonalityProfile:
    """Look up the profile for a personality tag"""
    return PERSONALITY_PROFILES[tag]


def _check_unit_interval(name: str, value: float):
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class VoiceConfig:
    """Voice identity plus base synthesis parameters"""
    voice_id: str
    stability: float = 0.5
    similarity: float = 0.75

    def __post_init__(self):
        _check_unit_interval("stability", self.stability)
        _check_unit_interval("similarity", self.similarity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "voice_id": self.voice_id,
            "stability": self.stability,
            "similarity": self.similarity
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VoiceConfig':
        return cls(
            voice_id=data["voice_id"],
            stability=float(data.get("stability", 0.5)),
            similarity=float(data.get("similarity", 0.75))
        )


@dataclass(frozen=True)
class Persona:
    """A synthetic participant. Owned by the caller and never mutated by the core."""
    name: str
    personality: PersonalityTag
    voice_id: str
    stability: float
    similarity: float
    id: str = ""
    description: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Persona name is required")
        if not self.voice_id:
            raise ValueError(f"Persona {self.name} has no voice_id")
        if not isinstance(self.personality, PersonalityTag):
            object.__setattr__(self, "personality", PersonalityTag.parse(self.personality))
        _check_unit_interval("stability", self.stability)
        _check_unit_interval("similarity", self.similarity)
        if not self.id:
            object.__setattr__(self, "id", uuid.uuid4().hex)

    @property
    def profile(self) -> PersonalityProfile:
        return personality_profile(self.personality)

    @property
    def voice(self) -> VoiceConfig:
        return VoiceConfig(self.voice_id, self.stability, self.similarity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/YAML serialization"""
        return {
            "id": self.id,
            "name": self.name,
            "personality": self.personality.value,
            "voice_id": self.voice_id,
            "stability": self.stability,
            "similarity": self.similarity,
            "description": self.description
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Persona':
        """Create from dictionary

        Missing stability/similarity fall back to the personality's defaults.
        """
        personality = PersonalityTag.parse(data.get("personality", ""))
        profile = personality_profile(personality)

        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name", ""),
            personality=personality,
            voice_id=data.get("voice_id", ""),
            stability=float(data.get("stability", profile.stability)),
            similarity=float(data.get("similarity", profile.similarity)),
            description=data.get("description")
        )
