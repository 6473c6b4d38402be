"""
Base provider classes - Abstract interfaces for the external collaborators
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Tuple

from ..models import Persona, SentimentResult, SpeakerKind


@dataclass
class GenerationRequest:
    """Everything a ResponseGenerator needs to voice one turn"""
    speaker: SpeakerKind
    prompt: str
    recent_window: List[Tuple[str, str]] = field(default_factory=list)
    persona: Optional[Persona] = None
    personality_description: str = ""
    speaking_style: str = ""
    thematic_directive: Optional[str] = None
    historical_context: Optional[str] = None
    user_sentiment: Optional[SentimentResult] = None


class ResponseGenerator(ABC):
    """Abstract base class for text generation providers (OpenAI, etc.)"""

    def __init__(self, config: Dict[str, Any]):
        """Initialize with provider configuration"""
        self.config = config

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> str:
        """Generate 1-3 sentences in the requested speaker's voice

        Args:
            request: Persona, recent turns and optional directive/history

        Returns:
            Generated text

        Raises:
            GenerationError: If no usable text was produced
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the name of the model being used"""
        pass


class SpeechSynthesizer(ABC):
    """Abstract base class for Text-to-Speech providers"""

    def __init__(self, config: Dict[str, Any]):
        """Initialize with provider configuration"""
        self.config = config

    @abstractmethod
    async def synthesize(
        self,
        text: str,
        voice_id: str,
        stability: float,
        similarity: float
    ) -> str:
        """Generate speech audio from text

        Args:
            text: Text to convert to speech
            voice_id: Provider voice identity
            stability: Stability in [0, 1]
            similarity: Similarity boost in [0, 1]

        Returns:
            Locator of a playable audio resource

        Raises:
            SynthesisError: If audio could not be produced
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of the TTS provider"""
        pass


class AudioPlayer(ABC):
    """Abstract base class for audio output devices"""

    @abstractmethod
    async def play(self, locator: str) -> None:
        """Play a resource and return when it has finished

        Raises:
            PlaybackError: If the resource could not be played
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Abort whatever is currently playing"""
        pass


class AudioStorage(ABC):
    """Abstract base class for where synthesized audio is kept"""

    def __init__(self, config: Dict[str, Any]):
        """Initialize with storage configuration"""
        self.config = config

    @abstractmethod
    async def save_audio(
        self,
        data: bytes,
        key: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        """Save audio data to storage

        Args:
            data: Audio data as bytes
            key: Storage key/path for the file
            metadata: Optional metadata to store with the file

        Returns:
            Locator (path or URL) of the stored file
        """
        pass

    @abstractmethod
    async def delete_audio(self, key: str) -> bool:
        """Delete a stored clip, returning True if something was removed"""
        pass

    @abstractmethod
    def get_storage_type(self) -> str:
        """Get the type of storage (local, ...)"""
        pass
