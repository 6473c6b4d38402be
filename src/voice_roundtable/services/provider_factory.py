"""
Provider Factory - Creates provider instances based on configuration
"""
from typing import Dict, Any, Optional

from ..config import Config
from ..providers import (
    AudioPlayer,
    AudioStorage,
    LocalAudioStorage,
    NullAudioPlayer,
    ResponseGenerator,
    SpeechSynthesizer
)


class ProviderFactory:
    """Factory class for creating provider instances"""

    @staticmethod
    def create_response_generator(config: Config) -> ResponseGenerator:
        """Create the text generator based on configuration

        Raises:
            ValueError: If provider type is not supported
        """
        provider_config = config.providers.llm
        provider_type = provider_config.get('type', 'openai').lower()

        if provider_type == 'openai':
            from ..providers.llm import OpenAIResponseGenerator
            return OpenAIResponseGenerator(provider_config)
        else:
            raise ValueError(f"Unsupported LLM provider type: {provider_type}")

    @staticmethod
    def create_storage(config: Config) -> AudioStorage:
        """Create audio storage based on configuration

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = config.storage.type.lower()

        if storage_type == 'local':
            return LocalAudioStorage(config.storage.local)
        else:
            raise ValueError(f"Unsupported storage type: {storage_type}")

    @staticmethod
    def create_speech_synthesizer(config: Config, storage: AudioStorage) -> Optional[SpeechSynthesizer]:
        """Create the TTS provider; type 'none' gives a text-only session

        Raises:
            ValueError: If provider type is not supported
        """
        provider_config = config.providers.tts
        provider_type = provider_config.get('type', 'elevenlabs').lower()

        if provider_type == 'elevenlabs':
            from ..providers.tts import ElevenLabsSpeechSynthesizer
            return ElevenLabsSpeechSynthesizer(provider_config, storage)
        elif provider_type == 'none':
            return None
        else:
            raise ValueError(f"Unsupported TTS provider type: {provider_type}")

    @staticmethod
    def create_audio_player(config: Config) -> AudioPlayer:
        """Create the playback backend

        Raises:
            ValueError: If backend type is not supported
        """
        playback_config = config.providers.playback
        backend = playback_config.get('type', 'sounddevice').lower()

        if backend == 'sounddevice':
            # Needs PortAudio, so only imported when selected
            from ..providers.playback.device import SoundDevicePlayer
            return SoundDevicePlayer(device=playback_config.get('device'))
        elif backend == 'none':
            return NullAudioPlayer()
        else:
            raise ValueError(f"Unsupported playback backend: {backend}")

    @staticmethod
    def create_all_providers(config: Config) -> Dict[str, Any]:
        """Create all providers based on configuration

        Returns:
            Dictionary with generator, synthesizer, player and storage
        """
        storage = ProviderFactory.create_storage(config)
        return {
            'generator': ProviderFactory.create_response_generator(config),
            'synthesizer': ProviderFactory.create_speech_synthesizer(config, storage),
            'player': ProviderFactory.create_audio_player(config),
            'storage': storage
        }
