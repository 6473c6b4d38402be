"""
Configuration Management for Voice Roundtable
"""
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv
from dataclasses import dataclass, field

from .models import ConversationConfig, VoiceConfig


@dataclass
class AppConfig:
    """Application configuration"""
    name: str = "Voice Roundtable"
    environment: str = "development"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"


@dataclass
class StorageConfig:
    """Storage configuration"""
    type: str = "local"
    local: Dict[str, Any] = field(default_factory=lambda: {
        "base_path": "data/roundtable",
        "create_dirs": True
    })


@dataclass
class ProvidersConfig:
    """Provider configuration"""
    llm: Dict[str, Any] = field(default_factory=lambda: {
        "type": "openai",
        "model": "gpt-4o-mini",
        "temperature": 0.8,
        "max_tokens": 150,
        "timeout": 15.0
    })
    tts: Dict[str, Any] = field(default_factory=lambda: {
        "type": "elevenlabs",
        "model": "eleven_turbo_v2_5",
        "output_format": "mp3_44100_128"
    })
    playback: Dict[str, Any] = field(default_factory=lambda: {
        "type": "sounddevice"
    })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProvidersConfig':
        """Overlay YAML sections on the defaults, key by key"""
        config = cls()
        for section in ('llm', 'tts', 'playback'):
            getattr(config, section).update(data.get(section) or {})
        return config


@dataclass
class Config:
    """Main configuration class"""
    app: AppConfig = field(default_factory=AppConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    conversation: ConversationConfig = field(default_factory=ConversationConfig)
    voice_modifiers: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def load_from_file(cls, config_path: str = None) -> 'Config':
        """Load configuration from YAML file

        Args:
            config_path: Path to configuration file (defaults to config.yaml)

        Returns:
            Config object
        """
        if config_path is None:
            # Try multiple locations
            possible_paths = [
                Path("config.yaml"),
                Path("../config.yaml")
            ]
            for path in possible_paths:
                if path.exists():
                    config_path = str(path)
                    break

        config = cls()

        if config_path and Path(config_path).exists():
            with open(config_path, 'r') as f:
                yaml_data = yaml.safe_load(f)

            if yaml_data:
                if 'app' in yaml_data:
                    config.app = AppConfig(**yaml_data['app'])
                if 'storage' in yaml_data:
                    config.storage = StorageConfig(**yaml_data['storage'])
                if 'providers' in yaml_data:
                    config.providers = ProvidersConfig.from_dict(yaml_data['providers'])
                if 'conversation' in yaml_data:
                    config.conversation = ConversationConfig.from_dict(yaml_data['conversation'])
                if 'voice_modifiers' in yaml_data:
                    config.voice_modifiers = dict(yaml_data['voice_modifiers'] or {})

        return config

    @classmethod
    def load_from_env(cls) -> 'Config':
        """Load configuration from environment variables

        Returns:
            Config object with values from environment
        """
        config = cls()
        config.apply_env_overrides()
        return config

    def apply_env_overrides(self):
        """Override settings from environment variables (and .env.local)"""
        load_dotenv(".env.local")
        load_dotenv("../.env.local")

        self.app.environment = os.getenv('APP_ENVIRONMENT', self.app.environment)
        self.app.log_level = os.getenv('LOG_LEVEL', self.app.log_level).upper()

        # Storage
        if os.getenv('STORAGE_BASE_PATH'):
            self.storage.local['base_path'] = os.getenv('STORAGE_BASE_PATH')

        # Providers
        if os.getenv('LLM_PROVIDER'):
            self.providers.llm['type'] = os.getenv('LLM_PROVIDER')
        if os.getenv('LLM_MODEL'):
            self.providers.llm['model'] = os.getenv('LLM_MODEL')
        if os.getenv('TTS_PROVIDER'):
            self.providers.tts['type'] = os.getenv('TTS_PROVIDER')
        if os.getenv('TTS_MODEL'):
            self.providers.tts['model'] = os.getenv('TTS_MODEL')
        if os.getenv('PLAYBACK_BACKEND'):
            self.providers.playback['type'] = os.getenv('PLAYBACK_BACKEND')

        # Host voice
        if os.getenv('HOST_VOICE_ID'):
            host = self.conversation.host_voice
            self.conversation.host_voice = VoiceConfig(
                voice_id=os.getenv('HOST_VOICE_ID'),
                stability=host.stability,
                similarity=host.similarity
            )

    @classmethod
    def load(cls, config_path: str = None) -> 'Config':
        """Load configuration from file and environment

        Environment variables take precedence over the file.
        """
        config = cls.load_from_file(config_path)
        config.apply_env_overrides()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            'app': {
                'name': self.app.name,
                'environment': self.app.environment,
                'version': self.app.version,
                'debug': self.app.debug,
                'log_level': self.app.log_level
            },
            'storage': {
                'type': self.storage.type,
                'local': self.storage.local
            },
            'providers': {
                'llm': self.providers.llm,
                'tts': self.providers.tts,
                'playback': self.providers.playback
            },
            'conversation': self.conversation.to_dict(),
            'voice_modifiers': self.voice_modifiers
        }

    def save_to_file(self, config_path: str):
        """Save configuration to YAML file

        Args:
            config_path: Path to save configuration
        """
        with open(config_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance

    Returns:
        Global Config object
    """
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def set_config(config: Config):
    """Set the global configuration instance

    Args:
        config: Config object to set as global
    """
    global _config
    _config = config
