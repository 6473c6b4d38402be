"""
Local Audio Storage Implementation
"""
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from loguru import logger

from ..base import AudioStorage


class LocalAudioStorage(AudioStorage):
    """Keeps synthesized clips on the local file system; the locator is the file path"""

    def __init__(self, config: Dict[str, Any]):
        """Initialize local audio storage

        Config should include:
        - base_path: Base directory for storage (default: 'data/roundtable')
        - create_dirs: Whether to create directories if they don't exist (default: True)
        """
        super().__init__(config)

        self.base_path = Path(config.get('base_path', 'data/roundtable'))
        self.audio_dir = self.base_path / 'audio'

        if config.get('create_dirs', True):
            self.audio_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        return Path(key) if os.path.isabs(key) else self.audio_dir / key

    async def save_audio(
        self,
        data: bytes,
        key: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        """Save audio data to the local file system

        Args:
            data: Audio data as bytes
            key: Filename or relative path
            metadata: Optional metadata (saved as .meta.json sidecar)

        Returns:
            Path to the stored file
        """
        # Ensure key has .mp3 extension
        if not key.endswith('.mp3'):
            key = f"{key}.mp3"

        file_path = self.audio_dir / key
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(data)

        if metadata:
            metadata_path = file_path.with_suffix('.meta.json')
            metadata_path.write_text(json.dumps(metadata, indent=2, default=str))

        logger.debug(f"Saved {len(data)} bytes of audio to {file_path}")
        return str(file_path)

    async def delete_audio(self, key: str) -> bool:
        """Delete a clip and its metadata sidecar"""
        file_path = self._resolve(key)
        deleted_any = False

        for path in (file_path, file_path.with_suffix('.meta.json')):
            if path.exists():
                path.unlink()
                deleted_any = True

        return deleted_any

    def get_storage_type(self) -> str:
        """Get the type of storage"""
        return "local"
