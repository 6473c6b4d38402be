"""
ElevenLabs speech synthesizer
"""
import asyncio
import os
import uuid
from datetime import datetime
from typing import Dict, Any, Optional

from elevenlabs import ElevenLabs
from loguru import logger

from ...errors import SynthesisError
from ..base import AudioStorage, SpeechSynthesizer


class ElevenLabsSpeechSynthesizer(SpeechSynthesizer):
    """Synthesizes speech with ElevenLabs and hands the clip to an AudioStorage

    Config keys: model, output_format, api_key
    """

    def __init__(
        self,
        config: Dict[str, Any],
        storage: AudioStorage,
        client: Optional[ElevenLabs] = None
    ):
        super().__init__(config)

        self.storage = storage
        self.model = config.get('model', 'eleven_turbo_v2_5')
        self.output_format = config.get('output_format', 'mp3_44100_128')

        if client is None:
            api_key = config.get('api_key') or os.getenv("ELEVENLABS_API_KEY")
            if not api_key:
                raise ValueError("ELEVENLABS_API_KEY not found in environment")
            client = ElevenLabs(api_key=api_key)
        self.client = client

    def _convert(self, text: str, voice_id: str, stability: float, similarity: float) -> bytes:
        audio_response = self.client.text_to_speech.convert(
            text=text,
            voice_id=voice_id,
            model_id=self.model,
            output_format=self.output_format,
            voice_settings={
                "stability": stability,
                "similarity_boost": similarity
            }
        )

        # Collect all chunks into bytes
        return b"".join(chunk for chunk in audio_response if chunk)

    async def synthesize(
        self,
        text: str,
        voice_id: str,
        stability: float,
        similarity: float
    ) -> str:
        loop = asyncio.get_running_loop()

        try:
            audio_bytes = await loop.run_in_executor(
                None, self._convert, text, voice_id, stability, similarity
            )
        except Exception as e:
            raise SynthesisError(
                f"ElevenLabs generation failed: {e}",
                {"voice_id": voice_id, "model": self.model}
            ) from e

        if not audio_bytes:
            raise SynthesisError("ElevenLabs returned no audio", {"voice_id": voice_id})

        key = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"
        locator = await self.storage.save_audio(
            audio_bytes,
            key,
            metadata={
                "voice_id": voice_id,
                "stability": stability,
                "similarity": similarity,
                "model": self.model
            }
        )
        logger.debug(f"Synthesized {len(audio_bytes)} bytes for voice {voice_id}")
        return locator

    def get_provider_name(self) -> str:
        return "elevenlabs"
