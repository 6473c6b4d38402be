"""
Local sound card playback via sounddevice
"""
import asyncio

import sounddevice as sd
import soundfile as sf
from loguru import logger

from ...errors import PlaybackError
from ..base import AudioPlayer


class SoundDevicePlayer(AudioPlayer):
    """Plays stored clips on the default output device"""

    def __init__(self, device=None):
        self.device = device

    async def play(self, locator: str) -> None:
        loop = asyncio.get_running_loop()

        try:
            data, samplerate = await loop.run_in_executor(None, sf.read, locator)
        except Exception as e:
            raise PlaybackError(f"Could not decode {locator}: {e}", {"locator": locator}) from e

        try:
            sd.play(data, samplerate, device=self.device)
            # sd.wait returns early once stop() is called
            await loop.run_in_executor(None, sd.wait)
        except sd.PortAudioError as e:
            raise PlaybackError(f"Audio device error: {e}", {"locator": locator}) from e

        logger.debug(f"Finished playing {locator}")

    def stop(self) -> None:
        sd.stop()
