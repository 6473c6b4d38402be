"""
Silent player for text-only sessions
"""
import asyncio

from ..base import AudioPlayer


class NullAudioPlayer(AudioPlayer):
    """Pretends to play each clip for a fixed duration"""

    def __init__(self, duration: float = 0.0):
        self.duration = duration
        self.played = []
        self._stopped = asyncio.Event()

    async def play(self, locator: str) -> None:
        self.played.append(locator)
        self._stopped.clear()
        if self.duration > 0:
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.duration)
            except asyncio.TimeoutError:
                pass

    def stop(self) -> None:
        self._stopped.set()
