"""
Playback Sequencer - Single-flight audio playback for transcript turns
"""
import asyncio
from typing import Callable, Optional

from loguru import logger

from ..models import ConversationMetrics, Turn
from ..providers.base import AudioPlayer


class PlaybackSequencer:
    """Plays at most one turn at a time.

    Starting a new turn fully stops the current one first: the player is
    stopped, the playback task is cancelled and awaited, and the old turn's
    is_playing flag is cleared and announced before the new flag is set.
    """

    def __init__(
        self,
        player: AudioPlayer,
        on_change: Callable[[], None],
        metrics: Optional[ConversationMetrics] = None
    ):
        self.player = player
        self.metrics = metrics or ConversationMetrics()
        self._on_change = on_change
        self._lock = asyncio.Lock()
        self._current_turn: Optional[Turn] = None
        self._current_task: Optional[asyncio.Task] = None

    @property
    def current_turn(self) -> Optional[Turn]:
        return self._current_turn

    @property
    def is_playing(self) -> bool:
        return self._current_task is not None and not self._current_task.done()

    async def play(self, turn: Turn) -> bool:
        """Play a turn's audio and wait for it to finish

        Returns:
            True if playback reached its natural end, False if the turn has
            no audio, playback failed or it was stopped by another request
        """
        if not turn.audio_locator:
            return False

        async with self._lock:
            if turn is self._current_turn and self.is_playing:
                owner = False
                task = self._current_task
            else:
                owner = True
                await self._stop_current()
                turn.is_playing = True
                self._current_turn = turn
                self._on_change()
                task = asyncio.ensure_future(self._run(turn))
                self._current_task = task

        try:
            # asyncio.wait so that stopping the task does not cancel us
            await asyncio.wait({task})
        except asyncio.CancelledError:
            if owner:
                self.player.stop()
                task.cancel()
                self._release(turn)
            raise

        return not task.cancelled() and task.result()

    async def stop(self):
        """Abort whatever is playing"""
        async with self._lock:
            await self._stop_current()

    async def _run(self, turn: Turn) -> bool:
        try:
            await self.player.play(turn.audio_locator)
            self.metrics.audio_clips_played += 1
            return True
        except Exception as e:
            self.metrics.playback_failures += 1
            logger.warning(f"Playback failed for turn {turn.id}: {e}")
            return False
        finally:
            self._release(turn)

    async def _stop_current(self):
        task, turn = self._current_task, self._current_turn
        if task is None:
            return

        if not task.done():
            logger.debug(f"Stopping playback of turn {turn.id}")
            self.player.stop()
            task.cancel()
            await asyncio.wait({task})

        # A task cancelled before its first step never reaches its finally
        self._release(turn)

    def _release(self, turn: Turn):
        if turn is self._current_turn:
            self._current_turn = None
            self._current_task = None
        if turn.is_playing:
            turn.is_playing = False
            self._on_change()
