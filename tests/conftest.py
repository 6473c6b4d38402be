"""Shared fakes for roundtable tests."""

import asyncio
import random
from typing import Callable, Dict, List, Optional

import pytest

from voice_roundtable.errors import GenerationError, PlaybackError, SynthesisError
from voice_roundtable.models import ConversationConfig, Persona, SessionSnapshot
from voice_roundtable.providers.base import (
    AudioPlayer,
    AudioStorage,
    GenerationRequest,
    ResponseGenerator,
    SpeechSynthesizer,
)
from voice_roundtable.services import ConversationOrchestrator


async def wait_for(predicate: Callable[[], bool], attempts: int = 200):
    """Yield to the event loop until predicate() holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


class FakeTimer:
    def __init__(self, due: float, delay: float, callback):
        self.due = due
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock; timers only fire from advance()."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def __call__(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(self.now + delay, delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float):
        self.now += seconds
        for timer in sorted(self.pending, key=lambda t: t.due):
            if timer.due <= self.now and not timer.cancelled:
                timer.fired = True
                timer.callback()


class FixedRandom(random.Random):
    """Deterministic stand-in for the orchestrator's random source."""

    def __init__(self, draws=(0.9,), picks=(0,), delay: float = 4.0):
        super().__init__(0)
        self.draws = list(draws)
        self.picks = list(picks)
        self.delay = delay

    def random(self):
        return self.draws.pop(0) if len(self.draws) > 1 else self.draws[0]

    def choice(self, seq):
        index = self.picks.pop(0) if len(self.picks) > 1 else self.picks[0]
        return seq[index % len(seq)]

    def uniform(self, a, b):
        return min(max(self.delay, a), b)


class ScriptedGenerator(ResponseGenerator):
    """Returns scripted lines; calls can be held open or made to fail."""

    def __init__(self, responses: Optional[List[str]] = None, failures=()):
        super().__init__({})
        self.responses = list(responses or [])
        self.failures = set(failures)
        self.requests: List[GenerationRequest] = []
        self._gates: Dict[int, asyncio.Event] = {}

    def hold(self, index: int) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[index] = gate
        return gate

    async def generate(self, request: GenerationRequest) -> str:
        index = len(self.requests)
        self.requests.append(request)
        if index in self._gates:
            await self._gates[index].wait()
        if index in self.failures:
            raise GenerationError("scripted failure")
        if index < len(self.responses):
            return self.responses[index]
        return f"Generated line {index + 1}"

    def get_model_name(self) -> str:
        return "scripted"


class ScriptedSynthesizer(SpeechSynthesizer):
    """Returns fake clip locators; fails for configured texts."""

    def __init__(self, fail_texts=(), fail_all: bool = False):
        super().__init__({})
        self.fail_texts = set(fail_texts)
        self.fail_all = fail_all
        self.calls: List[dict] = []

    async def synthesize(self, text, voice_id, stability, similarity) -> str:
        self.calls.append({
            "text": text,
            "voice_id": voice_id,
            "stability": stability,
            "similarity": similarity,
        })
        if self.fail_all or text in self.fail_texts:
            raise SynthesisError("scripted failure")
        return f"clip-{len(self.calls)}.mp3"

    def get_provider_name(self) -> str:
        return "scripted"


class RecordingPlayer(AudioPlayer):
    """Records playback; with block=True each clip plays until finish() or stop()."""

    def __init__(self, block: bool = False, failures=()):
        self.block = block
        self.failures = set(failures)
        self.played: List[str] = []
        self.stop_calls = 0
        self._release: Optional[asyncio.Event] = None

    async def play(self, locator: str) -> None:
        self.played.append(locator)
        if locator in self.failures:
            raise PlaybackError("device unavailable")
        if self.block:
            self._release = asyncio.Event()
            await self._release.wait()

    def finish(self):
        if self._release is not None:
            self._release.set()

    def stop(self):
        self.stop_calls += 1
        if self._release is not None:
            self._release.set()


class RecordingStorage(AudioStorage):
    """Records which clips the orchestrator deletes."""

    def __init__(self):
        super().__init__({})
        self.deleted: List[str] = []

    async def save_audio(self, data, key, metadata=None) -> str:
        return key

    async def delete_audio(self, key: str) -> bool:
        self.deleted.append(key)
        return True

    def get_storage_type(self) -> str:
        return "recording"


class SnapshotRecorder:
    """Observer that keeps every snapshot it is given."""

    def __init__(self):
        self.snapshots: List[SessionSnapshot] = []

    def __call__(self, snapshot: SessionSnapshot):
        self.snapshots.append(snapshot)

    @property
    def last(self) -> SessionSnapshot:
        return self.snapshots[-1]


@pytest.fixture
def ava():
    return Persona(name="Ava", personality="cheerful", voice_id="voice-ava", stability=0.5, similarity=0.75)


@pytest.fixture
def ben():
    return Persona(name="Ben", personality="sarcastic", voice_id="voice-ben", stability=0.6, similarity=0.7)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def generator():
    return ScriptedGenerator()


@pytest.fixture
def synthesizer():
    return ScriptedSynthesizer()


@pytest.fixture
def player():
    return RecordingPlayer()


@pytest.fixture
def recorder():
    return SnapshotRecorder()


@pytest.fixture
def make_orchestrator(generator, synthesizer, player, scheduler, recorder, ava):
    """Build an orchestrator wired to the fakes; call from inside the test's event loop."""

    def factory(participants=None, rng=None, config=None, **overrides):
        options = dict(
            generator=generator,
            synthesizer=synthesizer,
            player=player,
            participants=[ava] if participants is None else participants,
            config=config or ConversationConfig(),
            scheduler=scheduler,
            rng=rng or FixedRandom(),
            on_state_change=recorder,
        )
        options.update(overrides)
        return ConversationOrchestrator(**options)

    return factory
