"""
Conversation Orchestrator - Turn-taking state machine for the roundtable

Owns the single active Session. Every generation and synthesis call captures
the session's generation epoch; a result is applied only while that epoch is
still current, so work superseded by a user interruption, a restart or a stop
is dropped on arrival.
"""
import asyncio
import random
from datetime import datetime
from typing import Awaitable, Callable, Optional, Sequence, Set, Tuple, Union

from loguru import logger

from ..analysis import SentimentAnalyzer, VoiceParameterAdvisor
from ..errors import EmptyParticipantsError
from ..models import (
    ConversationConfig,
    ConversationMetrics,
    ConversationPhase,
    Persona,
    SentimentResult,
    Session,
    SessionSnapshot,
    SpeakerKind,
    Turn,
    TurnSnapshot,
)
from ..providers.base import AudioPlayer, AudioStorage, GenerationRequest, ResponseGenerator, SpeechSynthesizer
from .host_lines import build_greeting, pick_host_remark
from .playback import PlaybackSequencer
from .scheduling import Scheduler, TurnScheduler

StateObserver = Callable[[SessionSnapshot], None]

HOST_PROMPT = "Make a brief transition remark that picks up on the recent conversation and invites others in."


def truncate(text: Optional[str], limit: int) -> Optional[str]:
    if not text:
        return None
    return text[:limit]


def persona_prompt(persona: Persona, last_speaker: Optional[str], last_text: Optional[str]) -> str:
    if last_speaker and last_text:
        return (
            f'{last_speaker} just said: "{last_text}". '
            f"Respond as {persona.name} and keep the conversation going."
        )
    return f"Start a new topic as {persona.name}."


def reply_prompt(persona: Persona, user_text: str) -> str:
    return f'The user just said: "{user_text}". Respond as {persona.name}, speaking directly to them.'


class ConversationOrchestrator:
    """Runs one roundtable session among personas, a host and the user.

    Collaborators (generator, synthesizer, player), the scheduler and the
    random source are injected. Pass synthesizer=None for a text-only run.
    When storage is given, clips of a replaced session are deleted from it.
    """

    def __init__(
        self,
        generator: ResponseGenerator,
        synthesizer: Optional[SpeechSynthesizer],
        player: AudioPlayer,
        participants: Sequence[Persona] = (),
        config: Optional[ConversationConfig] = None,
        analyzer: Optional[SentimentAnalyzer] = None,
        advisor: Optional[VoiceParameterAdvisor] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        on_state_change: Optional[StateObserver] = None,
        storage: Optional[AudioStorage] = None,
    ):
        self.generator = generator
        self.synthesizer = synthesizer
        self.storage = storage
        self.config = config or ConversationConfig()
        self.analyzer = analyzer or SentimentAnalyzer()
        self.advisor = advisor or VoiceParameterAdvisor()
        self.on_state_change = on_state_change

        self.metrics = ConversationMetrics()
        self.session = Session(participants=tuple(participants))
        self.sequencer = PlaybackSequencer(player, self._notify, self.metrics)

        self.thematic_directive: Optional[str] = None
        self.historical_context: Optional[str] = None

        self._scheduler = scheduler or TurnScheduler()
        self._rng = rng or random.Random()
        self._tasks: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def start_conversation(self) -> TurnSnapshot:
        """Open a fresh session with a host greeting and arm the autonomous loop

        Raises:
            EmptyParticipantsError: If there is nobody to talk to
        """
        if not self.session.participants:
            raise EmptyParticipantsError()

        self._cancel_pending_turn()
        previous = self.session
        self.session = Session(
            participants=previous.participants,
            is_active=True,
            generation_epoch=previous.generation_epoch + 1,
            phase=ConversationPhase.GREETING
        )
        epoch = self.session.generation_epoch

        if self.metrics.started_at is None:
            self.metrics.started_at = datetime.now()
        self.metrics.stopped_at = None

        names = ", ".join(persona.name for persona in self.session.participants)
        logger.info(f"Starting conversation (epoch {epoch}) with {names}")

        greeting = self._append_turn(Turn(
            speaker=SpeakerKind.HOST,
            text=build_greeting(self.session.participants, self.thematic_directive)
        ))
        self._spawn(self._deliver_greeting(greeting, epoch))
        self._spawn(self._delete_session_audio(previous))
        return greeting.snapshot()

    async def add_user_message(self, text: str) -> Optional[TurnSnapshot]:
        """Interrupt the autonomous loop with a user message and answer it

        The persona reply is generated, synthesized and played before this
        returns. The loop is re-armed after the user cooldown.

        Returns:
            Snapshot of the persona reply, or None when nobody could answer
            or the reply was superseded by a later interruption
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("Message text must not be empty")

        session = self.session
        session.is_active = True
        session.generation_epoch += 1
        epoch = session.generation_epoch
        self._cancel_pending_turn()
        self.metrics.interruptions += 1
        if self.metrics.started_at is None:
            self.metrics.started_at = datetime.now()

        logger.info(f"User interruption (epoch {epoch}): {text[:80]}")
        self._append_turn(Turn(speaker=SpeakerKind.USER, text=text))

        await self.sequencer.stop()
        if not self._is_current(epoch):
            return None

        if not session.participants:
            logger.warning("No participants to answer the user")
            self._schedule_next_turn(self.config.user_cooldown, epoch)
            return None

        sentiment = self.analyzer.analyze(text)
        logger.info(
            f"User sentiment: {sentiment.sentiment.value} "
            f"(intensity {sentiment.intensity}, confidence {sentiment.confidence})"
        )

        persona = self._rng.choice(session.participants)
        request = self._build_request(
            SpeakerKind.PERSONA,
            reply_prompt(persona, text),
            persona=persona,
            user_sentiment=sentiment
        )
        reply_text = await self._generate(request, epoch, lambda: self.config.fallback_text)
        if reply_text is None:
            return None

        reply = self._append_turn(Turn(speaker=SpeakerKind.PERSONA, text=reply_text, persona=persona))
        await self._voice_turn(reply, epoch)

        if self._is_current(epoch) and self.session.is_active:
            self._schedule_next_turn(self.config.user_cooldown, epoch)
        return reply.snapshot()

    async def stop_conversation(self):
        """Deactivate and replace the session; in-flight work becomes stale"""
        self._cancel_pending_turn()
        previous = self.session
        self.session = Session(
            participants=previous.participants,
            generation_epoch=previous.generation_epoch + 1,
            phase=ConversationPhase.STOPPED
        )
        self.metrics.stopped_at = datetime.now()
        logger.info(f"Conversation stopped after {len(previous.turns)} turns")

        await self.sequencer.stop()
        await self._delete_session_audio(previous)
        self._notify()

    async def play_message_audio(self, turn: Union[str, Turn, TurnSnapshot]) -> bool:
        """Play (or replay) one transcript turn through the sequencer"""
        turn_id = turn if isinstance(turn, str) else turn.id
        target = self.session.find_turn(turn_id)
        if target is None:
            logger.warning(f"Turn {turn_id} is not in the current transcript")
            return False
        return await self.sequencer.play(target)

    def update_participants(self, personas: Sequence[Persona]):
        """Swap the participant set; transcript and epoch are kept"""
        self.session.participants = tuple(personas)
        logger.info(f"Participants updated: {[persona.name for persona in personas]}")
        self._notify()

    def set_thematic_directive(self, directive: Optional[str]):
        self.thematic_directive = directive.strip() if directive and directive.strip() else None

    def set_historical_context(self, context: Optional[str]):
        self.historical_context = context.strip() if context and context.strip() else None

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()

    async def wait_until_settled(self):
        """Wait for every background turn task, including ones they spawn"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Autonomous loop
    # ------------------------------------------------------------------

    async def _deliver_greeting(self, greeting: Turn, epoch: int):
        await self._voice_turn(greeting, epoch)
        if self._is_current(epoch) and self.session.is_active:
            self._schedule_next_turn(self._next_delay(), epoch)

    def _next_delay(self) -> float:
        return self._rng.uniform(self.config.min_turn_delay, self.config.max_turn_delay)

    def _schedule_next_turn(self, delay: float, epoch: int):
        self._cancel_pending_turn()
        self.session.phase = ConversationPhase.SCHEDULING
        self.session.pending_turn = self._scheduler(delay, lambda: self._on_turn_due(epoch))
        self.metrics.autonomous_turns_scheduled += 1
        logger.debug(f"Next turn in {delay:.2f}s (epoch {epoch})")

    def _on_turn_due(self, epoch: int):
        if not self._is_current(epoch):
            return
        self.session.pending_turn = None
        if self.session.is_active:
            self._spawn(self._autonomous_turn(epoch))

    async def _autonomous_turn(self, epoch: int):
        if not self._is_current(epoch):
            return

        session = self.session
        if not session.participants:
            logger.debug("No participants; waiting for the roster to change")
            self._schedule_next_turn(self._next_delay(), epoch)
            return

        last = session.turns[-1] if session.turns else None
        if self._rng.random() < self.config.host_probability:
            persona = None
            request = self._build_request(SpeakerKind.HOST, HOST_PROMPT)
            text = await self._generate(request, epoch, lambda: pick_host_remark(self._rng))
        else:
            persona = self._rng.choice(session.participants)
            request = self._build_request(
                SpeakerKind.PERSONA,
                persona_prompt(persona, last.speaker_label if last else None, last.text if last else None),
                persona=persona
            )
            text = await self._generate(request, epoch, lambda: self.config.fallback_text)

        if text is None:
            return

        speaker = SpeakerKind.PERSONA if persona else SpeakerKind.HOST
        turn = self._append_turn(Turn(speaker=speaker, text=text, persona=persona))
        await self._voice_turn(turn, epoch)

        if self._is_current(epoch) and self.session.is_active:
            self._schedule_next_turn(self._next_delay(), epoch)

    # ------------------------------------------------------------------
    # Generation, synthesis and playback steps
    # ------------------------------------------------------------------

    def _build_request(
        self,
        speaker: SpeakerKind,
        prompt: str,
        persona: Optional[Persona] = None,
        user_sentiment: Optional[SentimentResult] = None
    ) -> GenerationRequest:
        profile = persona.profile if persona else None
        return GenerationRequest(
            speaker=speaker,
            prompt=prompt,
            recent_window=self.session.recent_window(self.config.context_window),
            persona=persona,
            personality_description=(persona.description or profile.description) if persona else "",
            speaking_style=profile.speaking_style if profile else "",
            thematic_directive=truncate(self.thematic_directive, self.config.directive_max_chars),
            historical_context=truncate(self.historical_context, self.config.historical_context_max_chars),
            user_sentiment=user_sentiment
        )

    async def _generate(
        self,
        request: GenerationRequest,
        epoch: int,
        fallback: Callable[[], str]
    ) -> Optional[str]:
        """Generate text for the current epoch, or None if it went stale"""
        self._set_phase(ConversationPhase.GENERATING, epoch)
        try:
            text = await asyncio.wait_for(
                self.generator.generate(request),
                timeout=self.config.generation_timeout
            )
            if not text or not text.strip():
                raise ValueError("empty text")
            text = text.strip()
        except Exception as e:
            self.metrics.generation_failures += 1
            logger.warning(f"Generation failed for {request.speaker.value}, using fallback: {e!r}")
            text = fallback()

        if not self._is_current(epoch):
            self._discard_stale("generation", epoch)
            return None
        return text

    async def _synthesize(self, turn: Turn, epoch: int) -> bool:
        if self.synthesizer is None:
            return False

        voice_id, stability, similarity = self._voice_parameters(turn)
        self._set_phase(ConversationPhase.SYNTHESIZING, epoch)
        try:
            locator = await asyncio.wait_for(
                self.synthesizer.synthesize(turn.text, voice_id, stability, similarity),
                timeout=self.config.synthesis_timeout
            )
        except Exception as e:
            self.metrics.synthesis_failures += 1
            logger.warning(f"Synthesis failed for turn {turn.id}, keeping it text-only: {e!r}")
            return False

        if not self._is_current(epoch):
            self._discard_stale("synthesis", epoch)
            await self._delete_clip(locator)
            return False

        turn.audio_locator = locator
        self.metrics.audio_clips_synthesized += 1
        self._notify()
        return True

    async def _voice_turn(self, turn: Turn, epoch: int):
        """Synthesize then play a freshly appended turn"""
        if not await self._synthesize(turn, epoch):
            return
        if not self._is_current(epoch):
            return
        self.session.phase = ConversationPhase.SPEAKING
        await self.sequencer.play(turn)

    def _voice_parameters(self, turn: Turn) -> Tuple[str, float, float]:
        if turn.speaker is not SpeakerKind.PERSONA:
            host = self.config.host_voice
            return host.voice_id, host.stability, host.similarity

        persona = turn.persona
        stability, similarity = persona.stability, persona.similarity
        if self.config.enable_sentiment_adjustment:
            sentiment = self.analyzer.analyze(turn.text)
            adjustment = self.advisor.recommend(sentiment, persona.personality)
            stability, similarity = adjustment.apply_to(stability, similarity)
            logger.debug(
                f"{persona.name}: {sentiment.sentiment.value} -> "
                f"stability {stability:.2f}, similarity {similarity:.2f} ({adjustment.rationale})"
            )
        return persona.voice_id, stability, similarity

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_current(self, epoch: int) -> bool:
        return epoch == self.session.generation_epoch

    def _set_phase(self, phase: ConversationPhase, epoch: int):
        if self._is_current(epoch):
            self.session.phase = phase

    def _discard_stale(self, stage: str, epoch: int):
        self.metrics.stale_results_discarded += 1
        logger.debug(
            f"Discarding stale {stage} result from epoch {epoch} "
            f"(current {self.session.generation_epoch})"
        )

    def _append_turn(self, turn: Turn) -> Turn:
        self.session.add_turn(turn)
        self.metrics.record_turn(turn.speaker)
        self._notify()
        return turn

    async def _delete_session_audio(self, session: Session):
        for turn in session.turns:
            if turn.audio_locator:
                await self._delete_clip(turn.audio_locator)

    async def _delete_clip(self, locator: str):
        if self.storage is None:
            return
        try:
            await self.storage.delete_audio(locator)
        except Exception as e:
            logger.warning(f"Could not delete clip {locator}: {e!r}")

    def _cancel_pending_turn(self):
        handle = self.session.pending_turn
        if handle is not None:
            handle.cancel()
            self.session.pending_turn = None
            logger.debug("Cancelled pending turn")

    def _spawn(self, coro: Awaitable):
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).error("Background turn failed")

    def _notify(self):
        if self.on_state_change is None:
            return
        try:
            self.on_state_change(self.session.snapshot())
        except Exception as e:
            logger.warning(f"State observer raised: {e!r}")
