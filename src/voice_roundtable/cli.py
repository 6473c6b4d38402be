"""
Command-line roundtable runner

Type a line and press enter to talk to the group; /quit ends the session.
"""
import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from .analysis import VoiceParameterAdvisor
from .config import Config, set_config
from .models import SessionSnapshot
from .providers import NullAudioPlayer
from .services import ConversationOrchestrator, ProviderFactory, load_personas


class TranscriptPrinter:
    """Observer that prints each turn once"""

    def __init__(self):
        self.seen = set()

    def __call__(self, snapshot: SessionSnapshot):
        for turn in snapshot.turns:
            if turn.id not in self.seen:
                self.seen.add(turn.id)
                print(f"\n[{turn.speaker_label}] {turn.text}")


def build_orchestrator(config: Config, personas, text_only: bool) -> ConversationOrchestrator:
    if text_only:
        generator = ProviderFactory.create_response_generator(config)
        synthesizer, player, storage = None, NullAudioPlayer(), None
    else:
        providers = ProviderFactory.create_all_providers(config)
        generator = providers['generator']
        synthesizer = providers['synthesizer']
        player = providers['player']
        storage = providers['storage']

    return ConversationOrchestrator(
        generator=generator,
        synthesizer=synthesizer,
        player=player,
        participants=personas,
        config=config.conversation,
        advisor=VoiceParameterAdvisor.from_config(config.voice_modifiers),
        on_state_change=TranscriptPrinter(),
        storage=storage
    )


async def run(args):
    config = Config.load(args.config)
    set_config(config)

    logger.remove()
    logger.add(sys.stderr, level=config.app.log_level)

    personas = load_personas(args.personas)
    orchestrator = build_orchestrator(config, personas, args.text_only)

    if args.directive:
        orchestrator.set_thematic_directive(args.directive)
    if args.context:
        orchestrator.set_historical_context(Path(args.context).read_text())

    await orchestrator.start_conversation()

    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line or line.strip() == "/quit":
                break
            if line.strip():
                await orchestrator.add_user_message(line)
    finally:
        await orchestrator.stop_conversation()
        await orchestrator.wait_until_settled()

    print(orchestrator.metrics.generate_summary())


def main():
    parser = argparse.ArgumentParser(description="Talk with a roundtable of synthetic personas")
    parser.add_argument("personas", help="YAML file with a 'personas' list")
    parser.add_argument("--directive", help="Thematic directive shaping the greeting and replies")
    parser.add_argument("--context", help="Text file with shared background for the personas")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--text-only", action="store_true",
                        help="Skip speech synthesis and playback")

    args = parser.parse_args()

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\nInterrupted")


if __name__ == "__main__":
    main()
