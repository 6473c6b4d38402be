"""
Metrics Model - Counters for a conversation session and its recovered failures
"""
from typing import Dict, Any, Optional
from dataclasses import dataclass
from datetime import datetime

from .conversation import SpeakerKind


@dataclass
class ConversationMetrics:
    """Counters collected by the orchestrator and the playback sequencer"""

    # Turn counts
    total_turns: int = 0
    user_turns: int = 0
    host_turns: int = 0
    persona_turns: int = 0

    # Scheduling
    autonomous_turns_scheduled: int = 0
    interruptions: int = 0
    stale_results_discarded: int = 0

    # Recovered failures
    generation_failures: int = 0
    synthesis_failures: int = 0
    playback_failures: int = 0

    # Audio
    audio_clips_synthesized: int = 0
    audio_clips_played: int = 0

    # Timestamps
    started_at: Optional[datetime] = None
    stopped_at: Optional[datetime] = None

    def record_turn(self, speaker: SpeakerKind):
        """Count a turn that made it into the transcript"""
        self.total_turns += 1
        if speaker is SpeakerKind.USER:
            self.user_turns += 1
        elif speaker is SpeakerKind.HOST:
            self.host_turns += 1
        else:
            self.persona_turns += 1

    @property
    def total_duration_seconds(self) -> float:
        if self.started_at and self.stopped_at:
            return (self.stopped_at - self.started_at).total_seconds()
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "total_turns": self.total_turns,
            "user_turns": self.user_turns,
            "host_turns": self.host_turns,
            "persona_turns": self.persona_turns,
            "autonomous_turns_scheduled": self.autonomous_turns_scheduled,
            "interruptions": self.interruptions,
            "stale_results_discarded": self.stale_results_discarded,
            "generation_failures": self.generation_failures,
            "synthesis_failures": self.synthesis_failures,
            "playback_failures": self.playback_failures,
            "audio_clips_synthesized": self.audio_clips_synthesized,
            "audio_clips_played": self.audio_clips_played,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "stopped_at": self.stopped_at.isoformat() if self.stopped_at else None,
            "total_duration_seconds": self.total_duration_seconds
        }

    def generate_summary(self) -> str:
        """Generate a human-readable summary of metrics"""
        lines = [
            f"Conversation Metrics Summary",
            f"=" * 40,
            f"Total turns: {self.total_turns} ({self.user_turns} user, {self.host_turns} host, {self.persona_turns} persona)",
            f"Duration: {self.total_duration_seconds:.1f} seconds"
        ]

        if self.interruptions > 0:
            lines.append(f"Interruptions: {self.interruptions}")

        lines.extend([
            f"",
            f"Audio:",
            f"  Clips synthesized: {self.audio_clips_synthesized}",
            f"  Clips played: {self.audio_clips_played}"
        ])

        failures = self.generation_failures + self.synthesis_failures + self.playback_failures
        if failures or self.stale_results_discarded:
            lines.extend([
                f"",
                f"Recovered:",
                f"  Generation failures: {self.generation_failures}",
                f"  Synthesis failures: {self.synthesis_failures}",
                f"  Playback failures: {self.playback_failures}",
                f"  Stale results discarded: {self.stale_results_discarded}"
            ])

        return "\n".join(lines)
