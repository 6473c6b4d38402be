"""
Sentiment Model - Lexical sentiment scores and the voice adjustments derived from them
"""
from typing import Dict, Any, Tuple
from dataclasses import dataclass
from enum import Enum

STABILITY_DELTA_LIMIT = 0.4
SIMILARITY_DELTA_LIMIT = 0.2


class SentimentClass(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class SentimentResult:
    """Sentiment of a single text; recomputed on demand, never stored on a turn"""
    sentiment: SentimentClass
    intensity: float  # 0.0 to 1.0
    confidence: float  # 0.0 to 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentiment": self.sentiment.value,
            "intensity": self.intensity,
            "confidence": self.confidence
        }


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


@dataclass(frozen=True)
class VoiceParameterAdjustment:
    """Bounded deltas to apply on top of a persona's base synthesis parameters"""
    stability_delta: float
    similarity_delta: float
    rationale: str = ""

    def apply_to(self, stability: float, similarity: float) -> Tuple[float, float]:
        """Return the adjusted (stability, similarity) pair, each clamped to [0, 1]"""
        return (
            clamp01(stability + self.stability_delta),
            clamp01(similarity + self.similarity_delta)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stability_delta": self.stability_delta,
            "similarity_delta": self.similarity_delta,
            "rationale": self.rationale
        }
