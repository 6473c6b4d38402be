"""Maps sentiment and personality to bounded synthesis parameter deltas.

The calculation has two layers:
1. Base deltas from the sentiment class, scaled by intensity
2. A per-personality modifier added on top (some only for one sentiment class)

The sum is clamped to the stability/similarity limits no matter how large
the unclamped value is.
"""
from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass, replace

from ..models.persona import PersonalityTag
from ..models.sentiment import (
    SIMILARITY_DELTA_LIMIT,
    STABILITY_DELTA_LIMIT,
    SentimentClass,
    SentimentResult,
    VoiceParameterAdjustment,
    clamp,
)


@dataclass(frozen=True)
class PersonalityModifier:
    """Additive tweaks a personality applies after the sentiment rule"""
    stability: float = 0.0
    similarity: float = 0.0
    stability_if_positive: float = 0.0
    stability_if_negative: float = 0.0
    note: str = ""


DEFAULT_MODIFIERS: Dict[PersonalityTag, PersonalityModifier] = {
    PersonalityTag.CHEERFUL: PersonalityModifier(
        stability_if_negative=0.1,
        note="Cheerful personality maintains some optimism even in negative content"),
    PersonalityTag.ROMANTIC: PersonalityModifier(
        stability=0.05, similarity=0.05,
        note="Romantic personality adds warmth and smoothness"),
    PersonalityTag.UNHINGED: PersonalityModifier(
        stability=-0.2,
        note="Unhinged personality amplifies emotional instability"),
    PersonalityTag.SARCASTIC: PersonalityModifier(
        stability_if_positive=-0.1,
        note="Sarcastic personality adds edge even to positive content"),
    PersonalityTag.WISE: PersonalityModifier(
        stability=0.1,
        note="Wise personality maintains composure and clarity"),
    PersonalityTag.MYSTERIOUS: PersonalityModifier(),
    PersonalityTag.AGGRESSIVE: PersonalityModifier(),
    PersonalityTag.GENTLE: PersonalityModifier(
        stability=0.1,
        note="Gentle personality keeps delivery soft and even"),
    PersonalityTag.CONFIDENT: PersonalityModifier(),
    PersonalityTag.PLAYFUL: PersonalityModifier(),
    PersonalityTag.MELANCHOLIC: PersonalityModifier(),
    PersonalityTag.AUTHORITATIVE: PersonalityModifier(),
}


class VoiceParameterAdvisor:
    """Recommends stability/similarity adjustments for a line of speech"""

    def __init__(self, modifiers: Optional[Mapping[PersonalityTag, PersonalityModifier]] = None):
        self.modifiers: Dict[PersonalityTag, PersonalityModifier] = dict(DEFAULT_MODIFIERS)
        if modifiers:
            self.modifiers.update(modifiers)

    @classmethod
    def from_config(cls, overrides: Optional[Mapping[str, Mapping[str, Any]]]) -> 'VoiceParameterAdvisor':
        """Build an advisor from `voice_modifiers` config entries

        Each entry is keyed by personality name and only overrides the
        fields it names.
        """
        modifiers = {}
        for name, values in (overrides or {}).items():
            tag = PersonalityTag.parse(name)
            modifiers[tag] = _merge(DEFAULT_MODIFIERS[tag], values or {})
        return cls(modifiers)

    def recommend(self, sentiment: SentimentResult, personality: PersonalityTag) -> VoiceParameterAdjustment:
        mood, intensity = sentiment.sentiment, sentiment.intensity

        if mood is SentimentClass.POSITIVE:
            stability = intensity * 0.2
            similarity = intensity * 0.1
            reasons = ["Positive sentiment suggests higher stability for clearer expression"]
        elif mood is SentimentClass.NEGATIVE:
            stability = -intensity * 0.3
            similarity = -intensity * 0.05
            reasons = ["Negative sentiment benefits from lower stability for emotional depth"]
        else:
            stability = 0.1
            similarity = 0.0
            reasons = ["Neutral sentiment uses balanced settings for clear delivery"]

        modifier = self.modifiers[personality]
        stability += modifier.stability
        similarity += modifier.similarity
        if mood is SentimentClass.POSITIVE:
            stability += modifier.stability_if_positive
        elif mood is SentimentClass.NEGATIVE:
            stability += modifier.stability_if_negative

        applies = (modifier.stability or modifier.similarity
                   or (mood is SentimentClass.POSITIVE and modifier.stability_if_positive)
                   or (mood is SentimentClass.NEGATIVE and modifier.stability_if_negative))
        if applies and modifier.note:
            reasons.append(modifier.note)

        return VoiceParameterAdjustment(
            stability_delta=round(clamp(stability, -STABILITY_DELTA_LIMIT, STABILITY_DELTA_LIMIT), 2),
            similarity_delta=round(clamp(similarity, -SIMILARITY_DELTA_LIMIT, SIMILARITY_DELTA_LIMIT), 2),
            rationale=". ".join(reasons)
        )


def _merge(base: PersonalityModifier, values: Mapping[str, Any]) -> PersonalityModifier:
    known = {k: v for k, v in values.items() if k in PersonalityModifier.__dataclass_fields__}
    return replace(base, **known)
