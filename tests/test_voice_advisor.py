"""Tests for the voice parameter advisor."""

import pytest

from voice_roundtable.analysis import DEFAULT_MODIFIERS, PersonalityModifier, VoiceParameterAdvisor
from voice_roundtable.models import PersonalityTag, SentimentClass, SentimentResult


def sentiment(mood: SentimentClass, intensity: float = 1.0) -> SentimentResult:
    return SentimentResult(mood, intensity, 1.0)


@pytest.fixture
def advisor():
    return VoiceParameterAdvisor()


class TestBaseRule:
    """Tests for the sentiment-class deltas."""

    def test_positive(self, advisor):
        """Test positive sentiment on a personality without modifiers."""
        adjustment = advisor.recommend(sentiment(SentimentClass.POSITIVE, 0.5), PersonalityTag.PLAYFUL)

        assert adjustment.stability_delta == 0.1
        assert adjustment.similarity_delta == 0.05

    def test_negative(self, advisor):
        """Test negative sentiment on a personality without modifiers."""
        adjustment = advisor.recommend(sentiment(SentimentClass.NEGATIVE, 1.0), PersonalityTag.CONFIDENT)

        assert adjustment.stability_delta == -0.3
        assert adjustment.similarity_delta == -0.05

    def test_neutral(self, advisor):
        """Test neutral sentiment ignores intensity."""
        adjustment = advisor.recommend(sentiment(SentimentClass.NEUTRAL, 0.2), PersonalityTag.MYSTERIOUS)

        assert adjustment.stability_delta == 0.1
        assert adjustment.similarity_delta == 0.0
        assert "Neutral" in adjustment.rationale


class TestPersonalityModifiers:
    """Tests for the per-personality table."""

    def test_unhinged_always_less_stable(self, advisor):
        """Test unhinged subtracts stability on top of the base rule."""
        adjustment = advisor.recommend(sentiment(SentimentClass.NEUTRAL), PersonalityTag.UNHINGED)

        assert adjustment.stability_delta == -0.1
        assert "Unhinged" in adjustment.rationale

    def test_wise_and_gentle_add_stability(self, advisor):
        """Test the calming personalities."""
        for tag in (PersonalityTag.WISE, PersonalityTag.GENTLE):
            adjustment = advisor.recommend(sentiment(SentimentClass.NEUTRAL), tag)
            assert adjustment.stability_delta == 0.2

    def test_sarcastic_only_on_positive(self, advisor):
        """Test sarcastic adds an edge to upbeat text only."""
        positive = advisor.recommend(sentiment(SentimentClass.POSITIVE, 0.5), PersonalityTag.SARCASTIC)
        negative = advisor.recommend(sentiment(SentimentClass.NEGATIVE, 0.5), PersonalityTag.SARCASTIC)

        assert positive.stability_delta == 0.0
        assert "Sarcastic" in positive.rationale
        assert negative.stability_delta == -0.15
        assert "Sarcastic" not in negative.rationale

    def test_cheerful_softens_negative(self, advisor):
        """Test cheerful adds stability back for negative text."""
        adjustment = advisor.recommend(sentiment(SentimentClass.NEGATIVE, 1.0), PersonalityTag.CHEERFUL)

        assert adjustment.stability_delta == -0.2

    def test_romantic_adds_warmth(self, advisor):
        """Test romantic raises both parameters."""
        adjustment = advisor.recommend(sentiment(SentimentClass.NEUTRAL), PersonalityTag.ROMANTIC)

        assert adjustment.stability_delta == 0.15
        assert adjustment.similarity_delta == 0.05

    def test_table_covers_every_tag(self):
        """Test the default table is exhaustive."""
        assert set(DEFAULT_MODIFIERS) == set(PersonalityTag)


class TestClamping:
    """Tests for the delta bounds."""

    def test_extreme_modifiers_are_clamped(self):
        """Test pathological modifiers stay within the limits."""
        advisor = VoiceParameterAdvisor({
            PersonalityTag.AGGRESSIVE: PersonalityModifier(stability=-5.0, similarity=-5.0),
            PersonalityTag.CONFIDENT: PersonalityModifier(stability=5.0, similarity=5.0),
        })

        low = advisor.recommend(sentiment(SentimentClass.NEGATIVE), PersonalityTag.AGGRESSIVE)
        high = advisor.recommend(sentiment(SentimentClass.POSITIVE), PersonalityTag.CONFIDENT)

        assert (low.stability_delta, low.similarity_delta) == (-0.4, -0.2)
        assert (high.stability_delta, high.similarity_delta) == (0.4, 0.2)

    def test_all_inputs_stay_in_bounds(self, advisor):
        """Test every class, tag and intensity combination."""
        for mood in SentimentClass:
            for tag in PersonalityTag:
                for intensity in (0.0, 0.5, 1.0):
                    adjustment = advisor.recommend(sentiment(mood, intensity), tag)
                    assert -0.4 <= adjustment.stability_delta <= 0.4
                    assert -0.2 <= adjustment.similarity_delta <= 0.2

    def test_apply_to_clamps_to_unit_interval(self, advisor):
        """Test applying deltas never leaves [0, 1]."""
        adjustment = advisor.recommend(sentiment(SentimentClass.POSITIVE), PersonalityTag.PLAYFUL)

        assert adjustment.apply_to(0.95, 0.95) == (1.0, 1.0)


class TestFromConfig:
    """Tests for building an advisor from config overrides."""

    def test_override_merges_with_default(self):
        """Test that only the named fields change."""
        advisor = VoiceParameterAdvisor.from_config({"wise": {"stability": 0.3}})

        modifier = advisor.modifiers[PersonalityTag.WISE]
        assert modifier.stability == 0.3
        assert modifier.note == DEFAULT_MODIFIERS[PersonalityTag.WISE].note

    def test_unknown_personality_rejected(self):
        """Test that a misspelled tag fails loudly."""
        with pytest.raises(ValueError):
            VoiceParameterAdvisor.from_config({"wize": {"stability": 0.3}})

    def test_empty_config(self):
        """Test that no overrides gives the defaults."""
        assert VoiceParameterAdvisor.from_config(None).modifiers == DEFAULT_MODIFIERS
