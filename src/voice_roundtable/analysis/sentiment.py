"""Lexical sentiment scoring.

Each lexicon hit counts 1.0, or 1.5 right after an intensifier ("very",
"absolutely", ...) and 0.7 right after a diminisher ("slightly", "a bit", ...).
The class is decided from the net/total ratio with a +/-0.2 dead zone.
"""
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.sentiment import SentimentClass, SentimentResult

POSITIVE_WORDS = frozenset([
    "amazing", "awesome", "beautiful", "brilliant", "excellent", "fantastic", "great", "happy",
    "incredible", "joy", "love", "magnificent", "outstanding", "perfect", "wonderful", "delighted",
    "thrilled", "excited", "cheerful", "optimistic", "pleased", "satisfied", "glad", "grateful",
    "blessed", "fortunate", "lucky", "proud", "confident", "hopeful", "inspired", "motivated",
])

NEGATIVE_WORDS = frozenset([
    "awful", "bad", "terrible", "horrible", "disgusting", "hate", "angry", "frustrated",
    "disappointed", "sad", "depressed", "upset", "annoyed", "furious", "enraged", "devastated",
    "heartbroken", "miserable", "pathetic", "worthless", "useless", "hopeless", "defeated",
    "discouraged", "worried", "anxious", "scared", "fearful", "nervous", "stressed", "overwhelmed",
])

INTENSIFIERS = frozenset(["very", "extremely", "incredibly", "absolutely", "totally", "completely", "utterly"])
DIMINISHERS = ("slightly", "somewhat", "kind of", "sort of", "a bit", "a little")

INTENSIFIER_WEIGHT = 1.5
DIMINISHER_WEIGHT = 0.7
CLASS_THRESHOLD = 0.2

_TOKEN_RE = re.compile(r"\b\w+\b")


def tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(text.lower())


class SentimentAnalyzer:
    """Scores text against fixed positive/negative word sets.

    `analyze` is total: it never raises and is deterministic for a given
    lexicon and input.
    """

    def __init__(
        self,
        positive_words: Optional[Iterable[str]] = None,
        negative_words: Optional[Iterable[str]] = None,
        intensifiers: Optional[Iterable[str]] = None,
        diminishers: Optional[Iterable[str]] = None
    ):
        self.positive_words = frozenset(positive_words) if positive_words is not None else POSITIVE_WORDS
        self.negative_words = frozenset(negative_words) if negative_words is not None else NEGATIVE_WORDS
        self.intensifiers = frozenset(intensifiers) if intensifiers is not None else INTENSIFIERS
        phrases = diminishers if diminishers is not None else DIMINISHERS
        self._diminishers: Tuple[Tuple[str, ...], ...] = tuple(tuple(p.split()) for p in phrases)

    def _multiplier(self, tokens: Sequence[str], index: int) -> float:
        if index == 0:
            return 1.0
        if tokens[index - 1] in self.intensifiers:
            return INTENSIFIER_WEIGHT
        for phrase in self._diminishers:
            start = index - len(phrase)
            if start >= 0 and tuple(tokens[start:index]) == phrase:
                return DIMINISHER_WEIGHT
        return 1.0

    def analyze(self, text: Optional[str]) -> SentimentResult:
        tokens = tokenize(text or "")

        positive_score = 0.0
        negative_score = 0.0
        for i, token in enumerate(tokens):
            if token in self.positive_words:
                positive_score += self._multiplier(tokens, i)
            elif token in self.negative_words:
                negative_score += self._multiplier(tokens, i)

        total = positive_score + negative_score
        net = positive_score - negative_score

        if total == 0:
            return SentimentResult(SentimentClass.NEUTRAL, 0.0, 0.5)

        ratio = net / total
        confidence = min(total / max(len(tokens) * 0.1, 1), 1)

        if ratio > CLASS_THRESHOLD:
            sentiment, intensity = SentimentClass.POSITIVE, min(ratio, 1)
        elif ratio < -CLASS_THRESHOLD:
            sentiment, intensity = SentimentClass.NEGATIVE, min(abs(ratio), 1)
        else:
            sentiment, intensity = SentimentClass.NEUTRAL, abs(ratio)

        return SentimentResult(sentiment, round(intensity, 2), round(confidence, 2))
