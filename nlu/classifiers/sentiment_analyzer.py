"""
Lexicon-based sentiment analyzer.

Грубая оценка тональности по словарю, используется только для аналитики.
"""

import re
from typing import FrozenSet, Iterable, Optional

from config.constants import SENTIMENT_STEP
from nlu.models import SentimentResult

POSITIVE_WORDS = frozenset({
    'great', 'good', 'excellent', 'amazing', 'love', 'like', 'helpful', 'thanks',
})

# "not working" не может совпасть с одним токеном, оставлено в словаре как есть
NEGATIVE_WORDS = frozenset({
    'bad', 'poor', 'terrible', 'hate', 'dislike', 'problem', 'issue', 'not working',
})

TOKEN_SPLIT = re.compile(r'\W+')


class LexiconSentimentAnalyzer:
    """Подсчёт позитивных и негативных слов с шагом 0.2."""

    def __init__(
        self,
        positive_words: Optional[Iterable[str]] = None,
        negative_words: Optional[Iterable[str]] = None,
        step: float = SENTIMENT_STEP,
    ):
        self.positive_words: FrozenSet[str] = (
            frozenset(positive_words) if positive_words is not None else POSITIVE_WORDS
        )
        self.negative_words: FrozenSet[str] = (
            frozenset(negative_words) if negative_words is not None else NEGATIVE_WORDS
        )
        self.step = step

    def score(self, text: str) -> SentimentResult:
        score = 0.0
        for token in TOKEN_SPLIT.split(text.lower()):
            if token in self.positive_words:
                score += self.step
            if token in self.negative_words:
                score -= self.step

        score = max(-1.0, min(1.0, score))
        return SentimentResult.from_score(score)
