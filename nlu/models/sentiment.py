"""Sentiment models for NLU."""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict

from config.constants import POSITIVE_THRESHOLD, NEGATIVE_THRESHOLD


class SentimentLabel(Enum):
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"

    @classmethod
    def from_score(cls, score: float) -> "SentimentLabel":
        """Метка по порогам: > 0.3 позитив, < -0.3 негатив, иначе нейтрально."""
        if score > POSITIVE_THRESHOLD:
            return cls.POSITIVE
        if score < NEGATIVE_THRESHOLD:
            return cls.NEGATIVE
        return cls.NEUTRAL


@dataclass(frozen=True)
class SentimentResult:
    """
    Грубая оценка тональности.

    Attributes:
        score: Оценка в диапазоне [-1, 1]
        label: Метка тональности
    """
    score: float
    label: SentimentLabel

    @classmethod
    def from_score(cls, score: float) -> "SentimentResult":
        return cls(score=score, label=SentimentLabel.from_score(score))

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "label": self.label.value}
