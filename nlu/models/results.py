"""Result of a single text analysis."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .intents import Intent
from .entities import Entity
from .sentiment import SentimentResult


@dataclass
class NlpResult:
    """
    Результат анализа высказывания.

    Создаётся заново на каждый вызов, движком не сохраняется.

    Attributes:
        text: Исходный текст
        intents: Кандидаты намерений по убыванию уверенности
        entities: Извлечённые сущности
        sentiment: Оценка тональности
    """
    text: str
    intents: List[Intent]
    sentiment: SentimentResult
    entities: List[Entity] = field(default_factory=list)

    @property
    def top_intent(self) -> Intent:
        """Лучший кандидат (позиция 0)."""
        return self.intents[0] if self.intents else Intent.fallback()

    def get_by_type(self, entity_type: str) -> List[Entity]:
        """Получить все сущности определённого типа."""
        return [e for e in self.entities if e.type == entity_type]

    def get_first(self, entity_type: str) -> Optional[Entity]:
        """Получить первую сущность определённого типа."""
        entities = self.get_by_type(entity_type)
        return entities[0] if entities else None

    def has_type(self, entity_type: str) -> bool:
        """Проверить наличие сущности определённого типа."""
        return any(e.type == entity_type for e in self.entities)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "intents": [intent.to_dict() for intent in self.intents],
            "entities": [entity.to_dict() for entity in self.entities],
            "sentiment": self.sentiment.to_dict(),
        }
