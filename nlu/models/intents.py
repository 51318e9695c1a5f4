"""Intent models for NLU."""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict

from config.constants import DEFAULT_INTENT_NAME, DEFAULT_INTENT_CONFIDENCE


class BuiltinIntent(Enum):
    """
    Встроенный каталог намерений посетителя сайта.

    Порядок элементов совпадает с порядком оценки правил классификатора.

    Attributes:
        PRODUCT_INFO: Вопросы о продукте и его возможностях
        PRICING: Цены, тарифы, подписка
        IMPLEMENTATION: Установка и интеграция на сайт
        SUPPORT: Запрос помощи, проблемы
        GREETING: Приветствие
        GOODBYE: Прощание, благодарность
        LEAD_GENERATION: Контакт с отделом продаж, демо, пробный период
    """
    PRODUCT_INFO = "product_info"
    PRICING = "pricing"
    IMPLEMENTATION = "implementation"
    SUPPORT = "support"
    GREETING = "greeting"
    GOODBYE = "goodbye"
    LEAD_GENERATION = "lead_generation"

    @classmethod
    def names(cls) -> list:
        """Имена намерений в порядке каталога."""
        return [intent.value for intent in cls]


DEFAULT_INTENT = DEFAULT_INTENT_NAME


@dataclass(frozen=True)
class Intent:
    """
    Кандидат намерения с уверенностью.

    Attributes:
        name: Имя намерения из каталога (или "default")
        confidence: Уверенность (0.0 - 1.0)
    """
    name: str
    confidence: float

    @classmethod
    def fallback(cls) -> "Intent":
        """Намерение по умолчанию, когда ни одно правило не сработало."""
        return cls(DEFAULT_INTENT_NAME, DEFAULT_INTENT_CONFIDENCE)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "confidence": self.confidence}
