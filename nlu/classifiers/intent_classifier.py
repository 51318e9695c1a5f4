"""
Rule-based Intent Classifier.

Классификатор намерений на основе ключевых слов.
Каждое правило при срабатывании даёт фиксированную уверенность.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from nlu.models import Intent
from utils.logger import setup_logger

logger = setup_logger(name="intent_classifier", level=logging.INFO)


@dataclass(frozen=True)
class IntentRule:
    """
    Правило для одного намерения.

    Attributes:
        keywords: Подстроки, любая из которых включает правило
        confidence: Фиксированная уверенность при срабатывании
        exact_phrases: Высказывания целиком, которые тоже включают правило
    """
    keywords: Tuple[str, ...]
    confidence: float
    exact_phrases: Tuple[str, ...] = ()

    def matches(self, text_lower: str) -> bool:
        if any(keyword in text_lower for keyword in self.keywords):
            return True
        return text_lower in self.exact_phrases


DEFAULT_INTENT_RULES: Dict[str, IntentRule] = {
    "product_info": IntentRule(
        keywords=("product", "feature", "capability", "tell me about", "what is", "how does"),
        confidence=0.8,
    ),
    "pricing": IntentRule(
        keywords=("price", "cost", "subscription", "plan", "payment", "how much"),
        confidence=0.9,
    ),
    "implementation": IntentRule(
        keywords=("implement", "setup", "install", "integrate", "add to", "website"),
        confidence=0.85,
    ),
    "support": IntentRule(
        keywords=("help", "support", "issue", "problem", "trouble", "doesn't work"),
        confidence=0.75,
    ),
    "greeting": IntentRule(
        keywords=("hi", "hello", "hey"),
        confidence=0.95,
        exact_phrases=("hey", "hi", "hello"),
    ),
    "goodbye": IntentRule(
        keywords=("bye", "goodbye", "thank", "thanks"),
        confidence=0.9,
        exact_phrases=("bye", "thanks"),
    ),
    "lead_generation": IntentRule(
        keywords=("talk to", "contact", "sales", "demo", "trial", "representative"),
        confidence=0.85,
    ),
}


class RuleBasedIntentClassifier:
    """
    Классификатор намерений на основе правил.

    Правила ищутся по имени намерения из каталога. Имена без правила
    (например, добавленные через обучающий корпус) никогда не срабатывают.
    """

    def __init__(self, rules: Optional[Dict[str, IntentRule]] = None):
        self.rules = dict(rules) if rules is not None else dict(DEFAULT_INTENT_RULES)

    def has_rule(self, intent_name: str) -> bool:
        return intent_name in self.rules

    def classify(self, text: str, catalog: Iterable[str]) -> List[Intent]:
        """
        Классифицировать высказывание.

        Args:
            text: Текст сообщения (может быть пустым)
            catalog: Имена намерений в порядке оценки

        Returns:
            Кандидаты по убыванию уверенности; при равенстве сохраняется
            порядок каталога. Если ничего не сработало - [default 0.3].
        """
        text_lower = text.lower()
        candidates: List[Intent] = []

        for intent_name in catalog:
            rule = self.rules.get(intent_name)
            if rule is None:
                continue
            if rule.matches(text_lower):
                candidates.append(Intent(intent_name, rule.confidence))

        if not candidates:
            logger.debug(f"Ни одно правило не сработало: '{text[:50]}'")
            return [Intent.fallback()]

        # sorted() стабилен - равные уверенности остаются в порядке каталога
        return sorted(candidates, key=lambda intent: intent.confidence, reverse=True)
