"""
Rule-based Entity Extractor.

Извлекатель сущностей на основе регулярных выражений.
"""

import logging
import re
from re import Pattern
from typing import Dict, Iterable, List, Optional

from nlu.models import Entity
from utils.logger import setup_logger

logger = setup_logger(name="entity_extractor", level=logging.INFO)


DEFAULT_ENTITY_PATTERNS: Dict[str, str] = {
    "attribute": r"features|capabilities|pricing|performance",
    "platform": r"website|app|mobile|android|ios|web",
    "task": r"setting up|set up|setup|configure|install|implement|integrate",
    "product": r"chatbot|assistant|ai|connectai",
    "person": r"agent|representative|human|person",
    "company": r"company|business|enterprise|organization",
}


class RuleBasedEntityExtractor:
    """
    Правило-ориентированный извлекатель сущностей.

    Пересекающиеся совпадения разных типов не дедуплицируются:
    один и тот же фрагмент может получить несколько типов.
    """

    def __init__(self, patterns: Optional[Dict[str, str]] = None):
        self.patterns = self._compile_patterns(
            patterns if patterns is not None else DEFAULT_ENTITY_PATTERNS
        )

    @staticmethod
    def _compile_patterns(patterns: Dict[str, str]) -> Dict[str, Pattern]:
        return {
            entity_type: re.compile(pattern, re.IGNORECASE)
            for entity_type, pattern in patterns.items()
        }

    def has_pattern(self, entity_type: str) -> bool:
        return entity_type in self.patterns

    def extract(self, text: str, entity_types: Iterable[str]) -> List[Entity]:
        """
        Извлечь сущности из текста.

        Args:
            text: Исходный текст (регистр сохраняется)
            entity_types: Типы сущностей в порядке каталога

        Returns:
            Сущности, сгруппированные по типу в порядке каталога,
            внутри типа - слева направо
        """
        entities: List[Entity] = []

        for entity_type in entity_types:
            pattern = self.patterns.get(entity_type)
            if pattern is None:
                continue
            for match in pattern.finditer(text):
                entities.append(Entity(
                    type=entity_type,
                    value=match.group(0),
                    start=match.start(),
                    end=match.end(),
                ))

        if entities:
            logger.debug(f"Извлечено {len(entities)} сущностей")
        return entities
