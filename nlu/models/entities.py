"""Entity models for NLU."""

from enum import Enum
from typing import Any, Dict
from dataclasses import dataclass


class BuiltinEntityType(Enum):
    """
    Встроенные типы сущностей.
    """
    ATTRIBUTE = "attribute"      # Характеристика продукта (features, pricing)
    PLATFORM = "platform"        # Платформа (website, mobile, ios)
    TASK = "task"                # Действие (setup, install, integrate)
    PRODUCT = "product"          # Продукт (chatbot, assistant)
    PERSON = "person"            # Человек (agent, representative)
    COMPANY = "company"          # Организация (company, business)

    @classmethod
    def names(cls) -> list:
        """Типы сущностей в порядке каталога."""
        return [entity_type.value for entity_type in cls]


@dataclass(frozen=True)
class Entity:
    """
    Сущность, извлечённая из текста.

    Attributes:
        type: Тип сущности (строка из каталога)
        value: Исходное значение из текста, value == text[start:end]
        start: Начальная позиция в тексте
        end: Конечная позиция в тексте (не включительно)
    """
    type: str
    value: str
    start: int
    end: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "value": self.value,
            "start": self.start,
            "end": self.end,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entity":
        return cls(
            type=data["type"],
            value=data["value"],
            start=int(data["start"]),
            end=int(data["end"]),
        )
