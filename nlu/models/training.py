"""Training corpus and model catalog models."""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from .intents import BuiltinIntent
from .entities import BuiltinEntityType, Entity


def utc_now_iso() -> str:
    """Текущее время в ISO-8601 (UTC)."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class TrainingExample:
    """
    Пример для обучающего корпуса.

    Attributes:
        id: Идентификатор примера
        text: Текст высказывания
        intent: Размеченное намерение
        entities: Размеченные сущности
    """
    id: str
    text: str
    intent: str
    entities: List[Entity] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "intent": self.intent,
            "entities": [e.to_dict() for e in self.entities],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingExample":
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            text=data["text"],
            intent=data["intent"],
            entities=[Entity.from_dict(e) for e in data.get("entities", [])],
        )


@dataclass
class TrainingData:
    """
    Обучающий корпус и каталоги.

    Каталоги intents/entity_types только пополняются.
    """
    examples: List[TrainingExample] = field(default_factory=list)
    intents: List[str] = field(default_factory=list)
    entity_types: List[str] = field(default_factory=list)
    last_updated: str = field(default_factory=utc_now_iso)

    def register_catalog_names(self, intent: str, entities: List[Entity]):
        """Добавить в каталоги новые имена намерения и типов сущностей."""
        if intent not in self.intents:
            self.intents.append(intent)
        for entity in entities:
            if entity.type not in self.entity_types:
                self.entity_types.append(entity.type)

    def find_index(self, example_id: str) -> int:
        """Индекс примера по id, -1 если не найден."""
        for index, example in enumerate(self.examples):
            if example.id == example_id:
                return index
        return -1

    def copy(self) -> "TrainingData":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "examples": [e.to_dict() for e in self.examples],
            "intents": list(self.intents),
            "entityTypes": list(self.entity_types),
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingData":
        return cls(
            examples=[TrainingExample.from_dict(e) for e in data["examples"]],
            intents=list(data.get("intents") or []),
            entity_types=list(data.get("entityTypes") or []),
            last_updated=data.get("lastUpdated") or utc_now_iso(),
        )


@dataclass
class NlpModel:
    """
    Метаданные модели и каталог, по которому работает движок.

    Attributes:
        id: Идентификатор модели
        name: Название
        description: Описание
        last_trained: Время последнего "обучения" (ISO-8601)
        accuracy: Заявленная точность
        examples: Примеры, на которых модель "обучена"
        intents: Каталог намерений (порядок оценки правил)
        entity_types: Каталог типов сущностей (порядок извлечения)
    """
    id: str
    name: str
    description: str
    last_trained: str
    accuracy: float
    examples: List[TrainingExample] = field(default_factory=list)
    intents: List[str] = field(default_factory=list)
    entity_types: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "lastTrained": self.last_trained,
            "accuracy": self.accuracy,
            "examples": [e.to_dict() for e in self.examples],
            "intents": list(self.intents),
            "entityTypes": list(self.entity_types),
        }


def _seed_examples() -> List[TrainingExample]:
    return [
        TrainingExample(
            id="1",
            text="I want to know more about your product features",
            intent="product_info",
            entities=[Entity("attribute", "features", 39, 47)],
        ),
        TrainingExample(
            id="2",
            text="What are your pricing plans?",
            intent="pricing",
        ),
        TrainingExample(
            id="3",
            text="How do I implement ConnectAI on my website?",
            intent="implementation",
            entities=[Entity("platform", "website", 35, 42)],
        ),
        TrainingExample(
            id="4",
            text="I need help setting up the chatbot",
            intent="support",
            entities=[
                Entity("task", "setting up", 12, 22),
                Entity("product", "chatbot", 27, 34),
            ],
        ),
        TrainingExample(
            id="5",
            text="Can you tell me about your AI capabilities?",
            intent="product_info",
            entities=[Entity("attribute", "AI capabilities", 27, 42)],
        ),
    ]


def default_training_data() -> TrainingData:
    """Стартовый корпус с примерами и встроенными каталогами."""
    return TrainingData(
        examples=_seed_examples(),
        intents=BuiltinIntent.names(),
        entity_types=BuiltinEntityType.names(),
    )


def default_model() -> NlpModel:
    """Стартовая модель, "обученная" вчера на стартовом корпусе."""
    data = default_training_data()
    yesterday = datetime.now(timezone.utc) - timedelta(days=1)
    return NlpModel(
        id="1",
        name="ConnectAI Core NLP",
        description="Core model for intent detection and entity extraction",
        last_trained=yesterday.isoformat(),
        accuracy=0.87,
        examples=data.examples,
        intents=data.intents,
        entity_types=data.entity_types,
    )
