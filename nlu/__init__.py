"""
NLU (Natural Language Understanding) модуль.

Обеспечивает понимание сообщений посетителей сайта:
- Классификация намерений (intents) по правилам
- Извлечение сущностей (entities) регулярными выражениями
- Оценка тональности по словарю
- Выбор готового ответа
- Управление обучающим корпусом
"""

from .models import (
    Intent,
    Entity,
    SentimentResult,
    NlpResult,
    TrainingExample,
    TrainingData,
    NlpModel,
)
from .responses import ResponseSelector
from .pipeline import NLUPipeline
from .training_manager import TrainingDataManager, OperationResult

__all__ = [
    # Models
    "Intent",
    "Entity",
    "SentimentResult",
    "NlpResult",
    "TrainingExample",
    "TrainingData",
    "NlpModel",
    # Pipeline
    "ResponseSelector",
    "NLUPipeline",
    "TrainingDataManager",
    "OperationResult",
]
