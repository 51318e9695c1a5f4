"""NLU Models - dataclasses для работы с NLU."""

from .intents import BuiltinIntent, Intent, DEFAULT_INTENT
from .entities import BuiltinEntityType, Entity
from .sentiment import SentimentLabel, SentimentResult
from .results import NlpResult
from .training import (
    TrainingExample,
    TrainingData,
    NlpModel,
    default_training_data,
    default_model,
    utc_now_iso,
)
from .context import ChatMessage, ChatSession, MessageRole, UserInfo

__all__ = [
    "BuiltinIntent",
    "Intent",
    "DEFAULT_INTENT",
    "BuiltinEntityType",
    "Entity",
    "SentimentLabel",
    "SentimentResult",
    "NlpResult",
    "TrainingExample",
    "TrainingData",
    "NlpModel",
    "default_training_data",
    "default_model",
    "utc_now_iso",
    "ChatMessage",
    "ChatSession",
    "MessageRole",
    "UserInfo",
]
