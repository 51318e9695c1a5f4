"""
NLU Pipeline - основной пайплайн обработки сообщений.

Объединяет классификацию намерений, извлечение сущностей,
оценку тональности и выбор ответа.
"""

import copy
import logging
import random
from datetime import datetime, timezone
from typing import Optional, Tuple

from config.constants import MAX_MODEL_ACCURACY, MAX_ACCURACY_GAIN
from nlu.models import NlpModel, NlpResult, TrainingData, default_model
from nlu.classifiers import (
    RuleBasedIntentClassifier,
    RuleBasedEntityExtractor,
    LexiconSentimentAnalyzer,
)
from nlu.responses import ResponseSelector
from utils.logger import setup_logger

logger = setup_logger(name="nlu_pipeline", level=logging.INFO)


class NLUPipeline:
    """
    Главный пайплайн обработки естественного языка.

    Создаётся один раз при старте и передаётся тем, кто его использует.
    Таблицы правил и словари только читаются; analyze/respond не меняют
    состояние пайплайна.

    Использует:
    - RuleBasedIntentClassifier для намерений
    - RuleBasedEntityExtractor для сущностей
    - LexiconSentimentAnalyzer для тональности
    - ResponseSelector для ответа
    """

    def __init__(
        self,
        model: Optional[NlpModel] = None,
        intent_classifier: Optional[RuleBasedIntentClassifier] = None,
        entity_extractor: Optional[RuleBasedEntityExtractor] = None,
        sentiment_analyzer: Optional[LexiconSentimentAnalyzer] = None,
        response_selector: Optional[ResponseSelector] = None,
        rng: Optional[random.Random] = None,
    ):
        self.model = model or default_model()
        self.intent_classifier = intent_classifier or RuleBasedIntentClassifier()
        self.entity_extractor = entity_extractor or RuleBasedEntityExtractor()
        self.sentiment_analyzer = sentiment_analyzer or LexiconSentimentAnalyzer()
        self.rng = rng or random.Random()
        self.response_selector = response_selector or ResponseSelector(rng=self.rng)

    def analyze(self, text: str) -> NlpResult:
        """
        Проанализировать высказывание.

        Args:
            text: Текст сообщения

        Returns:
            NlpResult с намерениями, сущностями и тональностью
        """
        intents = self.intent_classifier.classify(text, self.model.intents)
        entities = self.entity_extractor.extract(text, self.model.entity_types)
        sentiment = self.sentiment_analyzer.score(text)

        return NlpResult(
            text=text,
            intents=intents,
            entities=entities,
            sentiment=sentiment,
        )

    def respond(self, result: NlpResult) -> str:
        """Выбрать ответ по результату анализа."""
        return self.response_selector.respond(result)

    def process_and_respond(self, text: str) -> Tuple[NlpResult, str]:
        """Анализ и ответ за один вызов."""
        result = self.analyze(text)
        response = self.respond(result)
        logger.debug(
            f"'{text[:50]}' -> {result.top_intent.name} "
            f"({result.top_intent.confidence:.2f}), {len(result.entities)} entities"
        )
        return result, response

    def get_model(self) -> NlpModel:
        """Копия текущей модели."""
        return copy.deepcopy(self.model)

    def apply_training(self, training_data: TrainingData) -> NlpModel:
        """
        "Обучить" модель на корпусе (имитация).

        Обновляет метаданные и копирует каталоги из корпуса. Новые имена
        попадают в каталог, но правил сопоставления для них нет.

        Args:
            training_data: Текущий обучающий корпус

        Returns:
            Копия новой модели
        """
        accuracy = min(
            MAX_MODEL_ACCURACY,
            self.model.accuracy + self.rng.random() * MAX_ACCURACY_GAIN,
        )
        data = training_data.copy()

        self.model = NlpModel(
            id=self.model.id,
            name=self.model.name,
            description=self.model.description,
            last_trained=datetime.now(timezone.utc).isoformat(),
            accuracy=accuracy,
            examples=data.examples,
            intents=data.intents,
            entity_types=data.entity_types,
        )

        unmatched = [
            name for name in self.model.intents
            if not self.intent_classifier.has_rule(name)
        ]
        if unmatched:
            logger.info(f"Намерения без правил сопоставления: {', '.join(unmatched)}")
        logger.info(
            f"Модель обновлена: {len(data.examples)} примеров, точность {accuracy:.3f}"
        )
        return self.get_model()
