"""
API Service - сервисный слой для виджета и админ-панели.

Имитирует сетевой API: каждая операция выдерживает искусственную задержку
и возвращает ApiResponse. Неожиданные ошибки перехватываются здесь,
логируются и превращаются в ответ с success=False.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from config.constants import DEFAULT_ANALYTICS_DAYS
from nlu.models import Entity
from nlu.pipeline import NLUPipeline
from nlu.training_manager import TrainingDataManager
from utils.error_handler import ApiResponse, ErrorHandler
from utils.logger import setup_logger
from utils.metrics import MetricsCollector, track_operation

logger = setup_logger(name="api_service", level=logging.INFO)


def _parse_entities(entities: Optional[List[Dict[str, Any]]]) -> List[Entity]:
    return [Entity.from_dict(e) for e in (entities or [])]


class ApiService:
    """
    Фасад над NLU-пайплайном и обучающим корпусом.

    Attributes:
        pipeline: Текстовый движок
        training_manager: Менеджер корпуса
        metrics: Сборщик метрик
        response_delay: Задержка обработки сообщения (сек)
        admin_delay: Задержка админ-операций (сек)
    """

    def __init__(
        self,
        pipeline: NLUPipeline,
        training_manager: TrainingDataManager,
        metrics: Optional[MetricsCollector] = None,
        response_delay: float = 0.5,
        admin_delay: float = 0.3,
    ):
        self.pipeline = pipeline
        self.training_manager = training_manager
        self.metrics = metrics or MetricsCollector()
        self.response_delay = response_delay
        self.admin_delay = admin_delay

    async def _delay(self, seconds: float):
        if seconds > 0:
            await asyncio.sleep(seconds)

    @track_operation("process_message")
    async def process_message(self, message: str) -> ApiResponse:
        """
        Обработать сообщение пользователя.

        Returns:
            ApiResponse с {"response": str, "nlp_result": dict}
        """
        try:
            start_time = time.perf_counter()
            await self._delay(self.response_delay)

            nlp_result, response = self.pipeline.process_and_respond(message)

            self.metrics.record_message(
                intent=nlp_result.top_intent.name,
                sentiment=nlp_result.sentiment.label.value,
                response_time=time.perf_counter() - start_time,
                entity_count=len(nlp_result.entities),
            )
            logger.info(
                f"NLP result: intent={nlp_result.top_intent.name}, "
                f"entities={len(nlp_result.entities)}, sentiment={nlp_result.sentiment.label.value}"
            )
            return ApiResponse(
                success=True,
                data={"response": response, "nlp_result": nlp_result.to_dict()},
            )
        except Exception as e:
            return ErrorHandler.to_api_error("process_message", e)

    @track_operation("get_training_data")
    async def get_training_data(self) -> ApiResponse:
        try:
            await self._delay(self.admin_delay)
            data = await self.training_manager.get_training_data()
            return ApiResponse(success=True, data=data.to_dict())
        except Exception as e:
            return ErrorHandler.to_api_error("get_training_data", e)

    @track_operation("add_training_example")
    async def add_training_example(
        self,
        text: str,
        intent: str,
        entities: Optional[List[Dict[str, Any]]] = None,
    ) -> ApiResponse:
        try:
            await self._delay(self.admin_delay)
            result = await self.training_manager.add_example(text, intent, _parse_entities(entities))
            return ApiResponse(success=result.success, data=result.data.to_dict(), error=result.error)
        except Exception as e:
            return ErrorHandler.to_api_error("add_training_example", e)

    @track_operation("update_training_example")
    async def update_training_example(
        self,
        example_id: str,
        text: str,
        intent: str,
        entities: Optional[List[Dict[str, Any]]] = None,
    ) -> ApiResponse:
        try:
            await self._delay(self.admin_delay)
            result = await self.training_manager.update_example(
                example_id, text, intent, _parse_entities(entities)
            )
            return ApiResponse(success=result.success, data=result.data.to_dict(), error=result.error)
        except Exception as e:
            return ErrorHandler.to_api_error("update_training_example", e)

    @track_operation("delete_training_example")
    async def delete_training_example(self, example_id: str) -> ApiResponse:
        try:
            await self._delay(self.admin_delay)
            result = await self.training_manager.delete_example(example_id)
            return ApiResponse(success=result.success, data=result.data.to_dict(), error=result.error)
        except Exception as e:
            return ErrorHandler.to_api_error("delete_training_example", e)

    @track_operation("import_training_data")
    async def import_training_data(self, json_data: str) -> ApiResponse:
        try:
            await self._delay(self.admin_delay)
            result = await self.training_manager.import_data(json_data)
            if not result.success:
                return ApiResponse(success=False, error=f"Invalid training data: {result.error}")
            return ApiResponse(success=True, data=result.data.to_dict())
        except Exception as e:
            return ErrorHandler.to_api_error("import_training_data", e)

    @track_operation("export_training_data")
    async def export_training_data(self) -> ApiResponse:
        try:
            await self._delay(self.admin_delay)
            return ApiResponse(success=True, data=await self.training_manager.export_data())
        except Exception as e:
            return ErrorHandler.to_api_error("export_training_data", e)

    @track_operation("train_model")
    async def train_model(self) -> ApiResponse:
        """Переобучить модель на текущем корпусе."""
        try:
            await self._delay(self.response_delay)
            training_data = await self.training_manager.get_training_data()
            model = self.pipeline.apply_training(training_data)
            return ApiResponse(success=True, data=model.to_dict())
        except Exception as e:
            return ErrorHandler.to_api_error("train_model", e)

    async def get_model(self) -> ApiResponse:
        return ApiResponse(success=True, data=self.pipeline.get_model().to_dict())

    @track_operation("get_analytics")
    async def get_analytics(self, days: int = DEFAULT_ANALYTICS_DAYS) -> ApiResponse:
        """
        Аналитика за последние days дней.

        Returns:
            ApiResponse с итогами, распределением намерений и статистикой по дням
        """
        try:
            await self._delay(self.admin_delay)
            stats = self.metrics.get_stats(hours=days * 24)
            return ApiResponse(
                success=True,
                data={
                    "totalMessages": stats["total_messages"],
                    "leadsGenerated": stats["leads_generated"],
                    "humanHandoffs": stats["human_handoffs"],
                    "avgResponseTime": stats["avg_response_time"],
                    "p95ResponseTime": stats["p95_response_time"],
                    "sentiment": stats["sentiment_counts"],
                    "intentStats": self.metrics.get_intent_stats(hours=days * 24),
                    "dailyStats": self.metrics.get_daily_stats(days),
                },
            )
        except Exception as e:
            return ErrorHandler.to_api_error("get_analytics", e)
