"""
Training Data Manager - управление обучающим корпусом.

Хранит корпус одним JSON-документом в key-value хранилище,
держит копию в памяти. Каждое изменение: копия -> правка -> запись -> замена.
"""

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass
from typing import List, Optional

from config.constants import STORAGE_KEYS
from database import KeyValueStore
from nlu.models import Entity, TrainingData, TrainingExample, default_training_data, utc_now_iso
from utils.error_handler import ErrorHandler
from utils.logger import setup_logger
from utils.validators import InputValidator

logger = setup_logger(name="training_manager", level=logging.INFO)


@dataclass
class OperationResult:
    """
    Результат операции над корпусом.

    Attributes:
        success: Успешность операции
        data: Копия корпуса после операции (None при неудачном импорте)
        error: Причина отказа
    """
    success: bool
    data: Optional[TrainingData] = None
    error: Optional[str] = None


class TrainingDataManager:
    """
    Менеджер обучающего корпуса.

    Чтение, правка и запись выполняются под одной блокировкой,
    поэтому параллельные изменения в процессе не теряются.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = STORAGE_KEYS['training_data'],
        validator: Optional[InputValidator] = None,
    ):
        self.store = store
        self.storage_key = storage_key
        self.validator = validator or InputValidator()
        self._data: Optional[TrainingData] = None
        self._lock = asyncio.Lock()

    async def load(self) -> TrainingData:
        """
        Загрузить корпус из хранилища.

        Если документа нет или он повреждён - используется стартовый корпус.
        """
        if self._data is not None:
            return self._data.copy()

        raw = await self.store.get(self.storage_key)
        if self._data is not None:
            # Пока шло чтение, корпус уже загрузили
            return self._data.copy()

        if raw is None:
            self._data = default_training_data()
            logger.info("Обучающий корпус не найден, используется стартовый")
            return self._data.copy()

        try:
            self._data = self._deserialize(raw)
            logger.info(f"Загружен корпус: {len(self._data.examples)} примеров")
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            ErrorHandler.handle_storage_error("load", self.storage_key, e)
            self._data = default_training_data()

        return self._data.copy()

    async def get_training_data(self) -> TrainingData:
        """Копия текущего корпуса."""
        return await self.load()

    def _check_example(self, text: str, intent: str, entities: List[Entity]) -> Optional[str]:
        _, error = self.validator.validate_training_example({
            "text": text,
            "intent": intent,
            "entities": [e.to_dict() for e in entities],
        })
        return error

    async def add_example(self, text: str, intent: str, entities: Optional[List[Entity]] = None) -> OperationResult:
        """
        Добавить пример. Новые намерения и типы сущностей попадают в каталоги.

        Returns:
            OperationResult с копией корпуса
        """
        entities = list(entities or [])
        async with self._lock:
            data = await self.load()

            error = self._check_example(text, intent, entities)
            if error:
                logger.warning(f"Пример отклонён: {error}")
                return OperationResult(False, data, error)

            example = TrainingExample(
                id=str(uuid.uuid4()),
                text=text,
                intent=intent,
                entities=entities,
            )
            data.examples.append(example)
            data.register_catalog_names(intent, entities)

            await self._commit(data)

        logger.info(f"Добавлен пример {example.id} ({intent})")
        return OperationResult(True, data.copy())

    async def update_example(
        self,
        example_id: str,
        text: str,
        intent: str,
        entities: Optional[List[Entity]] = None,
    ) -> OperationResult:
        """
        Заменить пример по id. Неизвестный id - неуспех, корпус не меняется.
        """
        entities = list(entities or [])
        async with self._lock:
            data = await self.load()

            error = self._check_example(text, intent, entities)
            if error:
                logger.warning(f"Пример {example_id} отклонён: {error}")
                return OperationResult(False, data, error)

            index = data.find_index(example_id)
            if index == -1:
                logger.warning(f"Пример {example_id} не найден")
                return OperationResult(False, data, "Example not found")

            data.examples[index] = TrainingExample(
                id=example_id,
                text=text,
                intent=intent,
                entities=entities,
            )
            data.register_catalog_names(intent, entities)

            await self._commit(data)

        return OperationResult(True, data.copy())

    async def delete_example(self, example_id: str) -> OperationResult:
        """
        Удалить пример по id. Каталоги не уменьшаются.
        """
        async with self._lock:
            data = await self.load()

            initial_length = len(data.examples)
            data.examples = [e for e in data.examples if e.id != example_id]

            if len(data.examples) == initial_length:
                logger.warning(f"Пример {example_id} не найден")
                return OperationResult(False, data, "Example not found")

            await self._commit(data)

        return OperationResult(True, data.copy())

    async def import_data(self, json_data: str) -> OperationResult:
        """
        Импорт корпуса из JSON.

        Ошибка разбора или формы - неуспех, текущий корпус не меняется.
        """
        try:
            payload = json.loads(json_data)
        except (json.JSONDecodeError, TypeError) as e:
            ErrorHandler.handle_import_error("training data", e)
            return OperationResult(False, error="Invalid JSON")

        is_valid, error = self.validator.validate_training_payload(payload)
        if not is_valid:
            ErrorHandler.handle_import_error("training data", ValueError(error))
            return OperationResult(False, error=error)

        data = TrainingData.from_dict(payload)

        async with self._lock:
            await self._commit(data)

        logger.info(f"Импортирован корпус: {len(data.examples)} примеров")
        return OperationResult(True, data.copy())

    async def export_data(self) -> str:
        """Экспорт корпуса в JSON (отступ 2)."""
        data = await self.load()
        return json.dumps(data.to_dict(), ensure_ascii=False, indent=2)

    async def reset(self) -> TrainingData:
        """Вернуть стартовый корпус."""
        data = default_training_data()
        async with self._lock:
            await self._commit(data)
        return data.copy()

    async def _commit(self, data: TrainingData):
        """Записать документ целиком, затем заменить копию в памяти."""
        data.last_updated = utc_now_iso()
        await self.store.set(self.storage_key, self._serialize(data))
        self._data = data.copy()

    def _serialize(self, data: TrainingData) -> str:
        return json.dumps(data.to_dict(), ensure_ascii=False)

    def _deserialize(self, raw: str) -> TrainingData:
        return TrainingData.from_dict(json.loads(raw))
