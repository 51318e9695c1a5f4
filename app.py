import random
from dataclasses import dataclass
from typing import Optional

from config.config import Config, load_config
from database import KeyValueStore, create_store
from nlu import NLUPipeline, TrainingDataManager
from services import ApiService, ChatService, ConfigService
from utils import InputValidator, MetricsCollector, setup_logger


@dataclass
class AppContext:
    """Все сервисы приложения, созданные один раз над общим хранилищем."""
    config: Config
    store: KeyValueStore
    metrics: MetricsCollector
    pipeline: NLUPipeline
    training_manager: TrainingDataManager
    config_service: ConfigService
    api_service: ApiService
    chat_service: ChatService

    async def close(self):
        self.metrics.log_daily_stats()
        await self.store.close()


def create_app(config: Optional[Config] = None, store: Optional[KeyValueStore] = None) -> AppContext:
    config = config or load_config()

    logger = setup_logger(name="connectai", log_file=config.LOG_FILE, level=config.LOG_LEVEL)

    rng = random.Random(config.RANDOM_SEED)
    store = store or create_store(config)
    metrics = MetricsCollector()
    validator = InputValidator()

    pipeline = NLUPipeline(rng=rng)
    training_manager = TrainingDataManager(store, validator=validator)
    config_service = ConfigService(store)
    api_service = ApiService(
        pipeline,
        training_manager,
        metrics=metrics,
        response_delay=config.RESPONSE_DELAY_SECONDS,
        admin_delay=config.ADMIN_DELAY_SECONDS,
    )
    chat_service = ChatService(
        api_service,
        config_service,
        store,
        validator=validator,
        metrics=metrics,
        max_history=config.MAX_CHAT_HISTORY,
    )

    logger.info(f"ConnectAI инициализирован (storage={config.STORAGE_BACKEND})")
    return AppContext(
        config=config,
        store=store,
        metrics=metrics,
        pipeline=pipeline,
        training_manager=training_manager,
        config_service=config_service,
        api_service=api_service,
        chat_service=chat_service,
    )
