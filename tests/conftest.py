import random

import pytest

from config.config import Config
from database import InMemoryKeyValueStore
from nlu import NLUPipeline, TrainingDataManager
from services import ApiService, ChatService, ConfigService
from utils import InputValidator, MetricsCollector


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def config():
    """Конфигурация без задержек."""
    return Config(
        LOG_LEVEL="DEBUG",
        LOG_FILE="",
        STORAGE_BACKEND="memory",
        DB_PATH="",
        RESPONSE_DELAY_SECONDS=0,
        ADMIN_DELAY_SECONDS=0,
        MAX_CHAT_HISTORY=50,
        RANDOM_SEED=42,
    )


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def pipeline(rng):
    return NLUPipeline(rng=rng)


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def training_manager(store):
    return TrainingDataManager(store)


@pytest.fixture
def config_service(store):
    return ConfigService(store)


@pytest.fixture
def api_service(pipeline, training_manager, metrics):
    return ApiService(pipeline, training_manager, metrics=metrics, response_delay=0, admin_delay=0)


@pytest.fixture
def chat_service(api_service, config_service, store, metrics):
    return ChatService(
        api_service,
        config_service,
        store,
        validator=InputValidator(),
        metrics=metrics,
        contact_delay=0,
        handoff_delay=0,
    )
