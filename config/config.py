from dataclasses import dataclass
from typing import Optional

from config.constants import MAX_CHAT_HISTORY

STORAGE_BACKENDS = ("memory", "sqlite")


@dataclass
class Config:
    """Конфигурация приложения из переменных окружения"""
    # Настройки логирования
    LOG_LEVEL: str
    LOG_FILE: str

    # Хранилище
    STORAGE_BACKEND: str
    DB_PATH: str

    # Имитация сетевых задержек
    RESPONSE_DELAY_SECONDS: float
    ADMIN_DELAY_SECONDS: float

    # Чат
    MAX_CHAT_HISTORY: int

    # Детерминированный выбор ответов (для тестов и демо)
    RANDOM_SEED: Optional[int] = None


def load_config() -> Config:
    """
    Загрузка конфигурации из переменных окружения

    Returns:
        Config: Объект конфигурации

    Raises:
        ValueError: Если значение переменной некорректно
    """
    import os
    from dotenv import load_dotenv

    load_dotenv()

    storage_backend = os.getenv("STORAGE_BACKEND", "memory").lower()
    if storage_backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got '{storage_backend}'"
        )

    response_delay = float(os.getenv("RESPONSE_DELAY_SECONDS", "0.5"))
    admin_delay = float(os.getenv("ADMIN_DELAY_SECONDS", "0.3"))
    if response_delay < 0 or admin_delay < 0:
        raise ValueError("Delays must be non-negative")

    max_history = int(os.getenv("MAX_CHAT_HISTORY", str(MAX_CHAT_HISTORY)))
    if max_history < 1:
        raise ValueError("MAX_CHAT_HISTORY must be at least 1")

    random_seed = os.getenv("RANDOM_SEED")

    return Config(
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        LOG_FILE=os.getenv("LOG_FILE", "logs/connectai.log"),
        STORAGE_BACKEND=storage_backend,
        DB_PATH=os.getenv("DB_PATH", "db/connectai.db"),
        RESPONSE_DELAY_SECONDS=response_delay,
        ADMIN_DELAY_SECONDS=admin_delay,
        MAX_CHAT_HISTORY=max_history,
        RANDOM_SEED=int(random_seed) if random_seed else None,
    )
