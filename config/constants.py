"""
Статичные константы приложения

Здесь должны быть только константы, которые:
- Не изменяются между окружениями (dev/prod)
- Не являются секретами
- Определяют поведение движка и сервисов
"""

# Ключи хранилища (key-value)
STORAGE_KEYS = {
    'training_data': 'connectai_training_data',
    'config': 'connectai_config',
    'chat_history': 'connectai_chat_history',
    'user_info': 'connectai_user_info',
}

# Классификация намерений
DEFAULT_INTENT_NAME = 'default'
DEFAULT_INTENT_CONFIDENCE = 0.3

# Анализ тональности
SENTIMENT_STEP = 0.2
POSITIVE_THRESHOLD = 0.3
NEGATIVE_THRESHOLD = -0.3

# Обучение модели (имитация)
MAX_MODEL_ACCURACY = 0.95
MAX_ACCURACY_GAIN = 0.05

# Ограничения чата
MAX_CHAT_HISTORY = 50
MAX_MESSAGE_LENGTH = 2000
MIN_MESSAGE_LENGTH = 1

# Тайминги UI (имитация сети)
HUMAN_HANDOFF_DELAY_SECONDS = 1.0
CONTACT_SUBMIT_DELAY_SECONDS = 1.0
DEFAULT_ANALYTICS_DAYS = 7
