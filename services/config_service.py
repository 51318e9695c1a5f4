"""
Config Service - конфигурация чат-бота (ответы, база знаний, лиды, внешний вид).

Хранится одним JSON-документом в key-value хранилище.
"""

import asyncio
import copy
import json
import logging
import uuid
from typing import Any, Dict, Optional

from config.constants import STORAGE_KEYS
from database import KeyValueStore, STORAGE_ERRORS
from nlu.models import utc_now_iso
from utils.error_handler import ErrorHandler
from utils.logger import setup_logger

logger = setup_logger(name="config_service", level=logging.INFO)

AUTO_RESPONSE_TRIGGER_TYPES = ("keyword", "intent", "entity")
KNOWLEDGE_SOURCE_TYPES = ("url", "document", "qa")
CONFIG_SECTIONS = (
    "name", "responses", "knowledgeBase", "leadGeneration", "appearance", "apiSettings",
)
# Обязательные тексты ответов бота
REQUIRED_RESPONSE_KEYS = ("welcomeMessage", "fallbackMessage", "thankYouMessage", "humanHandoffMessage")


def validate_config(config: Any) -> Optional[str]:
    """Проверка формы документа конфигурации, None если документ корректен."""
    if not isinstance(config, dict):
        return "Configuration must be a JSON object"

    responses = config.get("responses")
    if not isinstance(responses, dict):
        return "'responses' must be an object"
    for key in REQUIRED_RESPONSE_KEYS:
        if not isinstance(responses.get(key), str) or not responses[key]:
            return f"'responses.{key}' must be a non-empty string"

    if not isinstance(config.get("appearance"), dict):
        return "'appearance' must be an object"

    for key in ("knowledgeBase", "leadGeneration"):
        if key in config and not isinstance(config[key], dict):
            return f"'{key}' must be an object"

    return None


def default_config() -> Dict[str, Any]:
    """Конфигурация по умолчанию."""
    now = utc_now_iso()
    return {
        "id": str(uuid.uuid4()),
        "name": "ConnectAI Chatbot",
        "responses": {
            "welcomeMessage": "Hi there! 👋 Welcome to ConnectAI. How can I help you today?",
            "fallbackMessage": "I'm sorry, I couldn't understand that. Could you try rephrasing your question?",
            "leadCapturePrompt": "I'd be happy to help! Could you provide your name and email so we can continue the conversation?",
            "thankYouMessage": "Thank you for your information! A member of our team will get back to you soon.",
            "humanHandoffMessage": "I'm connecting you with a human support agent. Please wait a moment.",
            "autoResponses": [
                {
                    "id": str(uuid.uuid4()),
                    "triggerType": "keyword",
                    "trigger": "pricing",
                    "response": "We offer three plans: Basic ($49/mo), Pro ($99/mo), and Enterprise (custom pricing). Each plan includes different features and conversation limits. Would you like to know more about a specific plan?",
                    "active": True,
                },
                {
                    "id": str(uuid.uuid4()),
                    "triggerType": "intent",
                    "trigger": "greeting",
                    "response": "Hello! Thanks for reaching out to ConnectAI. How can I assist you today?",
                    "active": True,
                },
                {
                    "id": str(uuid.uuid4()),
                    "triggerType": "keyword",
                    "trigger": "features",
                    "response": "ConnectAI offers natural language processing, knowledge base integration, lead generation, analytics, and seamless human handoff. Which feature would you like to learn more about?",
                    "active": True,
                },
            ],
        },
        "knowledgeBase": {
            "sources": [
                {
                    "id": str(uuid.uuid4()),
                    "name": "Product Documentation",
                    "type": "url",
                    "content": "https://docs.connectai.com",
                    "lastUpdated": now,
                    "enabled": True,
                },
                {
                    "id": str(uuid.uuid4()),
                    "name": "FAQ",
                    "type": "qa",
                    "content": json.dumps([
                        {"question": "What is ConnectAI?", "answer": "ConnectAI is an intelligent chatbot platform that helps businesses engage with website visitors, generate leads, and provide support 24/7."},
                        {"question": "How do I install ConnectAI?", "answer": "Installing ConnectAI is simple! Just add our JavaScript snippet to your website, and you're ready to go. See our documentation for detailed instructions."},
                        {"question": "What makes ConnectAI different?", "answer": "ConnectAI combines advanced NLP with a user-friendly interface, making it easy to create powerful chatbots without coding. Our solution also features seamless human handoff and detailed analytics."},
                    ]),
                    "lastUpdated": now,
                    "enabled": True,
                },
            ],
            "enabled": True,
        },
        "leadGeneration": {
            "enabled": True,
            "captureAfterMessages": 2,
            "requiredFields": ["name", "email"],
            "leadCaptureTrigger": "intent",
        },
        "appearance": {
            "primaryColor": "#4f46e5",
            "fontFamily": "Inter, sans-serif",
            "chatBubbleIcon": "message-circle",
            "chatBubbleText": "Chat with us",
            "avatarUrl": "/assets/avatar.png",
            "headerText": "ConnectAI Assistant",
            "position": "bottom-right",
        },
        "apiSettings": {
            "endpoint": "https://api.connectai.com/v1",
            "model": "gpt-4",
            "temperature": 0.7,
            "systemPrompt": "You are an AI assistant for a company called ConnectAI. Your job is to assist customers with their questions about our product and services. Be friendly, helpful, and professional.",
        },
        "lastUpdated": now,
    }


class ConfigService:
    """
    Сервис конфигурации чат-бота.

    Все изменения обновляют lastUpdated и сохраняют документ целиком
    под блокировкой. Методы записи возвращают bool, ошибки логируются.
    """

    def __init__(self, store: KeyValueStore, storage_key: str = STORAGE_KEYS['config']):
        self.store = store
        self.storage_key = storage_key
        self._config: Optional[Dict[str, Any]] = None
        self._lock = asyncio.Lock()

    async def load(self) -> Dict[str, Any]:
        """Загрузить конфигурацию или взять значения по умолчанию."""
        if self._config is not None:
            return copy.deepcopy(self._config)

        saved = await self.store.get(self.storage_key)
        if self._config is not None:
            return copy.deepcopy(self._config)

        config = default_config()
        if saved:
            try:
                parsed = json.loads(saved)
                error = validate_config(parsed)
                if error:
                    raise ValueError(error)
                config = parsed
            except (json.JSONDecodeError, ValueError) as e:
                ErrorHandler.handle_storage_error("load", self.storage_key, e)

        self._config = config
        return copy.deepcopy(self._config)

    async def get_config(self) -> Dict[str, Any]:
        return await self.load()

    async def save_config(self, config: Dict[str, Any]) -> bool:
        async with self._lock:
            return await self._commit(copy.deepcopy(config), "save_config")

    async def update_config(self, key: str, value: Any) -> bool:
        """Обновить один раздел конфигурации."""
        if key not in CONFIG_SECTIONS:
            logger.warning(f"Неизвестный раздел конфигурации: {key}")
            return False
        async with self._lock:
            config = await self.load()
            config[key] = copy.deepcopy(value)
            return await self._commit(config, "update_config")

    async def reset_config(self) -> Dict[str, Any]:
        config = default_config()
        async with self._lock:
            await self._commit(config, "reset_config")
        return copy.deepcopy(config)

    async def add_auto_response(
        self,
        trigger_type: str,
        trigger: str,
        response: str,
        active: bool = True,
    ) -> bool:
        if trigger_type not in AUTO_RESPONSE_TRIGGER_TYPES:
            logger.warning(f"Неизвестный тип триггера: {trigger_type}")
            return False
        async with self._lock:
            config = await self.load()
            config["responses"].setdefault("autoResponses", []).append({
                "id": str(uuid.uuid4()),
                "triggerType": trigger_type,
                "trigger": trigger,
                "response": response,
                "active": active,
            })
            return await self._commit(config, "add_auto_response")

    async def remove_auto_response(self, response_id: str) -> bool:
        async with self._lock:
            config = await self.load()
            config["responses"]["autoResponses"] = [
                r for r in config["responses"].get("autoResponses", []) if r["id"] != response_id
            ]
            return await self._commit(config, "remove_auto_response")

    async def add_knowledge_source(
        self,
        name: str,
        source_type: str,
        content: str,
        enabled: bool = True,
    ) -> bool:
        if source_type not in KNOWLEDGE_SOURCE_TYPES:
            logger.warning(f"Неизвестный тип источника: {source_type}")
            return False
        async with self._lock:
            config = await self.load()
            knowledge_base = config.setdefault("knowledgeBase", {"sources": [], "enabled": True})
            knowledge_base.setdefault("sources", []).append({
                "id": str(uuid.uuid4()),
                "name": name,
                "type": source_type,
                "content": content,
                "lastUpdated": utc_now_iso(),
                "enabled": enabled,
            })
            return await self._commit(config, "add_knowledge_source")

    async def remove_knowledge_source(self, source_id: str) -> bool:
        async with self._lock:
            config = await self.load()
            knowledge_base = config.setdefault("knowledgeBase", {"sources": [], "enabled": True})
            knowledge_base["sources"] = [
                s for s in knowledge_base.get("sources", []) if s["id"] != source_id
            ]
            return await self._commit(config, "remove_knowledge_source")

    async def export_config(self) -> str:
        config = await self.load()
        return json.dumps(config, ensure_ascii=False, indent=2)

    async def import_config(self, config_string: str) -> bool:
        """
        Импорт конфигурации. Документ без обязательных разделов отклоняется.
        """
        try:
            parsed = json.loads(config_string)
        except (json.JSONDecodeError, TypeError) as e:
            ErrorHandler.handle_import_error("config", e)
            return False

        async with self._lock:
            return await self._commit(parsed, "import_config")

    async def _commit(self, config: Any, operation: str) -> bool:
        error = validate_config(config)
        if error:
            ErrorHandler.handle_import_error("config", ValueError(error))
            return False

        config["lastUpdated"] = utc_now_iso()
        try:
            await self.store.set(self.storage_key, json.dumps(config, ensure_ascii=False))
        except STORAGE_ERRORS as e:
            ErrorHandler.handle_storage_error(operation, self.storage_key, e)
            return False
        self._config = config
        return True
