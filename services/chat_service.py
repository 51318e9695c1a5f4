"""
Chat Service - сессия чат-виджета.

История сообщений и контактные данные посетителя хранятся
в key-value хранилище JSON-документами.
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from config.constants import (
    CONTACT_SUBMIT_DELAY_SECONDS,
    HUMAN_HANDOFF_DELAY_SECONDS,
    MAX_CHAT_HISTORY,
    STORAGE_KEYS,
)
from database import KeyValueStore, STORAGE_ERRORS
from nlu.models import ChatMessage, ChatSession, MessageRole, UserInfo
from services.api_service import ApiService
from services.config_service import ConfigService
from utils.error_handler import ErrorHandler
from utils.logger import setup_logger
from utils.metrics import MetricsCollector
from utils.validators import InputValidator

logger = setup_logger(name="chat_service", level=logging.INFO)

HUMAN_HANDOFF_NOTICE = (
    "I've notified our team, and a human agent will follow up with you shortly via email."
)


class ChatService:
    """
    Сессия виджета: история, отправка сообщений, форма лида, передача оператору.

    Attributes:
        api_service: Сервис обработки сообщений
        config_service: Конфигурация чат-бота (тексты ответов, лиды)
        store: Хранилище истории и контактов
        max_history: Сколько последних сообщений сохраняется
    """

    def __init__(
        self,
        api_service: ApiService,
        config_service: ConfigService,
        store: KeyValueStore,
        validator: Optional[InputValidator] = None,
        metrics: Optional[MetricsCollector] = None,
        max_history: int = MAX_CHAT_HISTORY,
        contact_delay: float = CONTACT_SUBMIT_DELAY_SECONDS,
        handoff_delay: float = HUMAN_HANDOFF_DELAY_SECONDS,
    ):
        self.api_service = api_service
        self.config_service = config_service
        self.store = store
        self.validator = validator or InputValidator()
        self.metrics = metrics or api_service.metrics
        self.max_history = max_history
        self.contact_delay = contact_delay
        self.handoff_delay = handoff_delay
        # Чтение-дополнение-запись истории выполняется только под этой блокировкой
        self._history_lock = asyncio.Lock()

    # ===== История =====

    async def load_history(self) -> List[ChatMessage]:
        """
        Загрузить историю чата. Нечитаемая история считается пустой.
        """
        raw = await self.store.get(STORAGE_KEYS['chat_history'])
        if not raw:
            return []

        try:
            return [ChatMessage.from_dict(item) for item in json.loads(raw)]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            ErrorHandler.handle_storage_error("load_history", STORAGE_KEYS['chat_history'], e)
            return []

    async def save_history(self, messages: List[ChatMessage]):
        """Сохранить только последние max_history сообщений."""
        tail = messages[-self.max_history:]
        await self.store.set(
            STORAGE_KEYS['chat_history'],
            json.dumps([m.to_dict() for m in tail], ensure_ascii=False),
        )

    async def append_messages(self, *messages: ChatMessage):
        """Дописать сообщения к сохранённой истории."""
        async with self._history_lock:
            history = await self.load_history()
            history.extend(messages)
            try:
                await self.save_history(history)
            except STORAGE_ERRORS as e:
                ErrorHandler.handle_storage_error("save_history", STORAGE_KEYS['chat_history'], e)

    async def clear_history(self):
        async with self._history_lock:
            await self.store.remove(STORAGE_KEYS['chat_history'])
        logger.info("История чата очищена")

    async def start_session(self) -> List[ChatMessage]:
        """
        Начало сессии: сохранённая история или приветствие из конфигурации.
        """
        history = await self.load_history()
        if history:
            return history

        config = await self.config_service.get_config()
        return [
            ChatMessage(
                id="welcome",
                role=MessageRole.BOT,
                content=config["responses"]["welcomeMessage"],
            )
        ]

    # ===== Сообщения =====

    async def send_message(self, text: str) -> ChatMessage:
        """
        Отправить сообщение посетителя и получить ответ бота.

        Пустое или слишком длинное сообщение отклоняется с ValueError.
        При ошибке обработки бот отвечает fallback-сообщением.
        """
        is_valid, error = self.validator.validate_message(text)
        if not is_valid:
            raise ValueError(error)

        content = text.strip()
        user_message = ChatMessage(role=MessageRole.USER, content=content, status="sent")
        await self.append_messages(user_message)

        api_response = await self.api_service.process_message(content)
        if api_response.success:
            bot_message = ChatMessage(role=MessageRole.BOT, content=api_response.data["response"])
        else:
            config = await self.config_service.get_config()
            bot_message = ChatMessage(
                role=MessageRole.BOT,
                content=config["responses"]["fallbackMessage"],
                status="error",
            )

        await self.append_messages(bot_message)
        return bot_message

    async def request_human_assistance(self) -> ChatMessage:
        """Передать разговор оператору."""
        if self.handoff_delay > 0:
            await asyncio.sleep(self.handoff_delay)

        message = ChatMessage(role=MessageRole.BOT, content=HUMAN_HANDOFF_NOTICE)
        await self.append_messages(message)

        self.metrics.record_event("handoff")
        return message

    # ===== Контактные данные =====

    async def save_user_info(self, info: UserInfo):
        await self.store.set(STORAGE_KEYS['user_info'], json.dumps(info.to_dict(), ensure_ascii=False))

    async def load_user_info(self) -> Optional[UserInfo]:
        raw = await self.store.get(STORAGE_KEYS['user_info'])
        if not raw:
            return None
        try:
            return UserInfo.from_dict(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            ErrorHandler.handle_storage_error("load_user_info", STORAGE_KEYS['user_info'], e)
            return None

    async def submit_user_info(self, info: Dict[str, Any]) -> bool:
        """
        Отправка формы лида.

        Returns:
            True если данные приняты и сохранены
        """
        if self.contact_delay > 0:
            await asyncio.sleep(self.contact_delay)

        is_valid, error = self.validator.validate_user_info(info)
        if not is_valid:
            logger.warning(f"Форма контакта отклонена: {error}")
            return False

        user_info = UserInfo(
            name=info["name"].strip(),
            email=info["email"].strip(),
            company=info.get("company"),
            phone=info.get("phone"),
        )
        try:
            await self.save_user_info(user_info)
        except STORAGE_ERRORS as e:
            ErrorHandler.log_unexpected_error("submit_user_info", e, user_info.to_dict())
            return False

        self.metrics.record_event("lead")
        logger.info(f"Получен лид: {user_info.email}")
        return True

    async def should_capture_lead(self) -> bool:
        """
        Показывать ли форму лида: генерация включена, контакты ещё не
        получены и посетитель отправил не меньше captureAfterMessages сообщений.
        """
        config = await self.config_service.get_config()
        lead_settings = config.get("leadGeneration", {})
        if not lead_settings.get("enabled"):
            return False

        if await self.load_user_info() is not None:
            return False

        history = await self.load_history()
        user_messages = sum(1 for m in history if m.role == MessageRole.USER)
        return user_messages >= lead_settings.get("captureAfterMessages", 2)

    async def get_session(self) -> ChatSession:
        """Снимок сессии: история и контактные данные."""
        return ChatSession(
            messages=await self.start_session(),
            user_info=await self.load_user_info(),
        )

    async def last_activity(self) -> Optional[datetime]:
        history = await self.load_history()
        return history[-1].timestamp if history else None
