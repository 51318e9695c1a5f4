import re
from typing import Any, Dict, Optional, Tuple

from config.constants import MAX_MESSAGE_LENGTH, MIN_MESSAGE_LENGTH

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class InputValidator:
    """
    Класс для валидации пользовательского ввода и импортируемых данных

    Проверки не изменяют текст: смещения сущностей считаются по исходной строке
    """

    def __init__(self, max_length: int = MAX_MESSAGE_LENGTH):
        self.max_length = max_length

    def validate_message(self, text: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Валидация сообщения чата

        Args:
            text: Сообщение пользователя

        Returns:
            Tuple (is_valid, error_message)
        """
        if text is None or not text.strip():
            return False, "Message cannot be empty"

        if len(text.strip()) < MIN_MESSAGE_LENGTH:
            return False, "Message is too short"

        if len(text) > self.max_length:
            return False, f"Message is too long (maximum {self.max_length} characters)"

        return True, None

    def validate_entity(self, entity: Any, text: Optional[str] = None) -> Tuple[bool, Optional[str]]:
        """Проверка размеченной сущности"""
        if not isinstance(entity, dict):
            return False, "Entity must be an object"

        if not isinstance(entity.get("type"), str) or not entity["type"]:
            return False, "Entity type must be a non-empty string"

        if not isinstance(entity.get("value"), str):
            return False, "Entity value must be a string"

        start, end = entity.get("start"), entity.get("end")
        if not isinstance(start, int) or not isinstance(end, int) or isinstance(start, bool) or isinstance(end, bool):
            return False, "Entity start/end must be integers"

        if start < 0 or end < start:
            return False, "Entity span is invalid"

        if text is not None and end > len(text):
            return False, "Entity span exceeds example text"

        return True, None

    def validate_training_example(self, example: Any) -> Tuple[bool, Optional[str]]:
        """
        Проверка формы одного обучающего примера

        Returns:
            Tuple (is_valid, error_message)
        """
        if not isinstance(example, dict):
            return False, "Example must be an object"

        if not isinstance(example.get("text"), str):
            return False, "Example text must be a string"

        if not isinstance(example.get("intent"), str) or not example["intent"].strip():
            return False, "Example intent must be a non-empty string"

        if "id" in example and example["id"] is not None and not isinstance(example["id"], (str, int)):
            return False, "Example id must be a string"

        entities = example.get("entities", [])
        if not isinstance(entities, list):
            return False, "Example entities must be a list"

        for entity in entities:
            is_valid, error = self.validate_entity(entity, example["text"])
            if not is_valid:
                return False, error

        return True, None

    def validate_training_payload(self, data: Any) -> Tuple[bool, Optional[str]]:
        """
        Проверка импортируемого документа {examples, intents, entityTypes, lastUpdated}

        Returns:
            Tuple (is_valid, error_message)
        """
        if not isinstance(data, dict):
            return False, "Training data must be a JSON object"

        examples = data.get("examples")
        if not isinstance(examples, list):
            return False, "'examples' must be a list"

        for index, example in enumerate(examples):
            is_valid, error = self.validate_training_example(example)
            if not is_valid:
                return False, f"Example {index}: {error}"

        for key in ("intents", "entityTypes"):
            values = data.get(key)
            if values is None:
                continue
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                return False, f"'{key}' must be a list of strings"

        return True, None

    def validate_user_info(self, info: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
        """Проверка контактных данных для формы лида"""
        name = (info.get("name") or "").strip()
        email = (info.get("email") or "").strip()

        if not name:
            return False, "Name is required"

        if not email or not EMAIL_PATTERN.match(email):
            return False, "A valid email is required"

        return True, None
