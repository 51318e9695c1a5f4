"""Context models for chat widget sessions."""

import uuid
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse


class MessageRole(Enum):
    USER = "user"
    BOT = "bot"
    SYSTEM = "system"


@dataclass
class ChatMessage:
    """
    Одно сообщение в истории чата виджета.
    """
    role: MessageRole
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    status: Optional[str] = None  # sending | sent | error

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.status:
            data["status"] = self.status
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatMessage":
        # Даты хранятся строками, возвращаем datetime
        return cls(
            id=data["id"],
            role=MessageRole(data["role"]),
            content=data["content"],
            timestamp=isoparse(data["timestamp"]),
            status=data.get("status"),
        )


@dataclass
class UserInfo:
    """
    Контактные данные посетителя (лид).
    """
    name: str
    email: str
    company: Optional[str] = None
    phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"name": self.name, "email": self.email}
        if self.company:
            data["company"] = self.company
        if self.phone:
            data["phone"] = self.phone
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserInfo":
        return cls(
            name=data["name"],
            email=data["email"],
            company=data.get("company"),
            phone=data.get("phone"),
        )


@dataclass
class ChatSession:
    """
    Состояние сессии виджета: история и контактные данные.
    """
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    messages: List[ChatMessage] = field(default_factory=list)
    user_info: Optional[UserInfo] = None

    @property
    def contact_form_submitted(self) -> bool:
        return self.user_info is not None

    def user_message_count(self) -> int:
        return sum(1 for m in self.messages if m.role == MessageRole.USER)
