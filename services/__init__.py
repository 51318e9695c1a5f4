from .api_service import ApiService
from .config_service import ConfigService, default_config
from .chat_service import ChatService

__all__ = [
    "ApiService",
    "ConfigService",
    "ChatService",
    "default_config",
]
