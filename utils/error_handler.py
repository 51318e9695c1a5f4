"""
Централизованная обработка ошибок на границе сервисов
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from utils.logger import setup_logger

logger = setup_logger(name="error_handler", level="ERROR")

T = TypeVar("T")


@dataclass
class ApiResponse(Generic[T]):
    """Ответ сервисного слоя: успех, данные или текст ошибки"""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error
        return result


ERROR_MESSAGES = {
    "process_message": "Failed to process message",
    "get_training_data": "Failed to fetch training data",
    "add_training_example": "Failed to add training example",
    "update_training_example": "Failed to update training example",
    "delete_training_example": "Failed to delete training example",
    "import_training_data": "Failed to import training data",
    "export_training_data": "Failed to export training data",
    "train_model": "Failed to train model",
    "get_analytics": "Failed to fetch analytics",
    "submit_user_info": "Failed to submit contact information",
}


class ErrorHandler:
    """Класс для централизованной обработки ошибок"""

    @staticmethod
    def to_api_error(operation: str, error: Exception) -> ApiResponse:
        """Логирование ошибки операции и ответ с понятным текстом"""
        logger.error(f"Error during {operation}: {error}", exc_info=True)
        return ApiResponse(
            success=False,
            error=ERROR_MESSAGES.get(operation, f"Operation '{operation}' failed"),
        )

    @staticmethod
    def handle_storage_error(operation: str, key: str, error: Exception):
        """Ошибки чтения/записи хранилища"""
        logger.error(f"Storage error during {operation} for key '{key}': {error}")

    @staticmethod
    def handle_import_error(source: str, error: Exception):
        """Ошибки разбора импортируемого JSON"""
        logger.error(f"Error importing {source}: {error}")

    @staticmethod
    def log_unexpected_error(context: str, error: Exception, user_data: Optional[Dict[str, Any]] = None):
        """Логирование неожиданных ошибок"""
        log_message = f"Unexpected error in {context}: {error}"
        if user_data:
            log_message += f" | User data: {user_data}"
        logger.error(log_message, exc_info=True)
