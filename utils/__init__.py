from .logger import setup_logger
from .validators import InputValidator
from .error_handler import ApiResponse, ErrorHandler
from .metrics import MetricsCollector, track_operation

__all__ = [
    'setup_logger',
    'InputValidator',
    'ApiResponse',
    'ErrorHandler',
    'MetricsCollector',
    'track_operation',
]
