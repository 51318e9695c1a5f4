import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "connectai",
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Создание именованного логгера с выводом в консоль и (опционально) в файл с ротацией.

    Args:
        name: Имя логгера
        log_file: Путь к файлу логов, None - только консоль
        level: Уровень логирования (int или строка "INFO")
        max_bytes: Максимальный размер файла до ротации
        backup_count: Количество архивных файлов

    Returns:
        Настроенный logging.Logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Повторный вызов не должен дублировать хендлеры
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
