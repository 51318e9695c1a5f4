"""
Система метрик для аналитики чат-бота
"""

import functools
import time
from collections import defaultdict, deque
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import numpy as np

from utils.logger import setup_logger

logger = setup_logger(name="metrics", level="INFO")


class MetricsCollector:
    """Сбор и анализ метрик работы бота"""

    def __init__(self, max_history_size: int = 1000):
        self.max_history_size = max_history_size

        # Счетчики операций и событий (lead, handoff)
        self.counters = defaultdict(int)
        self.event_counts = defaultdict(int)

        # История обработанных сообщений
        self.message_history = deque(maxlen=max_history_size)

        # История операций
        self.operation_history = deque(maxlen=max_history_size)

        # Время выполнения операций
        self.timing_data = defaultdict(list)

        # Ошибки
        self.error_counts = defaultdict(int)

    def record_operation(self, operation: str, duration: Optional[float] = None, success: bool = True):
        """Запись операции"""
        self.counters[operation] += 1
        self.operation_history.append({
            'operation': operation,
            'timestamp': datetime.now(),
            'duration': duration,
            'success': success,
        })

        if duration is not None:
            self.timing_data[operation].append(duration)
            # Ограничиваем размер истории времени
            if len(self.timing_data[operation]) > 100:
                self.timing_data[operation] = self.timing_data[operation][-100:]

        if success:
            logger.debug(f"Operation {operation} completed" +
                         (f" in {duration:.2f}s" if duration else ""))
        else:
            self.error_counts[operation] += 1
            logger.warning(f"Operation {operation} failed")

    def record_message(self, intent: str, sentiment: str, response_time: float, entity_count: int = 0):
        """Запись обработанного сообщения"""
        self.message_history.append({
            'timestamp': datetime.now(),
            'intent': intent,
            'sentiment': sentiment,
            'response_time': response_time,
            'entity_count': entity_count,
        })

    def record_event(self, event: str):
        """Запись события (lead, handoff)"""
        self.event_counts[event] += 1
        logger.info(f"Event recorded: {event}")

    def _recent_messages(self, hours: Optional[int] = None) -> List[Dict[str, Any]]:
        if hours is None:
            return list(self.message_history)
        cutoff_time = datetime.now() - timedelta(hours=hours)
        return [m for m in self.message_history if m['timestamp'] >= cutoff_time]

    def get_intent_stats(self, hours: Optional[int] = None) -> List[Dict[str, Any]]:
        """Распределение намерений: count и percentage, по убыванию count"""
        messages = self._recent_messages(hours)
        if not messages:
            return []

        counts = defaultdict(int)
        for message in messages:
            counts[message['intent']] += 1

        total = len(messages)
        stats = [
            {
                'intent': intent,
                'count': count,
                'percentage': round(count / total * 100, 2),
            }
            for intent, count in counts.items()
        ]
        stats.sort(key=lambda s: s['count'], reverse=True)
        return stats

    def get_daily_stats(self, days: int = 7) -> List[Dict[str, Any]]:
        """Статистика по дням за последние days дней, по возрастанию даты"""
        today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        start = today - timedelta(days=days - 1)

        buckets = defaultdict(list)
        for message in self.message_history:
            day = message['timestamp'].replace(hour=0, minute=0, second=0, microsecond=0)
            if day >= start:
                buckets[day].append(message['response_time'])

        daily = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            times = buckets.get(day, [])
            daily.append({
                'date': day.isoformat(),
                'messages': len(times),
                'avg_response_time': float(np.mean(times)) if times else 0.0,
            })
        return daily

    def get_stats(self, hours: int = 24) -> Dict[str, Any]:
        """Получение статистики за указанное количество часов"""
        messages = self._recent_messages(hours)
        response_times = np.array([m['response_time'] for m in messages], dtype=float)

        sentiment_counts = defaultdict(int)
        for message in messages:
            sentiment_counts[message['sentiment']] += 1

        # Средние времена выполнения операций
        avg_timings = {
            operation: float(np.mean(times))
            for operation, times in self.timing_data.items()
            if times
        }

        return {
            'period_hours': hours,
            'total_messages': len(messages),
            'avg_response_time': float(response_times.mean()) if response_times.size else 0.0,
            'p95_response_time': float(np.percentile(response_times, 95)) if response_times.size else 0.0,
            'sentiment_counts': dict(sentiment_counts),
            'leads_generated': self.event_counts['lead'],
            'human_handoffs': self.event_counts['handoff'],
            'operation_counts': dict(self.counters),
            'average_timings': avg_timings,
            'error_counts': dict(self.error_counts),
        }

    def log_daily_stats(self):
        """Логирование ежедневной статистики"""
        stats = self.get_stats(24)
        logger.info(f"Daily stats: {stats}")


def track_operation(operation: str):
    """
    Декоратор для async-методов сервисов с атрибутом metrics

    Записывает длительность и успех операции в self.metrics
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            start_time = time.perf_counter()
            collector: Optional[MetricsCollector] = getattr(self, "metrics", None)

            try:
                result = await func(self, *args, **kwargs)
            except Exception:
                if collector is not None:
                    collector.record_operation(operation, time.perf_counter() - start_time, False)
                raise

            if collector is not None:
                success = getattr(result, "success", True)
                collector.record_operation(operation, time.perf_counter() - start_time, bool(success))
            return result

        return wrapper
    return decorator
