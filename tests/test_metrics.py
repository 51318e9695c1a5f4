"""Tests for MetricsCollector."""

from datetime import datetime, timedelta

import pytest

from utils.metrics import MetricsCollector, track_operation


class TestMetricsCollector:

    def test_intent_stats_percentages(self, metrics):
        for intent in ["pricing", "pricing", "pricing", "greeting"]:
            metrics.record_message(intent, "neutral", 0.1)

        assert metrics.get_intent_stats() == [
            {"intent": "pricing", "count": 3, "percentage": 75.0},
            {"intent": "greeting", "count": 1, "percentage": 25.0},
        ]

    def test_response_time_stats(self, metrics):
        for value in [0.1, 0.2, 0.3, 0.4]:
            metrics.record_message("support", "negative", value)

        stats = metrics.get_stats()
        assert stats["avg_response_time"] == pytest.approx(0.25)
        assert 0.3 < stats["p95_response_time"] <= 0.4
        assert stats["sentiment_counts"] == {"negative": 4}

    def test_old_messages_outside_window(self, metrics):
        metrics.record_message("pricing", "neutral", 0.1)
        metrics.message_history[0]["timestamp"] = datetime.now() - timedelta(days=3)
        metrics.record_message("greeting", "neutral", 0.1)

        assert metrics.get_stats(hours=24)["total_messages"] == 1
        assert metrics.get_stats(hours=24 * 7)["total_messages"] == 2

    def test_daily_stats_window(self, metrics):
        metrics.record_message("pricing", "neutral", 0.2)
        metrics.message_history[0]["timestamp"] = datetime.now() - timedelta(days=10)
        metrics.record_message("greeting", "neutral", 0.4)

        daily = metrics.get_daily_stats(days=7)
        assert len(daily) == 7
        assert sum(d["messages"] for d in daily) == 1
        assert daily[-1]["avg_response_time"] == pytest.approx(0.4)

    def test_history_is_bounded(self):
        collector = MetricsCollector(max_history_size=3)
        for _ in range(5):
            collector.record_message("default", "neutral", 0.1)
        assert len(collector.message_history) == 3

    def test_events_and_errors(self, metrics):
        metrics.record_event("lead")
        metrics.record_event("handoff")
        metrics.record_operation("train_model", 0.5, success=False)

        stats = metrics.get_stats()
        assert stats["leads_generated"] == 1
        assert stats["human_handoffs"] == 1
        assert stats["error_counts"] == {"train_model": 1}
        assert stats["average_timings"]["train_model"] == pytest.approx(0.5)


class Worker:
    def __init__(self):
        self.metrics = MetricsCollector()

    @track_operation("work")
    async def work(self, fail=False):
        if fail:
            raise RuntimeError("failed")
        return "done"


class TestTrackOperation:

    @pytest.mark.asyncio
    async def test_records_success(self):
        worker = Worker()
        assert await worker.work() == "done"
        assert worker.metrics.counters["work"] == 1
        assert not worker.metrics.error_counts

    @pytest.mark.asyncio
    async def test_records_failure_and_reraises(self):
        worker = Worker()
        with pytest.raises(RuntimeError):
            await worker.work(fail=True)
        assert worker.metrics.error_counts["work"] == 1
