"""Observability: per-session turn counters and timings."""

import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class Metrics:
    """Counters and timers owned by one coordinator session."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        # name -> running {"count", "total", "max"} in seconds
        self._timers: dict[str, dict[str, float]] = {}

    def counter(self, name: str, value: int = 1):
        self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Record the wall time of the wrapped block under ``name``."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            stats = self._timers.setdefault(name, {"count": 0, "total": 0.0, "max": 0.0})
            stats["count"] += 1
            stats["total"] += elapsed
            stats["max"] = max(stats["max"], elapsed)

    def summary(self) -> dict[str, Any]:
        timers = {
            name: {
                "count": int(stats["count"]),
                "avg_ms": round(1000 * stats["total"] / stats["count"], 3),
                "max_ms": round(1000 * stats["max"], 3),
            }
            for name, stats in self._timers.items()
        }
        return {"counters": dict(self._counters), "timers": timers}

    def reset(self):
        self._counters.clear()
        self._timers.clear()


def log_session_summary(session_id: str, metrics: Metrics):
    logger.info("session_summary", session_id=session_id, **metrics.summary())
