"""Metrics tracking for upstream API calls."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class RequestMetrics:
    """Metrics for a single upstream request."""

    endpoint: str
    timestamp: datetime
    success: bool
    status_code: int | None = None
    elapsed_ms: float | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "timestamp": self.timestamp.isoformat(),
            "success": self.success,
            "status_code": self.status_code,
            "elapsed_ms": self.elapsed_ms,
            "error": self.error,
        }


@dataclass
class ServerMetrics:
    """Aggregate metrics for the running server."""

    start_time: datetime = field(default_factory=datetime.now)
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    requests_by_endpoint: dict[str, int] = field(default_factory=dict)
    recent_requests: deque[RequestMetrics] = field(default_factory=lambda: deque(maxlen=50))
    recent_errors: deque[RequestMetrics] = field(default_factory=lambda: deque(maxlen=20))

    def record_request(
        self,
        endpoint: str,
        success: bool,
        status_code: int | None = None,
        elapsed_ms: float | None = None,
        error: str | None = None,
    ) -> None:
        """Record an upstream request.

        Args:
            endpoint: API endpoint path that was called
            success: Whether the request was successful
            status_code: HTTP status code if a response was received
            elapsed_ms: Time taken in milliseconds
            error: Error description if failed
        """
        self.total_requests += 1
        if success:
            self.successful_requests += 1
        else:
            self.failed_requests += 1
        self.requests_by_endpoint[endpoint] = self.requests_by_endpoint.get(endpoint, 0) + 1

        metrics = RequestMetrics(
            endpoint=endpoint,
            timestamp=datetime.now(),
            success=success,
            status_code=status_code,
            elapsed_ms=elapsed_ms,
            error=error,
        )
        self.recent_requests.append(metrics)
        if not success:
            self.recent_errors.append(metrics)

    def get_uptime_seconds(self) -> float:
        """Get server uptime in seconds."""
        return (datetime.now() - self.start_time).total_seconds()

    def get_success_rate(self) -> float:
        """Get success rate as percentage."""
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for JSON serialization."""
        uptime_seconds = self.get_uptime_seconds()

        return {
            "status": "healthy",
            "uptime": {
                "seconds": uptime_seconds,
                "formatted": self._format_uptime(uptime_seconds),
            },
            "start_time": self.start_time.isoformat(),
            "requests": {
                "total": self.total_requests,
                "successful": self.successful_requests,
                "failed": self.failed_requests,
                "success_rate": round(self.get_success_rate(), 2),
                "by_endpoint": dict(self.requests_by_endpoint),
            },
            # Last 10 of each, newest first
            "recent_requests": [r.to_dict() for r in list(self.recent_requests)[-10:][::-1]],
            "recent_errors": [r.to_dict() for r in list(self.recent_errors)[-10:][::-1]],
        }

    @staticmethod
    def _format_uptime(seconds: float) -> str:
        """Format uptime in human-readable format."""
        if seconds < 60:
            return f"{int(seconds)}s"
        elif seconds < 3600:
            return f"{int(seconds / 60)}m {int(seconds % 60)}s"
        elif seconds < 86400:
            return f"{int(seconds / 3600)}h {int((seconds % 3600) / 60)}m"
        else:
            return f"{int(seconds / 86400)}d {int((seconds % 86400) / 3600)}h"


# Global metrics instance
_metrics = ServerMetrics()


def get_metrics() -> ServerMetrics:
    """Get the global metrics instance."""
    return _metrics
