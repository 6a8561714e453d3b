"""
Structured JSON logger for list fetch events.

Emits JSON-formatted events for:
- List requested / applied / discarded / failed
- Request sequence numbers and page numbers for correlation

Usage:
    events = StructuredLogger(resource="/jobs")
    events.requested(seq=1, page=2)
    # ... fetch ...
    events.applied(seq=1, page=2, total=25)
"""

import json
import sys
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class EventType(str, Enum):
    """List lifecycle event types."""
    LIST_REQUESTED = "list_requested"
    LIST_APPLIED = "list_applied"
    LIST_DISCARDED = "list_discarded"
    LIST_FAILED = "list_failed"


@dataclass
class LogEvent:
    """Structured log event with all optional fields."""
    timestamp: str
    event: str
    resource: str
    seq: Optional[int] = None
    page: Optional[int] = None
    duration_ms: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    def to_json(self) -> str:
        """Convert to JSON string, excluding None values."""
        data = {k: v for k, v in asdict(self).items() if v is not None}
        return json.dumps(data)


class StructuredLogger:
    """
    Emits JSON lines to stdout, one per list lifecycle event.

    Disabled loggers drop events, which keeps tests and quiet clients silent.
    """

    def __init__(self, resource: str, enabled: bool = True, stream=None):
        self.resource = resource
        self.enabled = enabled
        self.stream = stream
        self._start_times: Dict[int, float] = {}

    def _emit(self, event: LogEvent) -> None:
        if self.enabled:
            print(event.to_json(), file=self.stream or sys.stdout, flush=True)

    def _now(self) -> str:
        """Current UTC timestamp in ISO format."""
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def _elapsed_ms(self, seq: int) -> Optional[int]:
        started = self._start_times.pop(seq, None)
        if started is None:
            return None
        return int((time.time() - started) * 1000)

    def emit(
        self,
        event: str,
        seq: Optional[int] = None,
        page: Optional[int] = None,
        duration_ms: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ) -> None:
        """Emit a custom event."""
        self._emit(LogEvent(
            timestamp=self._now(),
            event=event,
            resource=self.resource,
            seq=seq,
            page=page,
            duration_ms=duration_ms,
            metadata=metadata,
            error=error,
        ))

    # ===== Convenience Methods =====

    def requested(self, seq: int, page: int, filters: Optional[Dict[str, Any]] = None) -> None:
        self._start_times[seq] = time.time()
        self.emit(
            EventType.LIST_REQUESTED.value,
            seq=seq,
            page=page,
            metadata={"filters": filters} if filters else None,
        )

    def applied(self, seq: int, page: int, total: int) -> None:
        self.emit(
            EventType.LIST_APPLIED.value,
            seq=seq,
            page=page,
            duration_ms=self._elapsed_ms(seq),
            metadata={"total": total},
        )

    def discarded(self, seq: int, page: int, last_applied: int) -> None:
        """Response arrived after a newer one was already applied."""
        self.emit(
            EventType.LIST_DISCARDED.value,
            seq=seq,
            page=page,
            duration_ms=self._elapsed_ms(seq),
            metadata={"last_applied_seq": last_applied},
        )

    def failed(self, seq: int, page: int, error: str) -> None:
        self.emit(
            EventType.LIST_FAILED.value,
            seq=seq,
            page=page,
            duration_ms=self._elapsed_ms(seq),
            error=error,
        )
