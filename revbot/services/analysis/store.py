"""In-memory store for analysis results with expiry."""

import threading
import time
import uuid
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

import structlog

from revbot.core.exceptions import ConfigurationError
from revbot.services.analysis.pipeline import AnalysisResult

logger = structlog.get_logger()


@dataclass(frozen=True)
class StoredAnalysis:
    """A completed or failed analysis, kept for later lookup."""

    execution_id: str
    status: Literal["completed", "failed"]
    stored_at: float
    result: AnalysisResult | None = None
    error: str | None = None
    repository: str | None = None
    pr_number: int | None = None


class AnalysisStore:
    """
    Holds analysis outcomes keyed by execution id.

    Entries expire ``ttl_seconds`` after they are stored. When more than
    ``max_entries`` are held the oldest ones are evicted first.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ConfigurationError("ttl_seconds must be positive", {"ttl_seconds": ttl_seconds})
        if max_entries < 1:
            raise ConfigurationError("max_entries must be at least 1", {"max_entries": max_entries})

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, StoredAnalysis] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def new_execution_id() -> str:
        return uuid.uuid4().hex

    def save_completed(
        self,
        execution_id: str,
        result: AnalysisResult,
        repository: str | None = None,
        pr_number: int | None = None,
    ) -> StoredAnalysis:
        return self._put(
            StoredAnalysis(
                execution_id=execution_id,
                status="completed",
                stored_at=self._clock(),
                result=result,
                repository=repository,
                pr_number=pr_number,
            )
        )

    def save_failed(
        self,
        execution_id: str,
        error: str,
        repository: str | None = None,
        pr_number: int | None = None,
    ) -> StoredAnalysis:
        return self._put(
            StoredAnalysis(
                execution_id=execution_id,
                status="failed",
                stored_at=self._clock(),
                error=error,
                repository=repository,
                pr_number=pr_number,
            )
        )

    def get(self, execution_id: str) -> StoredAnalysis | None:
        """Stored entry for an execution id, or None if unknown or expired."""
        with self._lock:
            entry = self._entries.get(execution_id)
            if entry is None:
                return None
            if self._is_expired(entry):
                del self._entries[execution_id]
                return None
            return entry

    def evict_expired(self) -> int:
        """Drop all expired entries and return how many were removed."""
        with self._lock:
            return self._evict_expired_locked()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _put(self, entry: StoredAnalysis) -> StoredAnalysis:
        with self._lock:
            self._entries.pop(entry.execution_id, None)
            self._entries[entry.execution_id] = entry
            self._evict_expired_locked()
            while len(self._entries) > self.max_entries:
                evicted_id, _ = self._entries.popitem(last=False)
                logger.debug("Evicted analysis result", execution_id=evicted_id)
        return entry

    def _is_expired(self, entry: StoredAnalysis) -> bool:
        return self._clock() - entry.stored_at >= self.ttl_seconds

    def _evict_expired_locked(self) -> int:
        # Entries are in insertion order, so expired ones sit at the front
        removed = 0
        while self._entries:
            oldest = next(iter(self._entries.values()))
            if not self._is_expired(oldest):
                break
            self._entries.popitem(last=False)
            removed += 1
        return removed
