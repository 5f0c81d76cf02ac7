"""
In-memory TTL cache for analysis results, plus the cache key derivation.
"""
import hashlib
import json
from time import time
from typing import Callable, Optional

from app.models.selection import (
    AnalysisContext,
    SelectionAnalysis,
    UserProfile,
    WorkoutSelections,
)


# Profile fields that never influence scoring
PROFILE_EXCLUDE = {"learningProfile": True, "preferences": {"aiAssistanceLevel"}}


def analysis_cache_key(
    profile: UserProfile,
    selections: WorkoutSelections,
    context: AnalysisContext,
) -> str:
    """Stable digest of everything that can change an analysis result."""
    payload = {
        "profile": profile.model_dump(mode="json", exclude=PROFILE_EXCLUDE),
        "selections": selections.model_dump(mode="json"),
        "context": context.model_dump(mode="json"),
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class TTLCache:
    """
    Maps cache keys to analysis snapshots with a per-entry timestamp.

    Expiry is checked lazily on read; expired entries are swept on write.
    """

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time):
        self.ttl = ttl_seconds
        self._clock = clock
        self._store: dict[str, tuple[float, SelectionAnalysis]] = {}

    def get(self, key: str) -> Optional[SelectionAnalysis]:
        item = self._store.get(key)
        if not item:
            return None
        ts, value = item
        if self._clock() - ts >= self.ttl:
            self._store.pop(key, None)
            return None
        return value

    def set(self, key: str, value: SelectionAnalysis) -> None:
        now = self._clock()
        self.sweep(now)
        self._store[key] = (now, value)

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock() if now is None else now
        expired = [key for key, (ts, _) in self._store.items() if now - ts >= self.ttl]
        for key in expired:
            del self._store[key]
        return len(expired)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store
