from __future__ import annotations

import threading
import time
from typing import Callable, Optional
from uuid import UUID

from cachetools import TTLCache

from flashcards.domain.models.quiz_models import Quiz

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_SECONDS = 3 * 60 * 60


class QuizCache:
    """
    Issued quizzes awaiting grading, keyed by quiz id.

    Holds at most max_size quizzes; each one expires ttl_seconds after it was
    written, no matter how often it is read. The least recently used quiz is
    evicted first when the cache is full.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl_seconds, timer=timer)
        # TTLCache is not thread-safe
        self._lock = threading.Lock()

    def put(self, quiz_id: UUID, quiz: Quiz) -> None:
        with self._lock:
            self._cache[quiz_id] = quiz

    def get_if_present(self, quiz_id: UUID) -> Optional[Quiz]:
        """Return the live quiz for quiz_id, or None if it was never issued, expired or was evicted."""
        with self._lock:
            return self._cache.get(quiz_id)

    def invalidate(self, quiz_id: UUID) -> None:
        with self._lock:
            self._cache.pop(quiz_id, None)

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)
