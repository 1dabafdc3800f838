from __future__ import annotations

import random
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import UUID

from flashcards.domain.errors import InvalidArgumentError
from flashcards.domain.models.config_models import PromptGroupDefinition
from flashcards.domain.models.quiz_models import Quiz, QuizPrompt
from fc_utils.logger_utils import logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_copies_count(minimum_prompts: int, pool_size: int) -> int:
    """
    How many full passes over the prompt pool are needed to reach the minimum.

    :param minimum_prompts: How many prompts are desired, at minimum.
    :param pool_size: The count of configured prompts.
    :return: Number of copies of the pool, always at least 1.
    :raises InvalidArgumentError: if pool_size is not positive.
    """
    if pool_size <= 0:
        raise InvalidArgumentError("promptsMapSize must be greater than 0")
    wanted = max(1, minimum_prompts)
    full_copies, remainder = divmod(wanted, pool_size)
    if remainder > 0:
        full_copies += 1
    return full_copies


def get_upper_bound(pool_size: int, minimum_prompts: int, maximum_prompts: int) -> int:
    """The quiz length: the pool or the minimum, whichever is larger, capped by a positive maximum."""
    upper_bound = max(pool_size, minimum_prompts)
    if maximum_prompts > 0:
        upper_bound = min(upper_bound, maximum_prompts)
    return upper_bound


class QuizGenerator:
    """
    Turns a configured prompt group into a concrete, shuffled Quiz.

    The random source, id factory and clock are injectable so tests can make
    generation deterministic.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        id_factory: Callable[[], UUID] = uuid.uuid4,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._rng = rng or random.Random()
        # random.Random.shuffle is not atomic across threads
        self._rng_lock = threading.Lock()
        self._id_factory = id_factory
        self._clock = clock

    def _select_prompts(self, definition: PromptGroupDefinition) -> List[QuizPrompt]:
        prompts = definition.prompts
        pool_size = len(prompts)
        copies = get_copies_count(definition.minimum_prompts, pool_size)

        working = [
            QuizPrompt(prompt=prompt, answer=answer)
            for prompt, answer in prompts.items()
            for _ in range(copies)
        ]
        with self._rng_lock:
            self._rng.shuffle(working)

        upper_bound = get_upper_bound(pool_size, definition.minimum_prompts, definition.maximum_prompts)
        return working[:upper_bound]

    def generate(self, definition: Optional[PromptGroupDefinition]) -> Quiz:
        """
        Issue a new quiz from a prompt group.

        :param definition: The prompt group from the configuration.
        :return: A quiz with a fresh id and creation time.
        :raises InvalidArgumentError: if the definition or its prompts are missing.
        """
        if definition is None:
            raise InvalidArgumentError("flashCardGroup must not be null")
        if definition.prompts is None:
            raise InvalidArgumentError("flashCardGroup.prompts must not be null")

        quiz = Quiz(
            id=self._id_factory(),
            name=definition.name,
            created_at=self._clock(),
            prompts=self._select_prompts(definition),
        )
        logger.debug(
            "Generated quiz",
            extra={
                "quiz_id": str(quiz.id),
                "quiz_name": quiz.name,
                "prompt_count": len(quiz.prompts),
                "component": "quiz_generator",
            },
        )
        return quiz
