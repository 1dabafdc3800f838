from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from flashcards.domain.errors import InvalidArgumentError, InvalidStateError
from flashcards.domain.models.quiz_models import (
    CompletedPrompt,
    CompletedQuiz,
    InternalQuizResult,
    Quiz,
    QuizPrompt,
    QuizResult,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_correct_percentage(correct_count: int, prompt_count: int) -> int:
    """Whole percentage of correct answers, rounded down. 0 for an empty quiz."""
    if prompt_count <= 0:
        return 0
    return correct_count * 100 // prompt_count


def split_duration(started_at: datetime, finished_at: datetime) -> Tuple[int, int]:
    """Elapsed time as (whole minutes, remaining whole seconds). Negative spans count as zero."""
    elapsed = max(0, int((finished_at - started_at).total_seconds()))
    return divmod(elapsed, 60)


class GradingEngine:
    """
    Compares a submitted answer sheet with the quiz that was issued.

    The result returned to the quiz taker counts exact matches only. The
    per-prompt outcomes kept internally mark an answer correct ignoring case.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self._clock = clock

    @staticmethod
    def _check_preconditions(quiz: Optional[Quiz], submission: Optional[CompletedQuiz]) -> None:
        if quiz is None:
            raise InvalidArgumentError("quiz must not be null")
        if submission is None:
            raise InvalidArgumentError("completedQuiz must not be null")
        if quiz.prompts is None:
            raise InvalidStateError("quiz.prompts must not be null")
        if quiz.created_at is None:
            raise InvalidStateError("quiz.createdAt must not be null")
        if submission.answers is None:
            raise InvalidArgumentError("answers must not be null")
        if len(quiz.prompts) != len(submission.answers):
            raise InvalidArgumentError(
                f"prompts ({len(quiz.prompts)}) and answers ({len(submission.answers)}) "
                f"size must be equivalent"
            )

    @staticmethod
    def _answered(quiz: Quiz, submission: CompletedQuiz) -> List[Tuple[QuizPrompt, str]]:
        return [
            (prompt, answer)
            for prompt, answer in zip(quiz.prompts, submission.answers)
            if prompt is not None
        ]

    def _score(self, quiz: Quiz, answered: List[Tuple[QuizPrompt, str]]) -> dict:
        prompt_count = len(answered)
        correct_count = sum(1 for prompt, answer in answered if answer == prompt.answer)
        minutes, seconds = split_duration(quiz.created_at, self._clock())
        return {
            "name": quiz.name,
            "prompt_count": prompt_count,
            "correct_answers": correct_count,
            "percentage": get_correct_percentage(correct_count, prompt_count),
            "time_minutes": minutes,
            "time_seconds": seconds,
        }

    def grade(self, quiz: Quiz, submission: CompletedQuiz) -> QuizResult:
        """
        Grade a submission for the quiz taker.

        :raises InvalidArgumentError: if either side is missing or the answer count differs.
        :raises InvalidStateError: if the quiz has no prompts list or creation time.
        """
        self._check_preconditions(quiz, submission)
        return QuizResult(**self._score(quiz, self._answered(quiz, submission)))

    def grade_internal(self, quiz: Quiz, submission: CompletedQuiz) -> InternalQuizResult:
        """Grade a submission for storage, keeping every prompt's outcome."""
        self._check_preconditions(quiz, submission)
        answered = self._answered(quiz, submission)
        completed_prompts = [
            CompletedPrompt(
                prompt=prompt.prompt,
                expected_answer=prompt.answer,
                answer_provided=answer,
                correct_answer=answer is not None and answer.lower() == prompt.answer.lower(),
            )
            for prompt, answer in answered
        ]
        return InternalQuizResult(
            id=quiz.id,
            created_at=quiz.created_at,
            completed_prompts=completed_prompts,
            **self._score(quiz, answered),
        )
