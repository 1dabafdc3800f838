from __future__ import annotations

from typing import Dict, List, Optional
from uuid import UUID

from flashcards.domain.errors import InvalidArgumentError, NotFoundError
from flashcards.domain.models.quiz_models import CompletedQuiz, Quiz, QuizResult
from flashcards.infrastructure.result_store import JsonResultStore
from flashcards.services.config_catalog import ConfigCatalog
from flashcards.services.grading_engine import GradingEngine
from flashcards.services.quiz_cache import QuizCache
from flashcards.services.quiz_generator import QuizGenerator
from fc_utils.logger_utils import logger


class QuizService:
    """
    Issues quizzes from the catalog and grades them.

    An issued quiz lives in the cache until it expires or is evicted; only a
    live quiz can be graded. By default a quiz can be graded more than once.
    With single_use set, a successful grade removes the quiz from the cache.
    """

    def __init__(
        self,
        catalog: ConfigCatalog,
        generator: Optional[QuizGenerator] = None,
        cache: Optional[QuizCache] = None,
        grading_engine: Optional[GradingEngine] = None,
        result_store: Optional[JsonResultStore] = None,
        single_use: bool = False,
    ):
        self.catalog = catalog
        self.generator = generator or QuizGenerator()
        self.cache = cache or QuizCache()
        self.grading_engine = grading_engine or GradingEngine()
        self.result_store = result_store
        self.single_use = single_use

    def list_quizzes(self) -> Dict[str, List[str]]:
        """Quiz names available, grouped by category."""
        return {
            category: [group.name for group in groups]
            for category, groups in self.catalog.groups_by_category().items()
        }

    def get_quiz(self, quiz_name: str) -> Optional[Quiz]:
        """
        Issue a quiz by name, ignoring case.

        :param quiz_name: The name of the quiz to issue.
        :return: The issued quiz, or None if no group has that name.
        """
        if quiz_name is None:
            raise InvalidArgumentError("quizName must not be null")
        definition = self.catalog.find(quiz_name)
        if definition is None:
            logger.info(f"No quiz configured with name '{quiz_name}'")
            return None

        quiz = self.generator.generate(definition)
        self.cache.put(quiz.id, quiz)
        logger.info(
            "Issued quiz",
            extra={
                "quiz_id": str(quiz.id),
                "quiz_name": quiz.name,
                "prompt_count": len(quiz.prompts),
                "component": "quiz_service",
            },
        )
        return quiz

    def grade_quiz(self, quiz_id: UUID, completed_quiz: CompletedQuiz) -> QuizResult:
        """
        Grade a completed quiz against the quiz that was issued under quiz_id.

        :param quiz_id: The id of the issued quiz.
        :param completed_quiz: The answers submitted.
        :return: The graded result.
        :raises NotFoundError: if the quiz is not live or the names differ.
        :raises ResultPersistenceError: if the result cannot be stored.
        """
        if quiz_id is None:
            raise InvalidArgumentError("id must not be null")
        if completed_quiz is None:
            raise InvalidArgumentError("completedQuiz must not be null")

        quiz = self.cache.get_if_present(quiz_id)
        if quiz is None:
            logger.warning(
                "Graded quiz not found in cache",
                extra={"quiz_id": str(quiz_id), "component": "quiz_service"},
            )
            raise NotFoundError(f"Quiz='{quiz_id}' not found")
        if quiz.name != completed_quiz.name:
            logger.warning(
                "Graded quiz name mismatch",
                extra={
                    "quiz_id": str(quiz_id),
                    "quiz_name": quiz.name,
                    "submitted_name": completed_quiz.name,
                    "component": "quiz_service",
                },
            )
            raise NotFoundError("Quiz name mismatch")

        # Stored and returned results come from the same grading pass
        internal_result = self.grading_engine.grade_internal(quiz, completed_quiz)
        if self.result_store is not None:
            self.result_store.save(internal_result)
        result = internal_result.to_quiz_result()
        if self.single_use:
            self.cache.invalidate(quiz_id)

        logger.info(
            "Graded quiz",
            extra={
                "quiz_id": str(quiz_id),
                "quiz_name": quiz.name,
                "percentage": result.percentage,
                "component": "quiz_service",
            },
        )
        return result
