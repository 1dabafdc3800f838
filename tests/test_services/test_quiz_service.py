import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from flashcards.domain.errors import NotFoundError, ResultPersistenceError
from flashcards.domain.models.quiz_models import CompletedQuiz
from flashcards.infrastructure.result_store import JsonResultStore
from flashcards.services.config_catalog import ConfigCatalog
from flashcards.services.grading_engine import GradingEngine
from flashcards.services.quiz_generator import QuizGenerator
from flashcards.services.quiz_service import QuizService


def _correct_answers(quiz):
    return CompletedQuiz(name=quiz.name, answers=[p.answer for p in quiz.prompts])


class TestQuizService:
    """Tests for issuing and grading quizzes."""

    def test_list_quizzes_by_category(self, quiz_service):
        assert quiz_service.list_quizzes() == {
            "Addition": ["Adding By 01", "Adding By 02"],
            "Division": ["Dividing By 02"],
        }

    def test_get_quiz_issues_and_caches(self, quiz_service):
        quiz = quiz_service.get_quiz("adding by 02")

        assert quiz is not None
        assert quiz.name == "Adding By 02"
        assert len(quiz.prompts) == 5
        assert quiz_service.cache.get_if_present(quiz.id) is quiz

    def test_get_quiz_unknown_name(self, quiz_service):
        assert quiz_service.get_quiz("Subtracting By 09") is None
        assert len(quiz_service.cache) == 0

    def test_each_get_issues_a_new_quiz(self, quiz_service):
        first = quiz_service.get_quiz("Adding By 01")
        second = quiz_service.get_quiz("Adding By 01")

        assert first.id != second.id
        assert len(quiz_service.cache) == 2

    def test_grade_quiz_all_correct(self, quiz_service, tmp_path):
        quiz = quiz_service.get_quiz("Adding By 01")

        result = quiz_service.grade_quiz(quiz.id, _correct_answers(quiz))

        assert result.prompt_count == 3
        assert result.correct_answers == 3
        assert result.percentage == 100

        saved = json.loads((tmp_path / "results" / f"{quiz.id}.json").read_text())
        assert saved["id"] == str(quiz.id)
        assert len(saved["completedPrompts"]) == 3
        assert all(p["correctAnswer"] for p in saved["completedPrompts"])

    def test_grade_never_issued_quiz(self, quiz_service):
        with pytest.raises(NotFoundError, match="not found"):
            quiz_service.grade_quiz(uuid4(), CompletedQuiz(name="Adding By 01", answers=["1"]))

    def test_grade_name_mismatch(self, quiz_service):
        quiz = quiz_service.get_quiz("Adding By 01")
        submission = CompletedQuiz(name="Adding By 02", answers=[p.answer for p in quiz.prompts])

        with pytest.raises(NotFoundError, match="Quiz name mismatch"):
            quiz_service.grade_quiz(quiz.id, submission)

    def test_grade_can_be_repeated_by_default(self, quiz_service):
        quiz = quiz_service.get_quiz("Dividing By 02")

        first = quiz_service.grade_quiz(quiz.id, _correct_answers(quiz))
        second = quiz_service.grade_quiz(quiz.id, CompletedQuiz(name=quiz.name, answers=["x", "x"]))

        assert first.percentage == 100
        assert second.percentage == 0

    def test_single_use_rejects_second_grade(self, configuration):
        service = QuizService(catalog=ConfigCatalog(configuration), single_use=True)
        quiz = service.get_quiz("Dividing By 02")

        service.grade_quiz(quiz.id, _correct_answers(quiz))

        with pytest.raises(NotFoundError):
            service.grade_quiz(quiz.id, _correct_answers(quiz))

    def test_persistence_failure_propagates(self, configuration):
        store = MagicMock()
        store.save.side_effect = ResultPersistenceError()
        service = QuizService(catalog=ConfigCatalog(configuration), result_store=store)
        quiz = service.get_quiz("Adding By 01")

        with pytest.raises(ResultPersistenceError):
            service.grade_quiz(quiz.id, _correct_answers(quiz))
        store.save.assert_called_once()

    def test_returned_and_stored_results_share_one_clock_reading(self, configuration, tmp_path):
        issued_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        # Each clock read moves one second forward, across the minute boundary
        readings = iter([issued_at + timedelta(seconds=59), issued_at + timedelta(seconds=60)])
        service = QuizService(
            catalog=ConfigCatalog(configuration),
            generator=QuizGenerator(clock=lambda: issued_at),
            grading_engine=GradingEngine(clock=lambda: next(readings)),
            result_store=JsonResultStore(tmp_path),
        )
        quiz = service.get_quiz("Adding By 01")

        result = service.grade_quiz(quiz.id, _correct_answers(quiz))

        saved = json.loads((tmp_path / f"{quiz.id}.json").read_text())
        assert (result.time_minutes, result.time_seconds) == (0, 59)
        assert (saved["timeMinutes"], saved["timeSeconds"]) == (0, 59)
        assert saved["correctAnswers"] == result.correct_answers
