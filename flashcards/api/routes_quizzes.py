from __future__ import annotations

from typing import Tuple, Union
from uuid import UUID

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from flashcards.domain.errors import NotFoundError
from flashcards.domain.models.quiz_models import CompletedQuiz
from flashcards.services.quiz_service import QuizService
from fc_utils.logger_utils import logger

quizzes_bp = Blueprint('quizzes_bp', __name__)


def _quiz_service() -> QuizService:
    return current_app.extensions["quiz_service"]


@quizzes_bp.route('', methods=['GET'])
def list_quizzes() -> Response:
    """Quiz names available, grouped by category."""
    return jsonify(_quiz_service().list_quizzes())


@quizzes_bp.route('/<string:quiz_name>', methods=['GET'])
def get_quiz(quiz_name: str) -> Response:
    """Issue a new quiz by name."""
    quiz = _quiz_service().get_quiz(quiz_name)
    if quiz is None:
        raise NotFoundError(f"No match found for quiz: '{quiz_name}'")
    return jsonify(quiz.to_dict())


@quizzes_bp.route('/<string:quiz_name>/<string:quiz_id>', methods=['POST'])
def grade_quiz(quiz_name: str, quiz_id: str) -> Union[Response, Tuple[Response, int]]:
    """Grade the answers for an issued quiz."""
    try:
        parsed_id = UUID(quiz_id)
    except ValueError:
        raise NotFoundError(f"Quiz='{quiz_id}' not found")

    try:
        completed_quiz = CompletedQuiz.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        logger.debug(
            "Rejected completed quiz",
            extra={"quiz_id": quiz_id, "route": "grade_quiz"},
        )
        return jsonify({"code": 400, "message": "Invalid request format",
                        "errors": e.errors(include_url=False, include_context=False)}), 400

    result = _quiz_service().grade_quiz(parsed_id, completed_quiz)
    return jsonify(result.to_dict())
