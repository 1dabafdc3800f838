import os
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from flashcards.api.routes_quizzes import quizzes_bp
from flashcards.domain.errors import BaseAppException
from flashcards.domain.models.config_models import FlashCardsConfiguration
from flashcards.infrastructure.config import Settings, settings as default_settings
from flashcards.infrastructure.config_loader import load_configuration
from flashcards.infrastructure.result_store import JsonResultStore
from flashcards.services.config_catalog import ConfigCatalog
from flashcards.services.quiz_cache import QuizCache
from flashcards.services.quiz_service import QuizService
from fc_utils.logger_utils import logger


def build_quiz_service(app_settings: Settings,
                       configuration: Optional[FlashCardsConfiguration] = None) -> QuizService:
    """Wire the quiz service from settings, loading the configuration file unless one is given."""
    if configuration is None:
        configuration = load_configuration(app_settings.QUIZ_CONFIG_PATH)
    return QuizService(
        catalog=ConfigCatalog(configuration),
        cache=QuizCache(
            max_size=app_settings.QUIZ_CACHE_MAX_SIZE,
            ttl_seconds=app_settings.QUIZ_CACHE_TTL_SECONDS,
        ),
        result_store=JsonResultStore(app_settings.RESULTS_DIR),
        single_use=app_settings.QUIZ_SINGLE_USE,
    )


def _error_body(code: int, message: str):
    return jsonify({"code": code, "message": message}), code


def create_app(app_settings: Optional[Settings] = None,
               configuration: Optional[FlashCardsConfiguration] = None,
               quiz_service: Optional[QuizService] = None):
    """Application factory for Flask."""
    app_settings = app_settings or default_settings
    app = Flask(__name__)

    # --- Core Configuration ---
    app.config['JSON_AS_ASCII'] = False
    app.config['DEBUG'] = app_settings.DEBUG
    CORS(app, resources={r"/quizzes*": {"origins": "*"}})

    # --- Services ---
    app.extensions["quiz_service"] = quiz_service or build_quiz_service(app_settings, configuration)

    # --- Blueprints Registration ---
    app.register_blueprint(quizzes_bp, url_prefix='/quizzes')

    # --- Health Checks ---
    @app.route('/health')
    def health_check():
        return jsonify({"status": "healthy"}), 200

    # --- Error Handling ---
    @app.errorhandler(BaseAppException)
    def handle_app_exception(error: BaseAppException):
        if error.http_status >= 500:
            logger.error(f"Request to {request.path} failed: {error}", exc_info=True)
        else:
            logger.warning(f"Request to {request.path} rejected: {error}")
        return _error_body(error.http_status, str(error))

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return _error_body(error.code, error.description)

    @app.errorhandler(Exception)
    def handle_exception(error):
        logger.error(f"Unhandled exception for path {request.path}: {error}", exc_info=True)
        return _error_body(500, "Internal Server Error")

    logger.info(f"Flask App created successfully in {app_settings.FLASK_ENV} mode.")
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get("PORT", 5000)), threaded=True)
