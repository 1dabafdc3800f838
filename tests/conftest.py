import os

import pytest

# Settings are read at import time
os.environ.setdefault('FLASK_ENV', 'testing')
os.environ.setdefault('LOG_LEVEL', 'WARNING')

from flashcards.domain.models.config_models import FlashCardsConfiguration, PromptGroupDefinition
from flashcards.infrastructure.result_store import JsonResultStore
from flashcards.services.config_catalog import ConfigCatalog
from flashcards.services.quiz_service import QuizService


def make_group(name="Adding By 01", prompts=None, minimum=0, maximum=0):
    """A valid prompt group for happy-path tests."""
    if prompts is None:
        prompts = {"0 + 1": "1", "1 + 1": "2", "2 + 1": "3"}
    return PromptGroupDefinition(
        name=name, prompts=prompts, minimum_prompts=minimum, maximum_prompts=maximum
    )


@pytest.fixture
def group_factory():
    """Build valid prompt groups, overriding only what a test cares about."""
    return make_group


@pytest.fixture
def configuration():
    """A small configuration with two categories."""
    return FlashCardsConfiguration(
        flash_card_group_map={
            "Addition": [
                make_group("Adding By 01"),
                make_group("Adding By 02", {"0 + 2": "2", "1 + 2": "3"}, minimum=5, maximum=8),
            ],
            "Division": [
                make_group("Dividing By 02", {"2 / 2": "1", "4 / 2": "2"}),
            ],
        }
    )


@pytest.fixture
def quiz_service(configuration, tmp_path):
    """A quiz service writing its results to a temporary directory."""
    return QuizService(
        catalog=ConfigCatalog(configuration),
        result_store=JsonResultStore(tmp_path / "results"),
    )


@pytest.fixture
def app(quiz_service):
    """Create and configure a new app instance for each test."""
    from app import create_app
    app = create_app(quiz_service=quiz_service)
    app.config.update({"TESTING": True})
    yield app


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()
