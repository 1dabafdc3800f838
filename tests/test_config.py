"""
Test configuration settings to ensure all required fields are present.
"""
from flashcards.infrastructure.config import Settings


def test_quiz_settings_defaults(monkeypatch):
    """Defaults apply when nothing is set in the environment."""
    for name in ('QUIZ_CONFIG_PATH', 'QUIZ_CACHE_MAX_SIZE', 'QUIZ_CACHE_TTL_SECONDS',
                 'QUIZ_SINGLE_USE', 'RESULTS_DIR'):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.QUIZ_CONFIG_PATH == "appConfig/flashcards.json"
    assert settings.QUIZ_CACHE_MAX_SIZE == 100
    assert settings.QUIZ_CACHE_TTL_SECONDS == 10800
    assert settings.QUIZ_SINGLE_USE is False
    assert settings.RESULTS_DIR == "results"


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv('QUIZ_CACHE_MAX_SIZE', '5')
    monkeypatch.setenv('QUIZ_SINGLE_USE', 'true')
    monkeypatch.setenv('LOG_LEVEL', 'DEBUG')

    settings = Settings(_env_file=None)

    assert settings.QUIZ_CACHE_MAX_SIZE == 5
    assert settings.QUIZ_SINGLE_USE is True
    assert settings.LOG_LEVEL == "DEBUG"
