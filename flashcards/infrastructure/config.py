from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # --- Core App Settings ---
    APP_NAME: str = "flashCards"
    FLASK_ENV: str = "production"
    DEBUG: bool = False

    # --- Quiz Configuration ---
    QUIZ_CONFIG_PATH: str = "appConfig/flashcards.json"

    # --- Issued Quiz Cache ---
    QUIZ_CACHE_MAX_SIZE: int = 100
    QUIZ_CACHE_TTL_SECONDS: int = 3 * 60 * 60
    # Remove an issued quiz from the cache once it has been graded
    QUIZ_SINGLE_USE: bool = False

    # --- Graded Results ---
    RESULTS_DIR: str = "results"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- Version for cache busting ---
    VERSION: str = "2024.12.06"

# Load settings
settings = Settings()

# Production readiness checks
if settings.FLASK_ENV == "production":
    if settings.DEBUG:
        raise ValueError("CRITICAL: DEBUG mode must be disabled in production.")
