import json
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from flashcards.domain.errors import ConfigurationError
from flashcards.domain.models.config_models import FlashCardsConfiguration
from flashcards.utils.config_validation import Violation, validate_configuration
from fc_utils.logger_utils import logger


def parse_configuration(data: dict) -> FlashCardsConfiguration:
    """
    Build and validate a configuration from already decoded JSON.

    :raises ConfigurationError: if the data does not describe a valid configuration.
    """
    try:
        configuration = FlashCardsConfiguration.model_validate(data)
    except ValidationError as e:
        violations = [
            Violation(".".join(str(part) for part in error["loc"]), error["msg"])
            for error in e.errors()
        ]
        raise ConfigurationError(violations=violations) from e

    violations = validate_configuration(configuration)
    if violations:
        raise ConfigurationError(violations=violations)
    return configuration


def load_configuration(path: Union[str, Path]) -> FlashCardsConfiguration:
    """
    Load the quiz configuration from a JSON file.

    :param path: Location of the configuration file.
    :return: The validated configuration.
    :raises ConfigurationError: if the file is unreadable, not JSON or invalid.
    """
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.error(f"Could not read quiz configuration {config_path}: {e}")
        raise ConfigurationError(f"Could not read quiz configuration '{config_path}'") from e
    except json.JSONDecodeError as e:
        logger.error(f"Quiz configuration {config_path} is not valid JSON: {e}")
        raise ConfigurationError(f"Quiz configuration '{config_path}' is not valid JSON") from e

    try:
        configuration = parse_configuration(data)
    except ConfigurationError as e:
        logger.error(
            "Quiz configuration failed validation",
            extra={
                "path": str(config_path),
                "violations": [str(v) for v in e.violations],
                "component": "config_loader",
            },
        )
        raise

    logger.info(
        "Loaded quiz configuration",
        extra={
            "path": str(config_path),
            "categories": len(configuration.flash_card_group_map),
            "component": "config_loader",
        },
    )
    return configuration
