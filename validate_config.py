"""
Quiz Configuration Validator
Checks a quiz configuration file before the app starts and lists every problem found
"""
import sys

from flashcards.domain.errors import ConfigurationError
from flashcards.infrastructure.config import settings
from flashcards.infrastructure.config_loader import load_configuration


def validate_configuration(path):
    """Validate the configuration file and return (errors, summary)."""
    try:
        configuration = load_configuration(path)
    except ConfigurationError as e:
        errors = [str(v) for v in e.violations] or [str(e)]
        return errors, {}

    summary = {
        category: len(groups)
        for category, groups in configuration.flash_card_group_map.items()
    }
    return [], summary


def print_validation_results(path):
    """Print validation results and return False if the file is unusable."""
    print("=" * 70)
    print(f"Quiz Configuration Validation: {path}")
    print("=" * 70)
    print()

    errors, summary = validate_configuration(path)

    if errors:
        print("CRITICAL ERRORS:")
        print("-" * 70)
        for error in errors:
            print(f"  {error}")
        print()
        print("=" * 70)
        print("Configuration validation FAILED!")
        print("=" * 70)
        return False

    for category, count in summary.items():
        print(f"  {category:30s} {count} quiz(zes)")
    print()
    print("=" * 70)
    print("Configuration validation PASSED!")
    print("=" * 70)
    return True


if __name__ == '__main__':
    config_path = sys.argv[1] if len(sys.argv) > 1 else settings.QUIZ_CONFIG_PATH
    success = print_validation_results(config_path)
    sys.exit(0 if success else 1)
