"""
Validation rules for the quiz configuration.

Each check returns a list of Violation objects instead of raising, so a
single pass reports everything wrong with a configuration file.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, List, Optional

from flashcards.domain.models.config_models import FlashCardsConfiguration, PromptGroupDefinition

MAX_CATEGORY_LENGTH = 30
MAX_GROUP_NAME_LENGTH = 30
MAX_PROMPT_LENGTH = 50
MIN_DURATION = timedelta(seconds=10)
MAX_DURATION = timedelta(hours=1)

_CATEGORY_PATTERN = re.compile(r"[\w ]*")


@dataclass(frozen=True)
class Violation:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path} {self.message}"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_text(path: str, value: Optional[str], max_length: int) -> List[Violation]:
    """Not blank and no longer than max_length characters."""
    if _is_blank(value):
        return [Violation(path, "must not be blank")]
    if len(value) > max_length:
        return [Violation(path, f"must be {max_length} characters or less")]
    return []


def validate_category(category: Optional[str]) -> List[Violation]:
    path = f"flashCardGroupMap.{category}"
    violations = validate_text(path, category, MAX_CATEGORY_LENGTH)
    if not violations and not _CATEGORY_PATTERN.fullmatch(category):
        violations.append(Violation(path, "must contain only alpha-numeric characters and spaces"))
    return violations


def validate_prompts(path: str, prompts: Optional[Dict[str, str]]) -> List[Violation]:
    if not prompts:
        return [Violation(f"{path}.prompts", "must not be empty")]
    violations = []
    for prompt, answer in prompts.items():
        violations.extend(validate_text(f"{path}.prompts<K>[{prompt}]", prompt, MAX_PROMPT_LENGTH))
        violations.extend(validate_text(f"{path}.prompts[{prompt}]", answer, MAX_PROMPT_LENGTH))
    return violations


def validate_prompt_counts(path: str, group: PromptGroupDefinition) -> List[Violation]:
    """
    Both counts must be zero or positive. A maximum of 0 means unbounded, so the
    min <= max rule only applies when both are set.
    """
    violations = []
    if group.minimum_prompts < 0:
        violations.append(Violation(f"{path}.minimumPrompts", "must be greater than or equal to 0"))
    if group.maximum_prompts < 0:
        violations.append(Violation(f"{path}.maximumPrompts", "must be greater than or equal to 0"))
    if (group.minimum_prompts > 0 and group.maximum_prompts > 0
            and group.minimum_prompts > group.maximum_prompts):
        violations.append(Violation(path, "minimumPrompts must not be larger than maximumPrompts"))
    return violations


def validate_max_duration(path: str, max_duration: Optional[timedelta]) -> List[Violation]:
    if max_duration is None:
        return []
    if max_duration < MIN_DURATION:
        return [Violation(f"{path}.maxDuration", "must be greater than or equal to 10 seconds")]
    if max_duration > MAX_DURATION:
        return [Violation(f"{path}.maxDuration", "must be shorter than or equal to 1 hour")]
    return []


def validate_group(path: str, group: Optional[PromptGroupDefinition]) -> List[Violation]:
    if group is None:
        return [Violation(path, "must not be null")]
    violations = validate_text(f"{path}.name", group.name, MAX_GROUP_NAME_LENGTH)
    violations.extend(validate_prompts(path, group.prompts))
    violations.extend(validate_prompt_counts(path, group))
    violations.extend(validate_max_duration(path, group.max_duration))
    return violations


def validate_configuration(configuration: Optional[FlashCardsConfiguration]) -> List[Violation]:
    """
    Validate a whole configuration.

    :param configuration: The parsed configuration.
    :return: Every violation found, empty when the configuration is valid.
    """
    if configuration is None:
        return [Violation("configuration", "must not be null")]
    group_map = configuration.flash_card_group_map
    if not group_map:
        return [Violation("flashCardGroupMap", "must not be empty")]

    violations: List[Violation] = []
    seen_names: Dict[str, str] = {}
    for category, groups in group_map.items():
        violations.extend(validate_category(category))
        category_path = f"flashCardGroupMap.{category}"
        if not groups:
            violations.append(Violation(category_path, "must not be empty"))
            continue
        for index, group in enumerate(groups):
            group_path = f"{category_path}[{index}]"
            violations.extend(validate_group(group_path, group))
            if group is None or _is_blank(group.name):
                continue
            key = group.name.lower()
            if key in seen_names:
                violations.append(
                    Violation(f"{group_path}.name", f"duplicates the quiz name at {seen_names[key]}")
                )
            else:
                seen_names[key] = group_path
    return violations
