from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from flashcards.domain.errors import InvalidStateError
from flashcards.domain.models.config_models import FlashCardsConfiguration, PromptGroupDefinition
from fc_utils.logger_utils import logger

GroupsByCategory = Mapping[str, Tuple[PromptGroupDefinition, ...]]


class ConfigCatalog:
    """
    Read-only view over the quiz configuration.

    The view is built on first access, exactly once even when several request
    threads race for it, and never changes afterwards.
    """

    def __init__(self, configuration: Optional[FlashCardsConfiguration]):
        self._configuration = configuration
        self._lock = threading.Lock()
        self._by_category: Optional[GroupsByCategory] = None
        self._by_name: Optional[Mapping[str, PromptGroupDefinition]] = None

    def _ensure_built(self) -> None:
        if self._by_name is not None:
            return
        with self._lock:
            if self._by_name is not None:
                return
            if self._configuration is None:
                raise InvalidStateError("flashCardsConfiguration must not be null")
            group_map = self._configuration.flash_card_group_map
            if group_map is None:
                raise InvalidStateError("flashCardGroupMap must not be null")

            by_category = {}
            by_name = {}
            for category, groups in group_map.items():
                if category is None or not groups:
                    continue
                named = tuple(g for g in groups if g is not None and g.name and g.name.strip())
                if not named:
                    continue
                by_category[category] = named
                for group in named:
                    by_name.setdefault(group.name, group)

            self._by_category = MappingProxyType(by_category)
            # Published last: it is the flag the unlocked fast path checks.
            self._by_name = MappingProxyType(by_name)
            logger.info(
                "Built quiz catalog",
                extra={
                    "categories": len(by_category),
                    "quizzes": len(by_name),
                    "component": "config_catalog",
                },
            )

    def definitions(self) -> Mapping[str, PromptGroupDefinition]:
        """
        All configured prompt groups, keyed by quiz name.

        :raises InvalidStateError: if no configuration or group map was supplied.
        """
        self._ensure_built()
        return self._by_name

    def groups_by_category(self) -> GroupsByCategory:
        """All configured prompt groups, keyed by category."""
        self._ensure_built()
        return self._by_category

    def find(self, quiz_name: str) -> Optional[PromptGroupDefinition]:
        """Return the first group whose name matches quiz_name, ignoring case."""
        wanted = quiz_name.lower()
        for name, group in self.definitions().items():
            if name.lower() == wanted:
                return group
        return None
