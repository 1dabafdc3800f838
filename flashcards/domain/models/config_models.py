from datetime import timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PromptGroupDefinition(BaseModel):
    """
    A named group of related flash cards to draw a quiz from.

    minimum_prompts forces repeat prompts when the pool is smaller than the minimum.
    maximum_prompts of 0 means every configured prompt may be used.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: Optional[str] = None
    prompts: Optional[Dict[str, str]] = None
    minimum_prompts: int = 0
    maximum_prompts: int = 0
    max_duration: Optional[timedelta] = None


class FlashCardsConfiguration(BaseModel):
    """The quiz configuration: category -> prompt groups offered in that category."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    flash_card_group_map: Optional[Dict[str, Optional[List[Optional[PromptGroupDefinition]]]]] = Field(
        default=None, description="Prompt groups, keyed by category."
    )
