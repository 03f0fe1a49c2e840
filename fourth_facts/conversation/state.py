"""Per-conversation memory of which facts are still untold.

The server keeps nothing between turns. The platform echoes this object back
on every request inside the conversation data and we return an updated copy.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from fourth_facts.facts.catalog import DEFAULT_POOLS, FactCategory
from fourth_facts.facts.pool import FactPool

logger = logging.getLogger(__name__)

_FIELDS = {
    FactCategory.HISTORY: "history_facts",
    FactCategory.HEADQUARTERS: "hq_facts",
    FactCategory.CATS: "cat_facts",
}


class RememberedState(BaseModel):
    """Remaining facts per category. ``None`` = nothing told yet, ``[]`` = exhausted."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    history_facts: list[str] | None = Field(default=None, alias="historyFacts")
    hq_facts: list[str] | None = Field(default=None, alias="hqFacts")
    cat_facts: list[str] | None = Field(default=None, alias="catFacts")

    def remembered(self, category: FactCategory) -> list[str] | None:
        return getattr(self, _FIELDS[category])

    def pool(self, category: FactCategory) -> FactPool:
        remembered = self.remembered(category)
        if remembered is None:
            return FactPool.default(category)

        defaults = DEFAULT_POOLS[category]
        facts = frozenset(remembered)
        foreign = facts - defaults
        if foreign:
            logger.warning(
                "Dropping %d unknown %s fact(s) from conversation data", len(foreign), category
            )
        return FactPool(category=category, facts=facts & defaults)

    def with_pool(self, pool: FactPool) -> RememberedState:
        return self.model_copy(update={_FIELDS[pool.category]: sorted(pool.facts)})

    def known_exhausted(self, category: FactCategory) -> bool:
        """True only when this conversation has already emptied the category."""
        remembered = self.remembered(category)
        return remembered is not None and not DEFAULT_POOLS[category].intersection(remembered)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
