"""Fact exhaustion: draw untold facts one at a time without repeats."""

from __future__ import annotations

import random
from dataclasses import dataclass

from fourth_facts.facts.catalog import DEFAULT_POOLS, FactCategory


@dataclass(frozen=True)
class FactPool:
    """The facts of one category not yet told in the current conversation."""

    category: FactCategory
    facts: frozenset[str]

    @classmethod
    def default(cls, category: FactCategory) -> FactPool:
        return cls(category=category, facts=DEFAULT_POOLS[category])

    def __len__(self) -> int:
        return len(self.facts)

    def __contains__(self, fact: object) -> bool:
        return fact in self.facts

    @property
    def empty(self) -> bool:
        return not self.facts

    def without(self, fact: str) -> FactPool:
        return FactPool(category=self.category, facts=self.facts - {fact})


@dataclass(frozen=True)
class DrawResult:
    fact: str | None
    remaining: FactPool

    @property
    def exhausted(self) -> bool:
        return self.fact is None


def draw_fact(pool: FactPool, rng: random.Random | None = None) -> DrawResult:
    """Pick one untold fact uniformly at random.

    Returns the fact together with the pool minus that fact. An empty pool
    yields an exhausted result carrying the pool unchanged. The input pool is
    never modified; callers persist ``remaining`` themselves.
    """
    if pool.empty:
        return DrawResult(fact=None, remaining=pool)

    # Sorted so that a seeded generator gives the same draw on every run
    fact = (rng or random).choice(sorted(pool.facts))
    return DrawResult(fact=fact, remaining=pool.without(fact))
