"""Fixed fact categories, their default pools and how they are presented."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class FactCategory(StrEnum):
    HISTORY = "history"
    HEADQUARTERS = "headquarters"
    CATS = "cats"


HISTORY_FACTS = frozenset(
    {
        "Fourth was founded in 1999.",
        "Fourth was founded by Derek and Edwina Lilley.",
        "Fourth went public in 2004.",
        "Ben is Fourth employee #1, is still our CEO",
        "Fourth has 1,100 customers across the world in 60 countries.",
    }
)

HQ_FACTS = frozenset(
    {
        "Fourth's headquarters is in London, Covent Garden.",
        "Fourth has over 30 cafeterias in its main campus.",
        "Fourth has over 10 fitness facilities in its main campus.",
    }
)

CAT_FACTS = frozenset(
    {
        "Cats are animals.",
        "Cats have nine lives.",
        "Cats descend from other cats.",
    }
)

DEFAULT_POOLS: Mapping[FactCategory, frozenset[str]] = MappingProxyType(
    {
        FactCategory.HISTORY: HISTORY_FACTS,
        FactCategory.HEADQUARTERS: HQ_FACTS,
        FactCategory.CATS: CAT_FACTS,
    }
)

COMPANY_CATEGORIES = (FactCategory.HISTORY, FactCategory.HEADQUARTERS)

# Speech
FACT_PREFIXES: Mapping[FactCategory, str] = MappingProxyType(
    {
        FactCategory.HISTORY: "Sure, here's a history fact. ",
        FactCategory.HEADQUARTERS: "Okay, here's a headquarters fact. ",
        FactCategory.CATS: "Alright, here's a cat fact. ",
    }
)
NEXT_FACT_DIRECTIVE = " Would you like to hear another fact?"

# 'cat meow' by tuberatanka (https://www.freesound.org/people/tuberatanka/sounds/110011/)
MEOW_SRC = "https://freesound.org/data/previews/110/110011_1537422-lq.mp3"

FOURTH_URL = "https://www.fourth.com/"


@dataclass(frozen=True)
class FactCard:
    """Visual companion to a spoken fact on screen-capable surfaces."""

    title: str
    link_url: str
    link_title: str = "Learn more"
    image_url: str | None = None
    image_alt: str = ""


FACT_CARDS: Mapping[FactCategory, FactCard] = MappingProxyType(
    {
        FactCategory.HISTORY: FactCard(title="Fourth's history", link_url=FOURTH_URL),
        FactCategory.HEADQUARTERS: FactCard(title="Fourth's headquarters", link_url=FOURTH_URL),
        FactCategory.CATS: FactCard(
            title="Cat fact",
            link_url="https://en.wikipedia.org/wiki/Cat",
            image_url="https://upload.wikimedia.org/wikipedia/commons/3/3a/Cat03.jpg",
            image_alt="A cat looking at the camera",
        ),
    }
)


def parse_category(value: object) -> FactCategory | None:
    """Map a platform argument to a category, ``None`` when it is not one."""
    if not isinstance(value, str):
        return None
    try:
        return FactCategory(value.strip().lower())
    except ValueError:
        return None


def other_company_category(category: FactCategory) -> FactCategory:
    if category is FactCategory.HISTORY:
        return FactCategory.HEADQUARTERS
    if category is FactCategory.HEADQUARTERS:
        return FactCategory.HISTORY
    raise ValueError(f"{category} is not a company fact category")
