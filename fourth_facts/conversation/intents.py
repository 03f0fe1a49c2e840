"""Closed set of intents the webhook answers, decoded from platform action names."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from fourth_facts.errors import UnknownActionError

# Name of the platform parameter carrying the requested company sub-category
CATEGORY_ARGUMENT = "category"


class Action(StrEnum):
    UNRECOGNIZED_DEEP_LINK = "deeplink.unknown"
    SAY_FOURTH_FACT = "say_fourth_fact"
    SAY_CAT_FACT = "say_cat_fact"


@dataclass(frozen=True)
class UnhandledInput:
    raw_input: str = ""


@dataclass(frozen=True)
class TellCompanyFact:
    category: str | None = None  # validated by the handler, may be anything


@dataclass(frozen=True)
class TellCatFact:
    pass


Intent = UnhandledInput | TellCompanyFact | TellCatFact


def intent_from_action(action: str, parameters: dict, raw_input: str = "") -> Intent:
    """Turn a platform action and its parameters into one of the intent variants."""
    try:
        resolved = Action(action)
    except ValueError:
        raise UnknownActionError(action) from None

    if resolved is Action.UNRECOGNIZED_DEEP_LINK:
        return UnhandledInput(raw_input=raw_input)
    if resolved is Action.SAY_FOURTH_FACT:
        category = parameters.get(CATEGORY_ARGUMENT)
        return TellCompanyFact(category=category if isinstance(category, str) else None)
    return TellCatFact()
