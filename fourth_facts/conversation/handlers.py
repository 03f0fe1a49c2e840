from __future__ import annotations

import logging
import random
from typing import assert_never

from fourth_facts.conversation.intents import (
    CATEGORY_ARGUMENT,
    Intent,
    TellCatFact,
    TellCompanyFact,
    UnhandledInput,
)
from fourth_facts.conversation.state import RememberedState
from fourth_facts.facts.catalog import (
    COMPANY_CATEGORIES,
    FACT_CARDS,
    FACT_PREFIXES,
    MEOW_SRC,
    NEXT_FACT_DIRECTIVE,
    FactCategory,
    other_company_category,
    parse_category,
)
from fourth_facts.facts.pool import draw_fact
from fourth_facts.responses.builder import (
    DEFAULT_LIFESPAN,
    END_LIFESPAN,
    ResponseBuilder,
    speak,
)

logger = logging.getLogger(__name__)

# Platform contexts
FOURTH_CONTEXT = "fourth-facts"
CAT_CONTEXT = "cat-facts"

HEARD_IT_ALL = "Actually it looks like you heard it all. Thanks for listening!"
REPAIR_PROMPT = (
    "Sorry, I didn't understand. I can tell you about Fourth's history, "
    "or its headquarters. Which one do you want to hear about?"
)
CATS_EXHAUSTED = (
    "Looks like you've heard all there is to know about cats. "
    "Would you like to hear about Fourth?"
)
CATS_TOO = "By the way, I can tell you about cats too."

_CATEGORY_CHIPS = {FactCategory.HISTORY: "History", FactCategory.HEADQUARTERS: "Headquarters"}


def dispatch(
    intent: Intent,
    state: RememberedState,
    builder: ResponseBuilder,
    rng: random.Random | None = None,
) -> RememberedState:
    """Run the handler for ``intent`` and return the conversation state to persist."""
    match intent:
        case UnhandledInput():
            return unhandled_input(intent, state, builder)
        case TellCompanyFact():
            return tell_company_fact(intent, state, builder, rng)
        case TellCatFact():
            return tell_cat_fact(intent, state, builder, rng)
        case _:
            assert_never(intent)


def unhandled_input(
    intent: UnhandledInput, state: RememberedState, builder: ResponseBuilder
) -> RememberedState:
    """Greet the user and steer them towards a company category."""
    topic = intent.raw_input.strip() or "that"
    builder.ask(
        "Welcome to Facts about Fourth! "
        f"I'd really rather not talk about {topic}. "
        "Wouldn't you rather talk about Fourth? "
        "I can tell you about Fourth's history or its headquarters. "
        "Which do you want to hear about?",
        suggestions=list(_CATEGORY_CHIPS.values()),
    )
    return state


def tell_company_fact(
    intent: TellCompanyFact,
    state: RememberedState,
    builder: ResponseBuilder,
    rng: random.Random | None = None,
) -> RememberedState:
    if all(state.pool(c).empty for c in COMPANY_CATEGORIES):
        logger.info("All company facts told, ending conversation")
        builder.tell(HEARD_IT_ALL)
        return state

    category = parse_category(intent.category)
    if category not in COMPANY_CATEGORIES:
        logger.info("Unrecognized company fact category: %r", intent.category)
        builder.ask(REPAIR_PROMPT, suggestions=list(_CATEGORY_CHIPS.values()))
        return state

    result = draw_fact(state.pool(category), rng)
    if result.exhausted:
        logger.info("No %s facts left, offering %s", category, other_company_category(category))
        _no_facts_left(state, builder, category)
        return state

    other = other_company_category(category)
    builder.ask(
        FACT_PREFIXES[category] + result.fact + NEXT_FACT_DIRECTIVE,
        card=FACT_CARDS[category],
        card_text=result.fact,
        suggestions=["Sure", "No thanks", _CATEGORY_CHIPS[other]],
    )
    return state.with_pool(result.remaining)


def tell_cat_fact(
    intent: TellCatFact,
    state: RememberedState,
    builder: ResponseBuilder,
    rng: random.Random | None = None,
) -> RememberedState:
    result = draw_fact(state.pool(FactCategory.CATS), rng)
    if result.exhausted:
        logger.info("No cat facts left, switching back to %s", FOURTH_CONTEXT)
        builder.set_context(FOURTH_CONTEXT, DEFAULT_LIFESPAN, {})
        builder.set_context(CAT_CONTEXT, END_LIFESPAN, {})
        builder.ask(CATS_EXHAUSTED, suggestions=list(_CATEGORY_CHIPS.values()))
        return state

    builder.ask(
        speak(
            FACT_PREFIXES[FactCategory.CATS],
            result.fact,
            NEXT_FACT_DIRECTIVE,
            audio_src=MEOW_SRC,
        ),
        ssml=True,
        card=FACT_CARDS[FactCategory.CATS],
        card_text=result.fact,
        suggestions=["Sure", "No thanks"],
    )
    return state.with_pool(result.remaining)


def _no_facts_left(
    state: RememberedState, builder: ResponseBuilder, category: FactCategory
) -> None:
    redirect = other_company_category(category)
    # Next turn defaults its category argument to the other sub-category
    builder.set_context(FOURTH_CONTEXT, DEFAULT_LIFESPAN, {CATEGORY_ARGUMENT: str(redirect)})

    speech = (
        f"Looks like you've heard all there is to know about the {category} of Fourth. "
        f"Would you like to hear about its {redirect}? "
    )
    suggestions = [_CATEGORY_CHIPS[redirect]]
    if not state.known_exhausted(FactCategory.CATS):
        speech += CATS_TOO
        suggestions.append("Cats")
    builder.ask(speech, suggestions=suggestions)
