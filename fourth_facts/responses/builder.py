"""Render a turn's reply for the calling surface.

Handlers talk to a ``ResponseBuilder`` and never check the surface
themselves. The builder is picked once per request by ``select_builder``:
speech-only devices get ``PlainResponseBuilder``, screens get
``RichResponseBuilder`` with cards and suggestion chips.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any
from xml.sax.saxutils import escape

from fourth_facts.conversation.state import RememberedState
from fourth_facts.facts.catalog import FactCard
from fourth_facts.models import (
    BasicCard,
    Button,
    GooglePayload,
    Image,
    OpenUrlAction,
    OutputContext,
    RichItem,
    RichResponse,
    SimpleResponse,
    Suggestion,
    WebhookResponse,
)

DEFAULT_LIFESPAN = 5
END_LIFESPAN = 0

# Context the platform SDK uses to round-trip conversation data
DATA_CONTEXT = "_actions_on_google_"
DATA_CONTEXT_LIFESPAN = 100

_TAG_RE = re.compile(r"<[^>]+>")
_SPACES_RE = re.compile(r"\s+")


def speak(*parts: str, audio_src: str | None = None) -> str:
    """Wrap text in <speak>, optionally playing ``audio_src`` after the first part."""
    escaped = [escape(p) for p in parts]
    if audio_src and escaped:
        escaped[0] += f'<audio src="{escape(audio_src)}"></audio>'
    return "<speak>" + "".join(escaped) + "</speak>"


def strip_ssml(speech: str) -> str:
    text = _TAG_RE.sub("", speech)
    text = text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")
    return _SPACES_RE.sub(" ", text).strip()


class ResponseBuilder:
    """Collects the single reply of one turn and serializes it."""

    rich = False

    def __init__(self) -> None:
        self._speech: str | None = None
        self._ssml = False
        self._expect_user_response = True
        self._card: FactCard | None = None
        self._card_text = ""
        self._suggestions: list[str] = []
        self._contexts: dict[str, OutputContext] = {}
        self._state: RememberedState | None = None

    @property
    def speech(self) -> str | None:
        return self._speech

    @property
    def expect_user_response(self) -> bool:
        return self._expect_user_response

    def ask(
        self,
        speech: str,
        *,
        ssml: bool = False,
        card: FactCard | None = None,
        card_text: str = "",
        suggestions: Sequence[str] = (),
    ) -> None:
        """Reply and keep the microphone open for the next turn."""
        self._set_reply(speech, ssml=ssml, expect_user_response=True)
        self._card = card
        self._card_text = card_text
        self._suggestions = list(suggestions)

    def tell(self, speech: str, *, ssml: bool = False) -> None:
        """Reply and end the conversation."""
        self._set_reply(speech, ssml=ssml, expect_user_response=False)
        self._card = None
        self._suggestions = []

    def set_context(
        self, name: str, lifespan: int, parameters: dict[str, Any] | None = None
    ) -> None:
        # Same name replaces the previous outgoing context
        self._contexts[name] = OutputContext(
            name=name, lifespan=lifespan, parameters=parameters or {}
        )

    def set_state(self, state: RememberedState) -> None:
        self._state = state

    def build(self) -> dict[str, Any]:
        if self._speech is None:
            raise RuntimeError("No reply was produced for this turn")

        contexts = list(self._contexts.values())
        if self._state is not None:
            contexts.append(
                OutputContext(
                    name=DATA_CONTEXT,
                    lifespan=DATA_CONTEXT_LIFESPAN,
                    parameters={"data": self._state.to_payload()},
                )
            )

        display_text = strip_ssml(self._speech) if self._ssml else self._speech
        google = GooglePayload(
            expect_user_response=self._expect_user_response,
            is_ssml=self._ssml,
            rich_response=self._rich_response(display_text),
        )
        response = WebhookResponse(
            speech=self._speech,
            display_text=display_text,
            context_out=contexts,
            data={"google": google},
        )
        return response.model_dump(by_alias=True, exclude_none=True)

    def _set_reply(self, speech: str, *, ssml: bool, expect_user_response: bool) -> None:
        self._speech = speech
        self._ssml = ssml
        self._expect_user_response = expect_user_response

    def _rich_response(self, display_text: str) -> RichResponse | None:
        return None


class PlainResponseBuilder(ResponseBuilder):
    """Speech only. Cards and suggestion chips are dropped."""


class RichResponseBuilder(ResponseBuilder):
    rich = True

    def _rich_response(self, display_text: str) -> RichResponse:
        if self._ssml:
            simple = SimpleResponse(ssml=self._speech, display_text=display_text)
        else:
            simple = SimpleResponse(text_to_speech=self._speech, display_text=display_text)
        items = [RichItem(simple_response=simple)]

        if self._card is not None:
            image = None
            if self._card.image_url:
                image = Image(url=self._card.image_url, accessibility_text=self._card.image_alt)
            items.append(
                RichItem(
                    basic_card=BasicCard(
                        title=self._card.title,
                        formatted_text=self._card_text,
                        image=image,
                        buttons=[
                            Button(
                                title=self._card.link_title,
                                open_url_action=OpenUrlAction(url=self._card.link_url),
                            )
                        ],
                    )
                )
            )

        return RichResponse(
            items=items,
            suggestions=[Suggestion(title=s) for s in self._suggestions],
        )


def select_builder(screen_output: bool) -> ResponseBuilder:
    return RichResponseBuilder() if screen_output else PlainResponseBuilder()
