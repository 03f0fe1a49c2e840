from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fourth_facts.conversation.state import RememberedState


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Inbound ---


class TurnRequest(BaseModel):
    """The fields of an inbound conversational turn the dispatcher consumes."""

    action: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    raw_input: str = ""
    context_names: list[str] = Field(default_factory=list)
    state: RememberedState = Field(default_factory=RememberedState)
    screen_output: bool = False


# --- Outbound ---


class OutputContext(_WireModel):
    name: str
    lifespan: int
    parameters: dict[str, Any] = Field(default_factory=dict)


class SimpleResponse(_WireModel):
    text_to_speech: str | None = None
    ssml: str | None = None
    display_text: str | None = None


class Image(_WireModel):
    url: str
    accessibility_text: str


class OpenUrlAction(_WireModel):
    url: str


class Button(_WireModel):
    title: str
    open_url_action: OpenUrlAction


class BasicCard(_WireModel):
    title: str
    formatted_text: str = ""
    image: Image | None = None
    buttons: list[Button] = Field(default_factory=list)


class RichItem(_WireModel):
    simple_response: SimpleResponse | None = None
    basic_card: BasicCard | None = None


class Suggestion(_WireModel):
    title: str


class RichResponse(_WireModel):
    items: list[RichItem]
    suggestions: list[Suggestion] = Field(default_factory=list)


class GooglePayload(_WireModel):
    expect_user_response: bool
    is_ssml: bool = False
    no_input_prompts: list[dict] = Field(default_factory=list)
    rich_response: RichResponse | None = None


class WebhookResponse(_WireModel):
    speech: str
    display_text: str
    context_out: list[OutputContext] = Field(default_factory=list)
    data: dict[str, GooglePayload] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    fact_counts: dict[str, int]
