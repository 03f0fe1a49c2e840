import pytest

from fourth_facts.conversation.state import RememberedState
from fourth_facts.facts.catalog import FACT_CARDS, FactCategory
from fourth_facts.responses.builder import (
    DATA_CONTEXT,
    PlainResponseBuilder,
    RichResponseBuilder,
    select_builder,
    speak,
    strip_ssml,
)


def test_select_builder():
    assert isinstance(select_builder(True), RichResponseBuilder)
    assert isinstance(select_builder(False), PlainResponseBuilder)


def test_build_without_reply_fails():
    with pytest.raises(RuntimeError):
        PlainResponseBuilder().build()


def test_plain_ask():
    builder = PlainResponseBuilder()
    builder.ask("Hello?", card=FACT_CARDS[FactCategory.CATS], suggestions=["Yes"])
    body = builder.build()

    assert body["speech"] == "Hello?"
    assert body["displayText"] == "Hello?"
    assert body["contextOut"] == []
    assert body["data"]["google"] == {
        "expectUserResponse": True,
        "isSsml": False,
        "noInputPrompts": [],
    }


def test_tell_ends_conversation():
    builder = RichResponseBuilder()
    builder.tell("Bye!")
    google = builder.build()["data"]["google"]
    assert google["expectUserResponse"] is False
    assert google["richResponse"]["suggestions"] == []


def test_rich_ssml_uses_ssml_field():
    builder = RichResponseBuilder()
    builder.ask(speak("Hi. ", "Cats purr."), ssml=True)
    item = builder.build()["data"]["google"]["richResponse"]["items"][0]["simpleResponse"]
    assert item["ssml"] == "<speak>Hi. Cats purr.</speak>"
    assert item["displayText"] == "Hi. Cats purr."
    assert "textToSpeech" not in item


def test_set_context_replaces_same_name():
    builder = PlainResponseBuilder()
    builder.set_context("fourth-facts", 5, {"category": "history"})
    builder.set_context("fourth-facts", 5, {"category": "headquarters"})
    builder.ask("Ok")
    contexts = builder.build()["contextOut"]
    assert contexts == [
        {"name": "fourth-facts", "lifespan": 5, "parameters": {"category": "headquarters"}}
    ]


def test_state_round_trips_in_data_context():
    builder = PlainResponseBuilder()
    builder.ask("Ok")
    builder.set_state(RememberedState(cat_facts=["Cats are animals."]))
    context = builder.build()["contextOut"][-1]
    assert context["name"] == DATA_CONTEXT
    assert context["lifespan"] == 100
    assert context["parameters"] == {"data": {"catFacts": ["Cats are animals."]}}


def test_speak_escapes_and_adds_audio():
    ssml = speak("A & B. ", "x < y", audio_src="https://example.com/a.mp3")
    assert ssml == '<speak>A &amp; B. <audio src="https://example.com/a.mp3"></audio>x &lt; y</speak>'
    assert strip_ssml(ssml) == "A & B. x < y"


def test_card_image_only_when_set():
    builder = RichResponseBuilder()
    builder.ask("Fact.", card=FACT_CARDS[FactCategory.HISTORY], card_text="Fact.")
    card = builder.build()["data"]["google"]["richResponse"]["items"][1]["basicCard"]
    assert "image" not in card
    assert card["buttons"][0]["openUrlAction"]["url"] == "https://www.fourth.com/"

    builder = RichResponseBuilder()
    builder.ask("Meow.", card=FACT_CARDS[FactCategory.CATS], card_text="Meow.")
    card = builder.build()["data"]["google"]["richResponse"]["items"][1]["basicCard"]
    assert card["image"]["url"].startswith("https://upload.wikimedia.org/")
    assert card["image"]["accessibilityText"] == "A cat looking at the camera"
