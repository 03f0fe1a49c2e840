import json
import logging

from pydantic import ValidationError

from fourth_facts.conversation.state import RememberedState
from fourth_facts.errors import MalformedRequestError
from fourth_facts.models import TurnRequest
from fourth_facts.responses.builder import DATA_CONTEXT

logger = logging.getLogger(__name__)

SCREEN_OUTPUT = "actions.capability.SCREEN_OUTPUT"


def _dict(value: object) -> dict:
    return value if isinstance(value, dict) else {}


def _dicts(value: object) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def parse_turn(payload: object) -> TurnRequest:
    """Extract action, arguments, conversation data and surface from a webhook body."""
    if not isinstance(payload, dict):
        raise MalformedRequestError("Request body must be a JSON object")

    result = payload.get("result") or {}
    if not isinstance(result, dict):
        raise MalformedRequestError("'result' must be a JSON object")

    # Everything below the top level degrades to defaults
    original = _dict(_dict(payload.get("originalRequest")).get("data"))
    contexts = _dicts(result.get("contexts"))

    return TurnRequest(
        action=str(result.get("action") or ""),
        parameters=_dict(result.get("parameters")),
        raw_input=str(result.get("resolvedQuery") or _raw_input(original)),
        context_names=[str(c["name"]) for c in contexts if c.get("name")],
        state=_extract_state(contexts),
        screen_output=_has_screen(original),
    )


def _raw_input(original: dict) -> str:
    for item in _dicts(original.get("inputs")):
        for raw in _dicts(item.get("rawInputs")):
            query = raw.get("query")
            if query:
                return str(query)
    return ""


def _has_screen(original: dict) -> bool:
    surface = _dict(original.get("surface"))
    return any(cap.get("name") == SCREEN_OUTPUT for cap in _dicts(surface.get("capabilities")))


def _extract_state(contexts: list[dict]) -> RememberedState:
    """Read the remembered fact pools from the SDK data context, if present."""
    for context in contexts:
        if context.get("name") != DATA_CONTEXT:
            continue
        data = _dict(context.get("parameters")).get("data") or {}
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError:
                logger.warning("Conversation data is not valid JSON, starting fresh")
                return RememberedState()
        if not isinstance(data, dict):
            return RememberedState()
        try:
            return RememberedState.model_validate(data)
        except ValidationError:
            logger.warning("Conversation data has an unexpected shape, starting fresh", exc_info=True)
            return RememberedState()
    return RememberedState()
