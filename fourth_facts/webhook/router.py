from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from fourth_facts.conversation.handlers import dispatch
from fourth_facts.conversation.intents import intent_from_action
from fourth_facts.dependencies import get_rng, get_settings
from fourth_facts.errors import MalformedRequestError
from fourth_facts.responses.builder import select_builder
from fourth_facts.webhook.parser import parse_turn

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/")
@router.post("/webhook")
async def incoming_webhook(request: Request) -> JSONResponse:
    settings = get_settings(request)
    body = await request.body()

    if settings.log_requests:
        logger.debug("Request headers: %s", json.dumps(dict(request.headers)))
        logger.debug("Request body: %s", body.decode("utf-8", errors="replace"))

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise MalformedRequestError("Request body is not valid JSON") from e

    turn = parse_turn(payload)
    intent = intent_from_action(turn.action, turn.parameters, turn.raw_input)
    builder = select_builder(turn.screen_output)
    logger.info(
        "Turn: action=%s intent=%s rich=%s",
        turn.action,
        type(intent).__name__,
        builder.rich,
    )

    state = dispatch(intent, turn.state, builder, get_rng(request))
    builder.set_state(state)
    return JSONResponse(content=builder.build())
