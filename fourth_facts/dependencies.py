import random

from fastapi import Request

from fourth_facts.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rng(request: Request) -> random.Random | None:
    """Return the random source for fact draws, or None for the module default."""
    return getattr(request.app.state, "rng", None)
