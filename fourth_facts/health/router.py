from fastapi import APIRouter

from fourth_facts.facts.catalog import DEFAULT_POOLS
from fourth_facts.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        fact_counts={str(category): len(facts) for category, facts in DEFAULT_POOLS.items()},
    )
