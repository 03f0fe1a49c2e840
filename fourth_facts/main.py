import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fourth_facts.config import Settings
from fourth_facts.errors import FactsError
from fourth_facts.health.router import router as health_router
from fourth_facts.logging_config import configure_logging
from fourth_facts.webhook.router import router as webhook_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )

    app.state.settings = settings
    logger.info("Fourth Facts webhook ready on port %d", settings.port)

    yield


app = FastAPI(title="Fourth Facts", lifespan=lifespan)
app.include_router(health_router)
app.include_router(webhook_router)


@app.exception_handler(FactsError)
async def facts_error_handler(request: Request, exc: FactsError) -> JSONResponse:
    logger.warning("Rejected request: %s", exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})
