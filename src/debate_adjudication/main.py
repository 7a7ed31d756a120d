"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from ddtrace import patch_all
from fastapi import FastAPI
from sqlmodel import SQLModel

from debate_adjudication import db_models  # noqa: F401
from debate_adjudication.config import validate_config
from debate_adjudication.dependencies import get_config, get_engine
from debate_adjudication.logging import setup_logging
from debate_adjudication.routes import adjudications_router

logger = setup_logging()
patch_all()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validates configuration and prepares the database before serving."""
    config = get_config()
    validate_config(config)
    SQLModel.metadata.create_all(get_engine())
    logger.info(
        "Debate adjudication service started",
        extra={"model": config.gemini.model_name},
    )
    yield


app = FastAPI(title="Debate Adjudication Service", lifespan=lifespan)
app.include_router(adjudications_router)


@app.get("/healthz")
def healthz():
    return {"ok": True}
