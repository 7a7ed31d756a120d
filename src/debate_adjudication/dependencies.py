"""FastAPI dependency injection configuration."""

from functools import lru_cache
from typing import Annotated, Generator
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from google import genai
from sqlalchemy.engine import Engine
from sqlmodel import Session as DBSession
from sqlmodel import create_engine

from debate_adjudication.config import AppConfig, load_config
from debate_adjudication.db_models import User
from debate_adjudication.domain import Adjudicator, StageGenerator
from debate_adjudication.handlers import AdjudicationHandler
from debate_adjudication.infrastructure import (
    GeminiLLMService,
    TextExtractor,
    UploadStorage,
)
from debate_adjudication.infrastructure.interfaces import LLMService
from debate_adjudication.repositories import (
    AdjudicationRepository,
    SessionRepository,
    UserRepository,
)


@lru_cache
def get_config() -> AppConfig:
    """Returns the process-wide configuration."""
    return load_config()


@lru_cache
def get_engine() -> Engine:
    return create_engine(get_config().database.url)


def get_db_session() -> Generator[DBSession, None, None]:
    """Yields a database session, ensuring proper cleanup."""
    with DBSession(get_engine()) as session:
        yield session


@lru_cache
def get_llm_service() -> LLMService:
    """Returns the Gemini-backed LLM service."""
    gemini = get_config().gemini
    client = genai.Client(api_key=gemini.api_key)
    return GeminiLLMService(
        client,
        gemini.model_name,
        gemini.temperature,
        gemini.max_output_tokens,
    )


ConfigDep = Annotated[AppConfig, Depends(get_config)]
DBSessionDep = Annotated[DBSession, Depends(get_db_session)]
LLMServiceDep = Annotated[LLMService, Depends(get_llm_service)]


def get_stage_generator(llm: LLMServiceDep, config: ConfigDep) -> StageGenerator:
    policy = config.adjudication
    return StageGenerator(
        llm,
        max_attempts=policy.max_attempts,
        timeout_seconds=policy.timeout_seconds,
        timeout_backoff_seconds=policy.timeout_backoff_seconds,
        network_backoff_seconds=policy.network_backoff_seconds,
    )


def get_upload_storage(config: ConfigDep) -> UploadStorage:
    return UploadStorage(config.upload.upload_dir, config.upload.max_upload_bytes)


def get_adjudication_repository(db_session: DBSessionDep) -> AdjudicationRepository:
    return AdjudicationRepository(db_session)


def get_adjudication_handler(
    generator: Annotated[StageGenerator, Depends(get_stage_generator)],
    upload_storage: Annotated[UploadStorage, Depends(get_upload_storage)],
    adjudications: Annotated[
        AdjudicationRepository, Depends(get_adjudication_repository)
    ],
    db_session: DBSessionDep,
) -> AdjudicationHandler:
    """Composes the handler for one request."""
    return AdjudicationHandler(
        adjudicator=Adjudicator(generator),
        sessions=SessionRepository(db_session),
        adjudications=adjudications,
        upload_storage=upload_storage,
        text_extractor=TextExtractor(),
    )


def get_current_user(
    db_session: DBSessionDep,
    x_user_id: Annotated[str | None, Header()] = None,
) -> User:
    """
    Resolves the caller forwarded by the authentication gateway.

    Raises:
        HTTPException: 401 if the header is missing or names no known user.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user identity")

    user = UserRepository(db_session).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid user identity")
    return user
