"""Adjudication endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from debate_adjudication.db_models import User
from debate_adjudication.dependencies import (
    get_adjudication_handler,
    get_adjudication_repository,
    get_current_user,
)
from debate_adjudication.exceptions import (
    AdjudicationNotFoundError,
    AdjudicationPersistenceError,
    LLMAuthenticationError,
    LLMRateLimitError,
    LLMServiceError,
    LLMTimeoutError,
    LLMUnavailableError,
    SessionNotFoundError,
    TranscriptExtractionError,
    TranscriptValidationError,
)
from debate_adjudication.handlers import AdjudicationHandler
from debate_adjudication.logging import setup_logging
from debate_adjudication.repositories import AdjudicationRepository
from debate_adjudication.response_models import (
    AdjudicationResponse,
    AdjudicationUpdate,
    CreateAdjudicationRequest,
    DeleteResponse,
)

logger = setup_logging()

router = APIRouter(prefix="/adjudications", tags=["adjudications"])

HandlerDep = Annotated[AdjudicationHandler, Depends(get_adjudication_handler)]
RepositoryDep = Annotated[AdjudicationRepository, Depends(get_adjudication_repository)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]

# Subclasses precede their bases.
_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (TranscriptValidationError, 400),
    (SessionNotFoundError, 404),
    (AdjudicationNotFoundError, 404),
    (TranscriptExtractionError, 422),
    (LLMAuthenticationError, 500),
    (LLMRateLimitError, 429),
    (LLMTimeoutError, 504),
    (LLMUnavailableError, 503),
    (LLMServiceError, 502),
    (AdjudicationPersistenceError, 500),
)
_HANDLED_ERRORS = tuple(error_type for error_type, _ in _STATUS_BY_ERROR)


def _http_error(error: Exception) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            if status_code >= 500:
                logger.error(
                    "Adjudication request failed",
                    extra={"error_type": type(error).__name__, "status": status_code},
                )
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail="Internal server error")


@router.post("", response_model=AdjudicationResponse, status_code=201)
async def create_adjudication(
    request: CreateAdjudicationRequest,
    handler: HandlerDep,
    user: CurrentUserDep,
):
    """Adjudicates a stored debate session."""
    try:
        return await handler.create_from_session(request.session_id, user.id)
    except _HANDLED_ERRORS as e:
        raise _http_error(e)


@router.post("/upload", response_model=AdjudicationResponse, status_code=201)
async def create_adjudication_from_upload(
    handler: HandlerDep,
    user: CurrentUserDep,
    transcript: Annotated[UploadFile | None, File()] = None,
    format_name: Annotated[str | None, Form()] = None,
    motion: Annotated[str | None, Form()] = None,
    teams: Annotated[str | None, Form()] = None,
):
    """Adjudicates an uploaded PDF or plain-text transcript."""
    try:
        return await handler.create_from_upload(
            transcript, user.id, format_name, motion=motion, teams=teams
        )
    except _HANDLED_ERRORS as e:
        raise _http_error(e)


@router.get("", response_model=list[AdjudicationResponse])
def list_adjudications(repo: RepositoryDep, user: CurrentUserDep):
    """Returns all adjudications with session and adjudicator expanded."""
    return repo.list_all()


@router.get("/{adjudication_id}", response_model=AdjudicationResponse)
def get_adjudication(adjudication_id: UUID, repo: RepositoryDep, user: CurrentUserDep):
    try:
        return repo.get_by_id(adjudication_id)
    except AdjudicationNotFoundError as e:
        raise _http_error(e)


@router.put("/{adjudication_id}", response_model=AdjudicationResponse)
def update_adjudication(
    adjudication_id: UUID,
    changes: AdjudicationUpdate,
    repo: RepositoryDep,
    user: CurrentUserDep,
):
    """Replaces the supplied fields of an adjudication."""
    try:
        return repo.update(adjudication_id, changes)
    except (AdjudicationNotFoundError, AdjudicationPersistenceError) as e:
        raise _http_error(e)


@router.delete("/{adjudication_id}", response_model=DeleteResponse)
def delete_adjudication(
    adjudication_id: UUID, repo: RepositoryDep, user: CurrentUserDep
):
    try:
        repo.delete(adjudication_id)
    except (AdjudicationNotFoundError, AdjudicationPersistenceError) as e:
        raise _http_error(e)
    return DeleteResponse(message="Adjudication deleted")
