"""Request and response models for the adjudication API."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel

from debate_adjudication.domain.models import (
    CamelModel,
    ChainOfThought,
    DetailedFeedback,
    TeamRanking,
    TeamScore,
)


class CreateAdjudicationRequest(CamelModel):
    """Request body for adjudicating a stored debate session."""

    session_id: UUID


class AdjudicationUpdate(CamelModel):
    """Fields of an adjudication that may be replaced after creation."""

    format_name: str | None = None
    motion: str | None = None
    teams: Any = None
    overall_winner: str | None = None
    team_rankings: list[TeamRanking] | None = None
    scorecard: dict[str, TeamScore] | None = None
    chain_of_thought: ChainOfThought | None = None
    detailed_feedback: DetailedFeedback | None = None


class UserSummary(CamelModel):
    id: UUID
    username: str
    full_name: str


class SessionSummary(CamelModel):
    id: UUID
    title: str
    debate_type: str
    motion: str | None
    status: str


class AdjudicationResponse(CamelModel):
    """Adjudication with its session and adjudicator expanded."""

    id: UUID
    session: SessionSummary | None
    adjudicator: UserSummary | None
    format_name: str
    motion: str | None
    teams: Any
    transcript_source: Literal["session", "upload"]
    original_file_name: str | None
    overall_winner: str
    team_rankings: list[TeamRanking]
    scorecard: dict[str, TeamScore]
    chain_of_thought: ChainOfThought
    detailed_feedback: DetailedFeedback
    created_at: datetime
    updated_at: datetime


class DeleteResponse(BaseModel):
    message: str
