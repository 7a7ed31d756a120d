"""Domain models for debate adjudication."""

from enum import Enum
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Stage(str, Enum):
    """The three prompt/response cycles composing one adjudication."""

    SCORECARD = "scorecard"
    CHAIN_OF_THOUGHT = "chainOfThought"
    DETAILED_FEEDBACK = "detailedFeedback"


class CamelModel(BaseModel):
    """Base for models exchanged with the generative model and API clients."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class TranscriptEntry(BaseModel):
    """One recorded turn of a debate session."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    speaker: str = ""
    type: str = ""
    timestamp: str = ""
    text: str = ""

    @field_validator("speaker", "type", "timestamp", "text", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class TeamRanking(CamelModel):
    rank: int
    team: str
    score: float


class TeamScore(CamelModel):
    matter: float
    manner: float
    method: float
    color: str = ""


class ScorecardStage(CamelModel):
    """Winner, rankings and per-team scores."""

    overall_winner: str
    team_rankings: list[TeamRanking] = Field(default_factory=list)
    scorecard: dict[str, TeamScore] = Field(default_factory=dict)


class Clash(CamelModel):
    id: str = ""
    title: str = ""
    weight: float
    winner: str = ""
    summary: str = ""


class ChainOfThought(CamelModel):
    title: str = ""
    clashes: list[Clash] = Field(default_factory=list)


class ChainOfThoughtStage(CamelModel):
    """Reasoning broken down into weighted clashes."""

    chain_of_thought: ChainOfThought


class ReplySpeech(CamelModel):
    speaker: str = ""
    score: float = 0
    summary: str = ""


class ReplySpeeches(CamelModel):
    proposition: ReplySpeech | None = None
    opposition: ReplySpeech | None = None


class SpeakerScores(CamelModel):
    matter: float
    manner: float
    method: float
    total: float


class TimestampedComment(CamelModel):
    time: str = ""
    comment: str = ""


class SpeakerFeedback(CamelModel):
    name: str
    team: str = ""
    scores: SpeakerScores
    role_fulfillment: str = ""
    rhetorical_analysis: str = ""
    timestamped_comments: list[TimestampedComment] = Field(default_factory=list)


class DetailedFeedback(CamelModel):
    reply_speeches: ReplySpeeches | None = None
    speakers: list[SpeakerFeedback] = Field(default_factory=list)


class DetailedFeedbackStage(CamelModel):
    """Per-speaker and reply-speech feedback."""

    detailed_feedback: DetailedFeedback


class AdjudicationResult(BaseModel):
    """The three validated stage results of one adjudication."""

    scorecard: ScorecardStage
    chain_of_thought: ChainOfThoughtStage
    detailed_feedback: DetailedFeedbackStage


class AdjudicationProvenance(BaseModel, frozen=True):
    """Where a transcript came from and who requested its adjudication."""

    adjudicator_id: UUID
    format_name: str
    transcript_source: Literal["session", "upload"] = "session"
    session_id: UUID | None = None
    original_file_name: str | None = None
    motion: str | None = None
    teams: Any = None


class AdjudicationRecord(BaseModel):
    """A complete adjudication ready to be persisted."""

    adjudicator_id: UUID
    format_name: str
    transcript_source: Literal["session", "upload"]
    session_id: UUID | None = None
    original_file_name: str | None = None
    motion: str | None = None
    teams: Any = None
    overall_winner: str
    team_rankings: list[TeamRanking]
    scorecard: dict[str, TeamScore]
    chain_of_thought: ChainOfThought
    detailed_feedback: DetailedFeedback
