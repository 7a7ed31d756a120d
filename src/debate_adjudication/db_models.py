from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, Relationship, SQLModel

JSONColumnType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(max_length=255, index=True, unique=True)
    full_name: str = Field(default="", max_length=255)

    sessions: List["DebateSession"] = Relationship(back_populates="user")
    adjudications: List["Adjudication"] = Relationship(back_populates="adjudicator")


class DebateSession(SQLModel, table=True):
    __tablename__ = "debate_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(default="", max_length=255)
    debate_type: str = Field(max_length=8)
    motion: Optional[str] = None
    status: str = Field(default="prep", max_length=32)
    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")
    transcript: List[dict] = Field(
        default_factory=list, sa_column=Column(JSONColumnType, nullable=False)
    )
    created_at: datetime = Field(default_factory=_utcnow)

    user: Optional[User] = Relationship(back_populates="sessions")
    adjudications: List["Adjudication"] = Relationship(back_populates="session")


class Adjudication(SQLModel, table=True):
    __tablename__ = "adjudications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    session_id: Optional[UUID] = Field(default=None, foreign_key="debate_sessions.id")
    adjudicator_id: UUID = Field(foreign_key="users.id")
    format_name: str = Field(max_length=64)
    motion: Optional[str] = None
    teams: Optional[Any] = Field(default=None, sa_column=Column(JSONColumnType))
    transcript_source: str = Field(default="session", max_length=16)
    original_file_name: Optional[str] = None
    overall_winner: str
    team_rankings: List[dict] = Field(
        default_factory=list, sa_column=Column(JSONColumnType, nullable=False)
    )
    scorecard: dict = Field(
        default_factory=dict, sa_column=Column(JSONColumnType, nullable=False)
    )
    chain_of_thought: dict = Field(
        default_factory=dict, sa_column=Column(JSONColumnType, nullable=False)
    )
    detailed_feedback: dict = Field(
        default_factory=dict, sa_column=Column(JSONColumnType, nullable=False)
    )
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    session: Optional[DebateSession] = Relationship(back_populates="adjudications")
    adjudicator: User = Relationship(back_populates="adjudications")
