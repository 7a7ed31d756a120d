"""Shared pytest fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from debate_adjudication.db_models import DebateSession, User
from debate_adjudication.domain import StageGenerator
from debate_adjudication.domain.prompts import (
    CHAIN_OF_THOUGHT_PROMPT,
    DETAILED_FEEDBACK_PROMPT,
    SCORECARD_PROMPT,
)
from debate_adjudication.infrastructure.interfaces import LLMService

SCORECARD_REPLY = json.dumps(
    {
        "overallWinner": "Proposition",
        "teamRankings": [
            {"rank": 1, "team": "Proposition", "score": 240},
            {"rank": 2, "team": "Opposition", "score": 221},
        ],
        "scorecard": {
            "Proposition": {"matter": 82, "manner": 120, "method": 78, "color": "Clear framing"},
            "Opposition": {"matter": 75, "manner": 74, "method": -5, "color": "Reactive"},
        },
    }
)

CHAIN_OF_THOUGHT_REPLY = (
    "```json\n"
    + json.dumps(
        {
            "chainOfThought": {
                "title": "Why Proposition won",
                "clashes": [
                    {"id": "c1", "title": "Economic impact", "weight": 8500,
                     "winner": "Proposition", "summary": "Better evidence."},
                    {"id": 2, "title": "Rights", "weight": 45,
                     "winner": "Opposition", "summary": "Clean principle."},
                ],
            }
        }
    )
    + "\n```"
)

DETAILED_FEEDBACK_REPLY = json.dumps(
    {
        "detailedFeedback": {
            "replySpeeches": {
                "proposition": {"speaker": "PM", "score": 140, "summary": "Crisp."},
                "opposition": {"speaker": "LO", "score": 71, "summary": "Rushed."},
            },
            "speakers": [
                {
                    "name": "PM",
                    "team": "Proposition",
                    "scores": {"matter": 80, "manner": 78, "method": 75, "total": 999},
                    "roleFulfillment": "Defined the motion well.",
                    "rhetoricalAnalysis": "Confident delivery.",
                    "timestampedComments": [{"time": "0:45", "comment": "Strong hook"}],
                }
            ],
        }
    }
)

REPLIES_BY_PROMPT = {
    SCORECARD_PROMPT: SCORECARD_REPLY,
    CHAIN_OF_THOUGHT_PROMPT: CHAIN_OF_THOUGHT_REPLY,
    DETAILED_FEEDBACK_PROMPT: DETAILED_FEEDBACK_REPLY,
}


class FakeLLMService(LLMService):
    """Scripted LLM. Each script item is a reply, an exception, or a coroutine function."""

    def __init__(self, script: list | None = None):
        self._script = list(script) if script is not None else None
        self.calls: list[tuple[str, str]] = []

    async def generate(self, prompt: str, transcript: str) -> str:
        self.calls.append((prompt, transcript))
        if self._script is None:
            return REPLIES_BY_PROMPT[prompt]
        item = self._script.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, Callable):
            return await item()
        return item


@pytest.fixture
def fake_llm() -> FakeLLMService:
    return FakeLLMService()


@pytest.fixture
def no_sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def make_generator(no_sleep: AsyncMock):
    def _make(llm: LLMService, **kwargs) -> StageGenerator:
        kwargs.setdefault("sleep", no_sleep)
        return StageGenerator(llm, **kwargs)

    return _make


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def user(db_session: Session) -> User:
    user = User(username="adjudicator", full_name="Chief Adjudicator")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def debate_session(db_session: Session, user: User) -> DebateSession:
    session = DebateSession(
        title="Round 1",
        debate_type="AP",
        motion="This House would ban private cars in city centres",
        user_id=user.id,
        status="completed",
        transcript=[
            {"speaker": "PM", "type": "speech", "timestamp": "0:00",
             "text": "Cities belong to people, not cars."},
            {"speaker": "LO", "type": "poi", "timestamp": "2:10",
             "text": "What about disabled drivers?"},
        ],
    )
    db_session.add(session)
    db_session.commit()
    db_session.refresh(session)
    return session


@pytest.fixture
def empty_debate_session(db_session: Session, user: User) -> DebateSession:
    session = DebateSession(title="Prep", debate_type="BP", user_id=user.id, transcript=[])
    db_session.add(session)
    db_session.commit()
    db_session.refresh(session)
    return session


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"
