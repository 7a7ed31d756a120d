"""End-to-end tests for the adjudication endpoints."""

from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlmodel import select

from debate_adjudication.db_models import Adjudication
from debate_adjudication.dependencies import (
    get_db_session,
    get_stage_generator,
    get_upload_storage,
)
from debate_adjudication.exceptions import (
    LLMAuthenticationError,
    LLMRateLimitError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from debate_adjudication.infrastructure import UploadStorage
from debate_adjudication.routes import adjudications_router
from tests.conftest import SCORECARD_REPLY, FakeLLMService

TRANSCRIPT_TEXT = b"[PM] We propose banning cars.\n[LO] We oppose."


@pytest.fixture
def make_client(db_session, make_generator, upload_dir):
    def _make(llm: FakeLLMService) -> TestClient:
        app = FastAPI()
        app.include_router(adjudications_router)

        def override_db_session():
            yield db_session

        app.dependency_overrides[get_db_session] = override_db_session
        app.dependency_overrides[get_stage_generator] = lambda: make_generator(llm)
        app.dependency_overrides[get_upload_storage] = lambda: UploadStorage(
            upload_dir, 10 * 1024 * 1024
        )
        return TestClient(app)

    return _make


@pytest.fixture
def auth(user) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}


def _stored(db_session) -> list[Adjudication]:
    return db_session.exec(select(Adjudication)).all()


def _leftover_files(upload_dir) -> list:
    return list(upload_dir.iterdir()) if upload_dir.exists() else []


def test_adjudicate_session(make_client, fake_llm, auth, debate_session, user):
    client = make_client(fake_llm)

    response = client.post(
        "/adjudications", json={"sessionId": str(debate_session.id)}, headers=auth
    )

    assert response.status_code == 201
    body = response.json()
    assert body["transcriptSource"] == "session"
    assert body["formatName"] == "AP"
    assert body["motion"] == debate_session.motion
    assert body["overallWinner"] == "Proposition"
    assert body["teamRankings"][0]["team"] == "Proposition"
    assert body["scorecard"]["Proposition"]["manner"] == 100
    assert [c["weight"] for c in body["chainOfThought"]["clashes"]] == [99, 45]
    assert body["detailedFeedback"]["speakers"][0]["scores"]["total"] == 233
    assert body["session"]["id"] == str(debate_session.id)
    assert body["adjudicator"]["username"] == user.username

    transcripts = {transcript for _, transcript in fake_llm.calls}
    assert transcripts == {
        "[PM] (speech @ 0:00): Cities belong to people, not cars.\n"
        "[LO] (poi @ 2:10): What about disabled drivers?"
    }
    assert len(fake_llm.calls) == 3


def test_adjudicate_upload(make_client, fake_llm, auth, upload_dir, db_session):
    client = make_client(fake_llm)

    response = client.post(
        "/adjudications/upload",
        files={"transcript": ("final.txt", TRANSCRIPT_TEXT, "text/plain")},
        data={"format_name": "WSDC", "teams": '{"proposition": "A", "opposition": "B"}'},
        headers=auth,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["transcriptSource"] == "upload"
    assert body["originalFileName"] == "final.txt"
    assert body["formatName"] == "WSDC"
    assert body["motion"] == "Motion not specified"
    assert body["teams"] == {"proposition": "A", "opposition": "B"}
    assert body["session"] is None
    assert fake_llm.calls[0][1] == TRANSCRIPT_TEXT.decode()
    assert _leftover_files(upload_dir) == []
    assert len(_stored(db_session)) == 1


def test_empty_session_rejected_before_model_call(
    make_client, fake_llm, auth, empty_debate_session, db_session
):
    client = make_client(fake_llm)

    response = client.post(
        "/adjudications", json={"sessionId": str(empty_debate_session.id)}, headers=auth
    )

    assert response.status_code == 400
    assert fake_llm.calls == []
    assert _stored(db_session) == []


def test_unknown_session(make_client, fake_llm, auth):
    response = make_client(fake_llm).post(
        "/adjudications", json={"sessionId": str(uuid4())}, headers=auth
    )
    assert response.status_code == 404


def test_whitespace_upload_rejected(make_client, fake_llm, auth, upload_dir):
    response = make_client(fake_llm).post(
        "/adjudications/upload",
        files={"transcript": ("blank.txt", b"  \n\t \n", "text/plain")},
        data={"format_name": "AP"},
        headers=auth,
    )

    assert response.status_code == 400
    assert fake_llm.calls == []
    assert _leftover_files(upload_dir) == []


def test_disallowed_upload_type_rejected(make_client, fake_llm, auth, upload_dir):
    response = make_client(fake_llm).post(
        "/adjudications/upload",
        files={"transcript": ("slide.png", b"\x89PNG\r\n", "image/png")},
        data={"format_name": "AP"},
        headers=auth,
    )

    assert response.status_code == 400
    assert "Only PDF and TXT" in response.json()["detail"]
    assert fake_llm.calls == []
    assert _leftover_files(upload_dir) == []


def test_upload_without_file(make_client, fake_llm, auth):
    response = make_client(fake_llm).post(
        "/adjudications/upload", data={"format_name": "AP"}, headers=auth
    )
    assert response.status_code == 400


def test_upload_without_format_name(make_client, fake_llm, auth):
    response = make_client(fake_llm).post(
        "/adjudications/upload",
        files={"transcript": ("final.txt", TRANSCRIPT_TEXT, "text/plain")},
        headers=auth,
    )
    assert response.status_code == 400
    assert fake_llm.calls == []


def test_malformed_model_output_persists_nothing(
    make_client, auth, debate_session, db_session
):
    llm = FakeLLMService(["Sure! Here is my verdict."] * 3)

    response = make_client(llm).post(
        "/adjudications", json={"sessionId": str(debate_session.id)}, headers=auth
    )

    assert response.status_code == 502
    assert "Sure! Here is my verdict." in response.json()["detail"]
    assert _stored(db_session) == []


def test_later_stage_failure_persists_nothing(
    make_client, auth, debate_session, db_session
):
    llm = FakeLLMService([SCORECARD_REPLY] + ["{broken"] * 3)

    response = make_client(llm).post(
        "/adjudications", json={"sessionId": str(debate_session.id)}, headers=auth
    )

    assert response.status_code == 502
    assert _stored(db_session) == []


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (LLMAuthenticationError("bad key"), 500),
        (LLMRateLimitError("quota"), 429),
        (LLMTimeoutError("slow"), 504),
        (LLMUnavailableError("ECONNREFUSED"), 503),
    ],
)
def test_model_errors_map_to_status(make_client, auth, debate_session, error, status_code):
    llm = FakeLLMService([error] * 3)

    response = make_client(llm).post(
        "/adjudications", json={"sessionId": str(debate_session.id)}, headers=auth
    )

    assert response.status_code == status_code


def test_requires_authenticated_user(make_client, fake_llm, debate_session):
    client = make_client(fake_llm)

    missing = client.post("/adjudications", json={"sessionId": str(debate_session.id)})
    unknown = client.get("/adjudications", headers={"X-User-Id": str(uuid4())})

    assert missing.status_code == 401
    assert unknown.status_code == 401
    assert fake_llm.calls == []


def test_read_update_delete(make_client, fake_llm, auth, debate_session):
    client = make_client(fake_llm)
    created = client.post(
        "/adjudications", json={"sessionId": str(debate_session.id)}, headers=auth
    ).json()
    url = f"/adjudications/{created['id']}"

    listed = client.get("/adjudications", headers=auth)
    assert [a["id"] for a in listed.json()] == [created["id"]]

    fetched = client.get(url, headers=auth)
    assert fetched.json()["overallWinner"] == "Proposition"

    updated = client.put(url, json={"overallWinner": "Opposition"}, headers=auth)
    assert updated.status_code == 200
    assert updated.json()["overallWinner"] == "Opposition"
    assert updated.json()["chainOfThought"] == created["chainOfThought"]

    deleted = client.delete(url, headers=auth)
    assert deleted.json() == {"message": "Adjudication deleted"}
    assert client.get(url, headers=auth).status_code == 404


def test_unknown_adjudication(make_client, fake_llm, auth):
    client = make_client(fake_llm)
    url = f"/adjudications/{uuid4()}"
    assert client.get(url, headers=auth).status_code == 404
    assert client.put(url, json={}, headers=auth).status_code == 404
    assert client.delete(url, headers=auth).status_code == 404


def test_disallowed_extension_with_text_media_type_rejected(
    make_client, fake_llm, auth, upload_dir
):
    response = make_client(fake_llm).post(
        "/adjudications/upload",
        files={"transcript": ("slide.png", b"hello", "text/plain")},
        data={"format_name": "AP"},
        headers=auth,
    )

    assert response.status_code == 400
    assert fake_llm.calls == []
    assert _leftover_files(upload_dir) == []
