"""Repository for debate session and user lookups."""

from uuid import UUID

from pydantic import ValidationError
from sqlmodel import Session as DBSession

from debate_adjudication.db_models import DebateSession, User
from debate_adjudication.domain.models import TranscriptEntry
from debate_adjudication.exceptions import (
    SessionNotFoundError,
    TranscriptValidationError,
)
from debate_adjudication.logging import setup_logging

logger = setup_logging()


class SessionRepository:
    """Read-only access to debate sessions recorded elsewhere in the platform."""

    def __init__(self, db_session: DBSession):
        self._db = db_session

    def get_by_id(self, session_id: UUID) -> DebateSession:
        """
        Retrieves a debate session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = self._db.get(DebateSession, session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def get_transcript(self, session: DebateSession) -> list[TranscriptEntry]:
        """
        Returns the session's transcript entries in stored order.

        Raises:
            TranscriptValidationError: If a stored entry is not a transcript entry.
        """
        try:
            return [
                TranscriptEntry.model_validate(entry)
                for entry in session.transcript or []
            ]
        except ValidationError as e:
            logger.warning(
                "Stored transcript entry is malformed",
                extra={"session_id": str(session.id)},
            )
            raise TranscriptValidationError(
                "Debate session transcript contains malformed entries"
            ) from e

    def release(self) -> None:
        """Ends the read transaction so its pooled connection is returned."""
        self._db.commit()


class UserRepository:
    """Read-only access to user identities."""

    def __init__(self, db_session: DBSession):
        self._db = db_session

    def get_by_id(self, user_id: UUID) -> User | None:
        return self._db.get(User, user_id)
