"""Handler for creating adjudications from sessions and uploads."""

import asyncio
import json
from uuid import UUID

from fastapi import UploadFile

from debate_adjudication.domain import (
    AdjudicationProvenance,
    Adjudicator,
    assemble_record,
    build_session_transcript,
)
from debate_adjudication.domain.transcript import ensure_not_blank
from debate_adjudication.exceptions import TranscriptValidationError
from debate_adjudication.infrastructure import TextExtractor, UploadStorage
from debate_adjudication.logging import setup_logging
from debate_adjudication.repositories import AdjudicationRepository, SessionRepository
from debate_adjudication.response_models import AdjudicationResponse

logger = setup_logging()

DEFAULT_MOTION = "Motion not specified"


class AdjudicationHandler:
    """Orchestrates transcript acquisition, adjudication and persistence."""

    def __init__(
        self,
        adjudicator: Adjudicator,
        sessions: SessionRepository,
        adjudications: AdjudicationRepository,
        upload_storage: UploadStorage,
        text_extractor: TextExtractor,
    ):
        self._adjudicator = adjudicator
        self._sessions = sessions
        self._adjudications = adjudications
        self._upload_storage = upload_storage
        self._text_extractor = text_extractor

    async def create_from_session(
        self, session_id: UUID, adjudicator_id: UUID
    ) -> AdjudicationResponse:
        """
        Adjudicates a stored debate session.

        Raises:
            SessionNotFoundError: If the session does not exist.
            TranscriptValidationError: If the session has no transcript.
            LLMServiceError: If any stage fails.
            AdjudicationPersistenceError: If saving fails.
        """
        logger.info("Adjudicating session", extra={"session_id": str(session_id)})

        provenance, transcript = await asyncio.to_thread(
            self._load_session, session_id, adjudicator_id
        )

        result = await self._adjudicator.adjudicate(transcript)

        return await asyncio.to_thread(
            self._adjudications.create, assemble_record(result, provenance)
        )

    def _load_session(
        self, session_id: UUID, adjudicator_id: UUID
    ) -> tuple[AdjudicationProvenance, str]:
        session = self._sessions.get_by_id(session_id)
        transcript = build_session_transcript(self._sessions.get_transcript(session))
        provenance = AdjudicationProvenance(
            adjudicator_id=adjudicator_id,
            format_name=session.debate_type,
            transcript_source="session",
            session_id=session.id,
            motion=session.motion,
        )
        # No connection is held while the model stages run.
        self._sessions.release()
        return provenance, transcript

    async def create_from_upload(
        self,
        upload: UploadFile | None,
        adjudicator_id: UUID,
        format_name: str | None,
        motion: str | None = None,
        teams: str | None = None,
    ) -> AdjudicationResponse:
        """
        Adjudicates an uploaded PDF or plain-text transcript.

        The upload is checked before it touches the disk, and the temporary
        copy is removed whether or not adjudication succeeds.

        Raises:
            InvalidUploadError: If the file is missing, too large or of a disallowed type.
            TranscriptValidationError: If the format name is missing, teams is not JSON,
                or the file holds no text.
            TranscriptExtractionError: If the file cannot be read.
            LLMServiceError: If any stage fails.
            AdjudicationPersistenceError: If saving fails.
        """
        kind = self._upload_storage.validate(upload)

        if not format_name or not format_name.strip():
            raise TranscriptValidationError("Format name is required")
        parsed_teams = _parse_teams(teams)

        logger.info(
            "Adjudicating upload",
            extra={"file_name": upload.filename, "kind": kind.value},
        )
        await asyncio.to_thread(self._sessions.release)

        async with self._upload_storage.store(upload) as path:
            text = await asyncio.to_thread(
                self._text_extractor.extract, path, kind, upload.filename
            )
            transcript = ensure_not_blank(text, "uploaded file")

            result = await self._adjudicator.adjudicate(transcript)

        provenance = AdjudicationProvenance(
            adjudicator_id=adjudicator_id,
            format_name=format_name.strip(),
            transcript_source="upload",
            original_file_name=upload.filename,
            motion=motion or DEFAULT_MOTION,
            teams=parsed_teams,
        )
        return await asyncio.to_thread(
            self._adjudications.create, assemble_record(result, provenance)
        )


def _parse_teams(teams: str | None):
    if not teams:
        return None
    try:
        return json.loads(teams)
    except json.JSONDecodeError as e:
        raise TranscriptValidationError("Teams must be valid JSON") from e
