"""Repository for adjudication persistence."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic_core import to_jsonable_python
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session as DBSession
from sqlmodel import select

from debate_adjudication.db_models import Adjudication
from debate_adjudication.domain.models import AdjudicationRecord
from debate_adjudication.exceptions import (
    AdjudicationNotFoundError,
    AdjudicationPersistenceError,
)
from debate_adjudication.logging import setup_logging
from debate_adjudication.response_models import (
    AdjudicationResponse,
    AdjudicationUpdate,
    SessionSummary,
    UserSummary,
)

logger = setup_logging()

_NULLABLE_FIELDS = {"motion", "teams"}


class AdjudicationRepository:
    """
    Handles all database operations for adjudications.

    Stage results are stored as JSON documents with the same camelCase keys
    the model produced, and reads return responses with the originating
    session and adjudicator expanded.
    """

    def __init__(self, db_session: DBSession):
        self._db = db_session

    def create(self, record: AdjudicationRecord) -> AdjudicationResponse:
        """
        Persists a complete adjudication.

        Raises:
            AdjudicationPersistenceError: If the insert fails.
        """
        entity = Adjudication(
            session_id=record.session_id,
            adjudicator_id=record.adjudicator_id,
            format_name=record.format_name,
            motion=record.motion,
            teams=to_jsonable_python(record.teams),
            transcript_source=record.transcript_source,
            original_file_name=record.original_file_name,
            overall_winner=record.overall_winner,
            team_rankings=_to_json(record.team_rankings),
            scorecard=_to_json(record.scorecard),
            chain_of_thought=_to_json(record.chain_of_thought),
            detailed_feedback=_to_json(record.detailed_feedback),
        )
        self._commit(entity, "create")

        logger.info(
            "Adjudication persisted",
            extra={
                "adjudication_id": str(entity.id),
                "transcript_source": entity.transcript_source,
            },
        )
        return self._to_response(entity)

    def list_all(self) -> list[AdjudicationResponse]:
        statement = select(Adjudication).order_by(Adjudication.created_at.desc())
        return [self._to_response(entity) for entity in self._db.exec(statement).all()]

    def get_by_id(self, adjudication_id: UUID) -> AdjudicationResponse:
        """
        Retrieves a single adjudication.

        Raises:
            AdjudicationNotFoundError: If the adjudication does not exist.
        """
        return self._to_response(self._get_entity(adjudication_id))

    def update(
        self, adjudication_id: UUID, changes: AdjudicationUpdate
    ) -> AdjudicationResponse:
        """
        Replaces the supplied fields as given, without re-deriving anything.

        Raises:
            AdjudicationNotFoundError: If the adjudication does not exist.
            AdjudicationPersistenceError: If the update fails.
        """
        entity = self._get_entity(adjudication_id)
        for field_name in changes.model_fields_set:
            value = getattr(changes, field_name)
            if value is None and field_name not in _NULLABLE_FIELDS:
                continue
            setattr(entity, field_name, _to_json(value))
        entity.updated_at = datetime.now(timezone.utc)
        self._commit(entity, "update")
        return self._to_response(entity)

    def delete(self, adjudication_id: UUID) -> None:
        """
        Removes an adjudication.

        Raises:
            AdjudicationNotFoundError: If the adjudication does not exist.
            AdjudicationPersistenceError: If the delete fails.
        """
        entity = self._get_entity(adjudication_id)
        try:
            self._db.delete(entity)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.exception(
                "Failed to delete adjudication",
                extra={"adjudication_id": str(adjudication_id)},
            )
            raise AdjudicationPersistenceError("delete", cause=e) from e

    def _get_entity(self, adjudication_id: UUID) -> Adjudication:
        entity = self._db.get(Adjudication, adjudication_id)
        if entity is None:
            raise AdjudicationNotFoundError(adjudication_id)
        return entity

    def _commit(self, entity: Adjudication, operation: str) -> None:
        try:
            self._db.add(entity)
            self._db.commit()
            self._db.refresh(entity)
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.exception("Failed to %s adjudication", operation)
            raise AdjudicationPersistenceError(operation, cause=e) from e

    def _to_response(self, entity: Adjudication) -> AdjudicationResponse:
        session = entity.session
        adjudicator = entity.adjudicator
        return AdjudicationResponse(
            id=entity.id,
            session=(
                SessionSummary(
                    id=session.id,
                    title=session.title,
                    debate_type=session.debate_type,
                    motion=session.motion,
                    status=session.status,
                )
                if session
                else None
            ),
            adjudicator=(
                UserSummary(
                    id=adjudicator.id,
                    username=adjudicator.username,
                    full_name=adjudicator.full_name,
                )
                if adjudicator
                else None
            ),
            format_name=entity.format_name,
            motion=entity.motion,
            teams=entity.teams,
            transcript_source=entity.transcript_source,
            original_file_name=entity.original_file_name,
            overall_winner=entity.overall_winner,
            team_rankings=entity.team_rankings,
            scorecard=entity.scorecard,
            chain_of_thought=entity.chain_of_thought,
            detailed_feedback=entity.detailed_feedback,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


def _to_json(value):
    """Converts pydantic values into plain JSON with camelCase keys."""
    return to_jsonable_python(value, by_alias=True)
