"""Repository exports."""

from debate_adjudication.repositories.adjudication_repository import (
    AdjudicationRepository,
)
from debate_adjudication.repositories.session_repository import (
    SessionRepository,
    UserRepository,
)

__all__ = ["AdjudicationRepository", "SessionRepository", "UserRepository"]
