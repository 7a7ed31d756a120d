"""Core business logic for adjudicating a debate transcript."""

from debate_adjudication.domain.models import AdjudicationResult
from debate_adjudication.domain.prompts import (
    CHAIN_OF_THOUGHT,
    DETAILED_FEEDBACK,
    SCORECARD,
)
from debate_adjudication.domain.stage_generator import StageGenerator
from debate_adjudication.logging import setup_logging

logger = setup_logging()


class Adjudicator:
    """Runs the scorecard, chain-of-thought and feedback stages in order."""

    def __init__(self, generator: StageGenerator):
        self._generator = generator

    async def adjudicate(self, transcript: str) -> AdjudicationResult:
        """
        Produces all three stage results for a transcript.

        The stages run sequentially so the feedback stage is scored against
        the same transcript context as the scorecard. A failure in any stage
        propagates and discards the results already obtained.

        Args:
            transcript: The non-blank debate transcript.

        Returns:
            AdjudicationResult holding one validated result per stage.
        """
        logger.info("Adjudication started", extra={"chars": len(transcript)})

        scorecard = await self._generator.run(SCORECARD, transcript)
        chain_of_thought = await self._generator.run(CHAIN_OF_THOUGHT, transcript)
        detailed_feedback = await self._generator.run(DETAILED_FEEDBACK, transcript)

        logger.info(
            "Adjudication completed",
            extra={"overall_winner": scorecard.overall_winner},
        )
        return AdjudicationResult(
            scorecard=scorecard,
            chain_of_thought=chain_of_thought,
            detailed_feedback=detailed_feedback,
        )
