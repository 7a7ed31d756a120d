"""Merges stage results and provenance into one adjudication record."""

from debate_adjudication.domain.models import (
    AdjudicationProvenance,
    AdjudicationRecord,
    AdjudicationResult,
)


def assemble_record(
    result: AdjudicationResult, provenance: AdjudicationProvenance
) -> AdjudicationRecord:
    """Builds the record field by field so stages cannot overwrite each other."""
    return AdjudicationRecord(
        adjudicator_id=provenance.adjudicator_id,
        format_name=provenance.format_name,
        transcript_source=provenance.transcript_source,
        session_id=provenance.session_id,
        original_file_name=provenance.original_file_name,
        motion=provenance.motion,
        teams=provenance.teams,
        overall_winner=result.scorecard.overall_winner,
        team_rankings=result.scorecard.team_rankings,
        scorecard=result.scorecard.scorecard,
        chain_of_thought=result.chain_of_thought.chain_of_thought,
        detailed_feedback=result.detailed_feedback.detailed_feedback,
    )
