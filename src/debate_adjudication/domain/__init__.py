"""Domain layer exports."""

from debate_adjudication.domain.adjudicator import Adjudicator
from debate_adjudication.domain.assembler import assemble_record
from debate_adjudication.domain.models import (
    AdjudicationProvenance,
    AdjudicationRecord,
    AdjudicationResult,
    ChainOfThought,
    ChainOfThoughtStage,
    Clash,
    DetailedFeedback,
    DetailedFeedbackStage,
    ScorecardStage,
    SpeakerFeedback,
    Stage,
    TeamRanking,
    TeamScore,
    TranscriptEntry,
)
from debate_adjudication.domain.normalizer import normalize
from debate_adjudication.domain.prompts import STAGE_ORDER, PromptSpec
from debate_adjudication.domain.stage_generator import StageGenerator
from debate_adjudication.domain.transcript import build_session_transcript

__all__ = [
    "AdjudicationProvenance",
    "AdjudicationRecord",
    "AdjudicationResult",
    "Adjudicator",
    "ChainOfThought",
    "ChainOfThoughtStage",
    "Clash",
    "DetailedFeedback",
    "DetailedFeedbackStage",
    "PromptSpec",
    "STAGE_ORDER",
    "ScorecardStage",
    "SpeakerFeedback",
    "Stage",
    "StageGenerator",
    "TeamRanking",
    "TeamScore",
    "TranscriptEntry",
    "assemble_record",
    "build_session_transcript",
    "normalize",
]
