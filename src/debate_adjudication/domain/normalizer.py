"""Clamps model-supplied numbers into their contractual ranges."""

import copy
from typing import Any

from debate_adjudication.domain.models import Stage

SCORE_RANGE = (0, 100)
WEIGHT_RANGE = (1, 99)
SCORE_CATEGORIES = ("matter", "manner", "method")
REPLY_SIDES = ("proposition", "opposition")


def normalize(document: Any, stage: Stage) -> Any:
    """
    Returns a corrected copy of a parsed stage reply.

    The model does not reliably respect the numeric ranges stated in the
    prompts, so every score and weight is clamped and speaker totals are
    recomputed. Missing or non-numeric values become the lower bound.
    Documents of an unexpected shape are returned unchanged.

    Args:
        document: The parsed JSON reply.
        stage: Which prompt produced the reply.

    Returns:
        The normalized document. The input is never mutated.
    """
    document = copy.deepcopy(document)
    if not isinstance(document, dict):
        return document

    if stage is Stage.SCORECARD:
        _normalize_scorecard(document)
    elif stage is Stage.CHAIN_OF_THOUGHT:
        _normalize_chain_of_thought(document)
    elif stage is Stage.DETAILED_FEEDBACK:
        _normalize_detailed_feedback(document)
    return document


def clamp(value: Any, low: float, high: float) -> float:
    """Clamps a number into [low, high], coercing numeric strings."""
    number = _to_number(value)
    if number is None:
        return low
    return min(max(number, low), high)


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if value == value else None
    if isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
        if number != number:
            return None
        return int(number) if number.is_integer() else number
    return None


def _clamp_categories(scores: dict) -> None:
    for category in SCORE_CATEGORIES:
        scores[category] = clamp(scores.get(category), *SCORE_RANGE)


def _normalize_scorecard(document: dict) -> None:
    scorecard = document.get("scorecard")
    if not isinstance(scorecard, dict):
        return
    for scores in scorecard.values():
        if isinstance(scores, dict):
            _clamp_categories(scores)


def _normalize_chain_of_thought(document: dict) -> None:
    chain = document.get("chainOfThought")
    if not isinstance(chain, dict) or not isinstance(chain.get("clashes"), list):
        return
    for clash in chain["clashes"]:
        if isinstance(clash, dict):
            clash["weight"] = clamp(clash.get("weight"), *WEIGHT_RANGE)


def _normalize_detailed_feedback(document: dict) -> None:
    feedback = document.get("detailedFeedback")
    if not isinstance(feedback, dict):
        return

    speakers = feedback.get("speakers")
    if isinstance(speakers, list):
        for speaker in speakers:
            if not isinstance(speaker, dict):
                continue
            scores = speaker.get("scores")
            if not isinstance(scores, dict):
                scores = speaker["scores"] = {}
            _clamp_categories(scores)
            scores["total"] = sum(scores[c] for c in SCORE_CATEGORIES)

    replies = feedback.get("replySpeeches")
    if isinstance(replies, dict):
        for side in REPLY_SIDES:
            reply = replies.get(side)
            if isinstance(reply, dict):
                reply["score"] = clamp(reply.get("score"), *SCORE_RANGE)
