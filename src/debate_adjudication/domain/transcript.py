"""Builds adjudication input text from recorded debate turns."""

from collections.abc import Iterable

from debate_adjudication.domain.models import TranscriptEntry
from debate_adjudication.exceptions import TranscriptValidationError


def format_entry(entry: TranscriptEntry) -> str:
    return f"[{entry.speaker}] ({entry.type} @ {entry.timestamp}): {entry.text}"


def build_session_transcript(entries: Iterable[TranscriptEntry]) -> str:
    """
    Joins transcript entries in stored order, one line per entry.

    Raises:
        TranscriptValidationError: If the result is blank.
    """
    transcript = "\n".join(format_entry(entry) for entry in entries)
    if not transcript.strip():
        raise TranscriptValidationError("Debate session has no transcript data")
    return transcript


def ensure_not_blank(text: str, source: str) -> str:
    """Rejects transcripts that are empty after trimming whitespace."""
    if not text or not text.strip():
        raise TranscriptValidationError(
            f"The {source} appears to be empty or contains no readable text"
        )
    return text
