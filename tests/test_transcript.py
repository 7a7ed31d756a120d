"""Tests for domain/transcript.py."""

import pytest

from debate_adjudication.domain.models import TranscriptEntry
from debate_adjudication.domain.transcript import (
    build_session_transcript,
    ensure_not_blank,
)
from debate_adjudication.exceptions import TranscriptValidationError


def test_entries_joined_in_stored_order():
    entries = [
        TranscriptEntry(speaker="PM", type="speech", timestamp="0:00", text="Opening."),
        TranscriptEntry(speaker="LO", type="poi", timestamp="1:30", text="Point!"),
    ]
    assert build_session_transcript(entries) == (
        "[PM] (speech @ 0:00): Opening.\n[LO] (poi @ 1:30): Point!"
    )


def test_no_entries_is_a_validation_error():
    with pytest.raises(TranscriptValidationError, match="no transcript"):
        build_session_transcript([])


def test_entry_accepts_missing_fields():
    entry = TranscriptEntry.model_validate({"speaker": "DPM", "text": None, "timestamp": 90})
    assert entry.text == ""
    assert entry.timestamp == "90"


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
def test_blank_upload_text_rejected(text):
    with pytest.raises(TranscriptValidationError):
        ensure_not_blank(text, "uploaded file")


def test_non_blank_text_returned_verbatim():
    assert ensure_not_blank("  hello \n", "uploaded file") == "  hello \n"
