"""Extracts transcript text from uploaded PDF and plain-text files."""

from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from debate_adjudication.exceptions import (
    TranscriptExtractionError,
    TranscriptValidationError,
)
from debate_adjudication.infrastructure.upload_storage import FileKind
from debate_adjudication.logging import setup_logging

logger = setup_logging()


class TextExtractor:
    """Reads the debate text out of a stored upload."""

    def extract(self, path: Path, kind: FileKind, file_name: str) -> str:
        """
        Returns the transcript text of a stored file.

        Args:
            path: Location of the temporary file.
            kind: The validated file kind.
            file_name: Original file name, for error reporting.

        Raises:
            TranscriptValidationError: If the file holds no readable text.
            TranscriptExtractionError: If the file cannot be read.
        """
        if not path.exists():
            raise TranscriptValidationError(f"Uploaded file '{file_name}' not found")

        if kind is FileKind.PDF:
            text = self._extract_pdf(path, file_name)
        else:
            text = self._read_text(path, file_name)

        logger.info(
            "Transcript text extracted",
            extra={"file_name": file_name, "kind": kind.value, "chars": len(text)},
        )
        return text

    def _extract_pdf(self, path: Path, file_name: str) -> str:
        if path.stat().st_size == 0:
            raise TranscriptValidationError("PDF file is empty")

        try:
            reader = PdfReader(path)
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PdfReadError, ValueError, KeyError, OSError) as e:
            logger.exception("PDF extraction failed", extra={"file_name": file_name})
            raise TranscriptExtractionError(file_name, cause=e) from e

        text = "\n".join(pages)
        if not text.strip():
            raise TranscriptValidationError(
                "No readable text found in PDF. Please ensure the PDF contains selectable text."
            )
        return text

    def _read_text(self, path: Path, file_name: str) -> str:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.exception("Text file decoding failed", extra={"file_name": file_name})
            raise TranscriptExtractionError(file_name, cause=e) from e

        if not text.strip():
            raise TranscriptValidationError("Text file is empty")
        return text
