"""Infrastructure layer exports."""

from debate_adjudication.infrastructure.gemini_llm import GeminiLLMService
from debate_adjudication.infrastructure.text_extractor import TextExtractor
from debate_adjudication.infrastructure.upload_storage import (
    FileKind,
    UploadStorage,
    detect_file_kind,
)

__all__ = [
    "FileKind",
    "GeminiLLMService",
    "TextExtractor",
    "UploadStorage",
    "detect_file_kind",
]
