"""Custom exceptions for the debate adjudication service."""

from uuid import UUID


class ConfigurationError(Exception):
    """Raised when required configuration is missing at startup."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Missing required setting '{setting}'")


class TranscriptValidationError(Exception):
    """Raised when a transcript is missing or empty."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InvalidUploadError(TranscriptValidationError):
    """Raised when an uploaded transcript file is absent, too large or of a disallowed type."""

    def __init__(self, file_name: str | None, reason: str):
        self.file_name = file_name
        super().__init__(reason)


class TranscriptExtractionError(Exception):
    """Raised when text cannot be extracted from an uploaded file."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to extract text from '{file_name}'{detail}")


class SessionNotFoundError(Exception):
    """Raised when a requested debate session does not exist."""

    def __init__(self, session_id: UUID):
        self.session_id = session_id
        super().__init__(f"Debate session {session_id} not found")


class AdjudicationNotFoundError(Exception):
    """Raised when a requested adjudication does not exist."""

    def __init__(self, adjudication_id: UUID):
        self.adjudication_id = adjudication_id
        super().__init__(f"Adjudication {adjudication_id} not found")


class AdjudicationPersistenceError(Exception):
    """Raised when saving an adjudication to the database fails."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation} adjudication")


class LLMServiceError(Exception):
    """Raised when the generative model call fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class LLMAuthenticationError(LLMServiceError):
    """Raised when the model rejects the configured credentials."""


class LLMRateLimitError(LLMServiceError):
    """Raised when the model quota or rate limit is exhausted."""


class LLMTimeoutError(LLMServiceError):
    """Raised when the model does not answer in time."""


class LLMUnavailableError(LLMServiceError):
    """Raised when the model service cannot be reached."""


class MalformedLLMOutputError(LLMServiceError):
    """Raised when the model reply cannot be parsed into the expected JSON."""

    SAMPLE_LENGTH = 200

    def __init__(
        self,
        stage: str,
        raw_text: str,
        cause: Exception | None = None,
        reason: str = "was not valid JSON",
    ):
        self.stage = stage
        self.reason = reason
        self.sample = raw_text[: self.SAMPLE_LENGTH]
        super().__init__(
            f"Model response for stage '{stage}' {reason}: {self.sample}...",
            cause=cause,
        )
