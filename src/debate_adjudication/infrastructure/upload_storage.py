"""Temporary on-disk storage for uploaded transcript files."""

import os
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum
from pathlib import Path

from fastapi import UploadFile

from debate_adjudication.exceptions import InvalidUploadError
from debate_adjudication.logging import setup_logging

logger = setup_logging()

_CHUNK_SIZE = 1024 * 1024
_GENERIC_CONTENT_TYPES = {"", "application/octet-stream"}


class FileKind(str, Enum):
    PDF = "application/pdf"
    TEXT = "text/plain"


_KIND_BY_EXTENSION = {".pdf": FileKind.PDF, ".txt": FileKind.TEXT}


def detect_file_kind(filename: str | None, content_type: str | None) -> FileKind:
    """
    Resolves an upload to one of the allowed kinds.

    Both the declared media type and the filename extension are checked.
    Any extension other than .pdf or .txt is rejected; a generic
    octet-stream media type defers to the extension, and a file with no
    extension is judged by its media type alone.

    Raises:
        InvalidUploadError: If the file is not a PDF or plain-text file.
    """
    extension = os.path.splitext(filename or "")[1].lower()
    media_type = (content_type or "").split(";")[0].strip().lower()

    extension_kind = _KIND_BY_EXTENSION.get(extension)
    if extension and extension_kind is None:
        raise InvalidUploadError(
            filename, "Invalid file type. Only PDF and TXT files are allowed."
        )

    media_kind = None
    if media_type not in _GENERIC_CONTENT_TYPES:
        try:
            media_kind = FileKind(media_type)
        except ValueError:
            raise InvalidUploadError(
                filename,
                "Invalid file type. Only PDF and TXT files are allowed.",
            ) from None

    if extension_kind and media_kind and extension_kind != media_kind:
        raise InvalidUploadError(
            filename, "File extension does not match the declared file type."
        )

    kind = extension_kind or media_kind
    if kind is None:
        raise InvalidUploadError(
            filename, "Invalid file type. Only PDF and TXT files are allowed."
        )
    return kind


class UploadStorage:
    """Validates uploads and keeps them on disk only while they are processed."""

    def __init__(self, upload_dir: Path, max_upload_bytes: int):
        self._upload_dir = upload_dir
        self._max_upload_bytes = max_upload_bytes

    def validate(self, upload: UploadFile | None) -> FileKind:
        """
        Checks presence, type and declared size before anything is written.

        Returns:
            The resolved file kind.

        Raises:
            InvalidUploadError: If the upload is missing, disallowed or too large.
        """
        if upload is None or not upload.filename:
            raise InvalidUploadError(
                None,
                'No file uploaded. Attach the transcript to the "transcript" field.',
            )

        kind = detect_file_kind(upload.filename, upload.content_type)

        if upload.size is not None and upload.size > self._max_upload_bytes:
            raise InvalidUploadError(upload.filename, self._too_large_message())

        return kind

    @asynccontextmanager
    async def store(self, upload: UploadFile) -> AsyncIterator[Path]:
        """
        Streams an upload into a temporary file and removes it on exit.

        Yields:
            Path of the temporary file.

        Raises:
            InvalidUploadError: If the streamed content exceeds the size limit.
        """
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        extension = os.path.splitext(upload.filename or "")[1].lower()
        path = self._upload_dir / f"transcript-{uuid.uuid4().hex}{extension}"

        try:
            written = 0
            with path.open("wb") as temp_file:
                while chunk := await upload.read(_CHUNK_SIZE):
                    written += len(chunk)
                    if written > self._max_upload_bytes:
                        raise InvalidUploadError(
                            upload.filename, self._too_large_message()
                        )
                    temp_file.write(chunk)

            logger.info(
                "Upload stored",
                extra={"file_name": upload.filename, "size": written},
            )
            yield path
        finally:
            self._cleanup(path)

    def _cleanup(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Failed to remove uploaded file", extra={"path": str(path)})

    def _too_large_message(self) -> str:
        limit_mb = self._max_upload_bytes // (1024 * 1024)
        return f"File size too large. Maximum size is {limit_mb}MB."
