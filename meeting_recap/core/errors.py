"""Error taxonomy and typed results passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Every way a request can end without a saved meeting."""

    UNAUTHORIZED = "Unauthorized"
    USER_NOT_FOUND = "UserNotFound"
    MISSING_FILE = "MissingFile"
    UNSUPPORTED_FILE_TYPE = "UnsupportedFileType"
    TRANSCRIPTION_FAILED = "TranscriptionFailed"
    EMPTY_TRANSCRIPT = "EmptyTranscript"
    EXTRACTION_FAILED = "ExtractionFailed"
    EXTRACTION_EMPTY_RESPONSE = "ExtractionEmptyResponse"
    PROCESSING_FAILED = "ProcessingFailed"


# kind -> (status code, user-facing message)
ERROR_DETAILS: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.UNAUTHORIZED: (401, "Unauthorized"),
    ErrorKind.USER_NOT_FOUND: (404, "User not found"),
    ErrorKind.MISSING_FILE: (400, "No file provided"),
    ErrorKind.UNSUPPORTED_FILE_TYPE: (400, "Invalid file type. Please upload an audio file."),
    ErrorKind.TRANSCRIPTION_FAILED: (500, "Failed to transcribe audio file"),
    ErrorKind.EMPTY_TRANSCRIPT: (400, "Transcription resulted in empty text"),
    ErrorKind.EXTRACTION_FAILED: (500, "Failed to extract action items from transcript"),
    ErrorKind.EXTRACTION_EMPTY_RESPONSE: (500, "No response from extraction model"),
    ErrorKind.PROCESSING_FAILED: (500, "Failed to process meeting"),
}


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    """A normalized failure.

    ``cause`` keeps the original exception for the log. It never reaches the
    HTTP response; ``message`` is only set for the catch-all kind.
    """

    kind: ErrorKind
    cause: BaseException | None = None
    message: str | None = None

    @property
    def status_code(self) -> int:
        return ERROR_DETAILS[self.kind][0]

    @property
    def detail(self) -> str:
        return self.message or ERROR_DETAILS[self.kind][1]

    def to_response(self) -> dict:
        return {"error": self.detail}


Result = Union[Success[T], Failure]


def processing_failed(error: BaseException) -> Failure:
    """Wraps an unexpected exception, keeping its message when it has one."""
    return Failure(ErrorKind.PROCESSING_FAILED, cause=error, message=str(error) or None)
