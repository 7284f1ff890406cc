import re
from dataclasses import dataclass
from typing import Any, Optional

from starlette.datastructures import UploadFile

from meeting_recap.core.errors import ErrorKind, Failure, Result, Success

VALID_CONTENT_TYPES = {
    "audio/mpeg",
    "audio/mp4",
    "audio/webm",
    "audio/wav",
    "audio/m4a",
    "audio/x-m4a",
}
VALID_EXTENSION = re.compile(r"\.(mp3|m4a|webm|wav)$", re.IGNORECASE)


@dataclass(frozen=True)
class AudioUpload:
    filename: str
    content_type: str
    data: bytes


def is_supported_audio(filename: str, content_type: Optional[str]) -> bool:
    """Accepts the file if either the content type or the extension looks like audio."""
    return (content_type or "") in VALID_CONTENT_TYPES or bool(VALID_EXTENSION.search(filename or ""))


async def read_upload(field: Any) -> Result[AudioUpload]:
    """Turns the raw ``file`` form field into an AudioUpload, or a validation failure."""
    if not isinstance(field, UploadFile):
        return Failure(ErrorKind.MISSING_FILE)

    filename = field.filename or ""
    content_type = field.content_type or ""
    if not is_supported_audio(filename, content_type):
        return Failure(ErrorKind.UNSUPPORTED_FILE_TYPE)

    data = await field.read()
    return Success(AudioUpload(filename=filename, content_type=content_type, data=data))
