import logging
from typing import Optional

import httpx

from meeting_recap.core import config
from meeting_recap.core.errors import ErrorKind, Failure, Result, Success
from meeting_recap.services.provider import auth_headers, endpoint, open_client
from meeting_recap.services.validation import AudioUpload

logger = logging.getLogger(__name__)


async def transcribe_audio(upload: AudioUpload, client: Optional[httpx.AsyncClient] = None) -> Result[str]:
    """Sends the recording to the speech-to-text model and returns its text verbatim."""
    files = {"file": (upload.filename, upload.data, upload.content_type or "application/octet-stream")}
    data = {"model": config.TRANSCRIPTION_MODEL}

    try:
        async with open_client(client) as http:
            resp = await http.post(endpoint("audio/transcriptions"), headers=auth_headers(), data=data, files=files)
        resp.raise_for_status()
        text = resp.json()["text"]
        if not isinstance(text, str):
            raise TypeError(f"transcription text is {type(text).__name__}, expected str")
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError, KeyError, TypeError) as e:
        logger.error("Transcription of %s failed: %r", upload.filename, e)
        return Failure(ErrorKind.TRANSCRIPTION_FAILED, cause=e)

    return Success(text)
