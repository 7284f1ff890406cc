from __future__ import annotations

import io

from starlette.datastructures import Headers, UploadFile

USER_EMAIL = "alice@example.com"


def make_upload(filename: str = "standup.wav", content_type: str = "audio/wav", data: bytes = b"RIFF0000WAVE") -> UploadFile:
    """An UploadFile as Starlette builds it from a multipart part."""
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )
