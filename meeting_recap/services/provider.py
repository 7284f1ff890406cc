from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from meeting_recap.core import config


def auth_headers() -> dict:
    return {"Authorization": f"Bearer {config.OPENAI_API_KEY}"}


def endpoint(path: str) -> str:
    return f"{config.OPENAI_BASE_URL}/{path.lstrip('/')}"


@asynccontextmanager
async def open_client(client: Optional[httpx.AsyncClient] = None) -> AsyncIterator[httpx.AsyncClient]:
    """Yields the caller's client, or a short-lived one closed on exit."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT) as own_client:
        yield own_client
