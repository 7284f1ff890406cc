"""Decisions and action items extracted from a transcript by a chat model."""

import json
import logging
from typing import Optional

import httpx

from meeting_recap.core import config
from meeting_recap.core.errors import ErrorKind, Failure, Result, Success
from meeting_recap.models.meeting import ActionItem, MeetingSummary
from meeting_recap.services.provider import auth_headers, endpoint, open_client

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert meeting assistant. Your task is to analyze a meeting transcript and "
    "extract key information. You must respond only in a valid JSON object with two keys: "
    "'decisions' and 'action_items'. The 'decisions' key should contain an array of strings, "
    "where each string is a clear decision made. The 'action_items' key should contain an array "
    "of objects, where each object has 'task' (string) and 'assignee' (string, or null if not "
    "mentioned) properties."
)


def build_messages(transcript: str) -> list:
    user_prompt = f"Please analyze the following transcript:\n\n---\n{transcript}\n---"
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def _decision(item) -> Optional[str]:
    if isinstance(item, str):
        return item
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return str(item)
    return None


def _action_item(item) -> Optional[ActionItem]:
    if not isinstance(item, dict) or not isinstance(item.get("task"), str):
        return None
    assignee = item.get("assignee")
    return ActionItem(task=item["task"], assignee=assignee if isinstance(assignee, str) else None)


def normalize_summary(parsed: dict) -> MeetingSummary:
    """Builds a MeetingSummary from an almost-correct model reply.

    A missing or non-list field becomes an empty list. Inside the lists,
    numeric decisions are stringified, other non-string decisions are dropped,
    action items without a string ``task`` are dropped and a non-string
    ``assignee`` becomes None.
    """
    decisions = parsed.get("decisions")
    action_items = parsed.get("action_items")
    if not isinstance(decisions, list):
        decisions = []
    if not isinstance(action_items, list):
        action_items = []

    return MeetingSummary(
        decisions=[d for d in map(_decision, decisions) if d is not None],
        action_items=[a for a in map(_action_item, action_items) if a is not None],
    )


def _message_content(body: dict) -> Optional[str]:
    choices = body.get("choices") or []
    if not choices:
        return None
    return (choices[0].get("message") or {}).get("content")


async def extract_summary(transcript: str, client: Optional[httpx.AsyncClient] = None) -> Result[MeetingSummary]:
    """Asks the chat model for a JSON summary of the transcript."""
    payload = {
        "model": config.EXTRACTION_MODEL,
        "messages": build_messages(transcript),
        "response_format": {"type": "json_object"},
        "temperature": config.EXTRACTION_TEMPERATURE,
    }

    try:
        async with open_client(client) as http:
            resp = await http.post(endpoint("chat/completions"), headers=auth_headers(), json=payload)
        resp.raise_for_status()
        content = _message_content(resp.json())
        if not content:
            logger.error("Extraction model returned no content")
            return Failure(ErrorKind.EXTRACTION_EMPTY_RESPONSE)

        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            raise TypeError(f"expected a JSON object, got {type(parsed).__name__}")
        summary = normalize_summary(parsed)
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError, TypeError, AttributeError) as e:
        logger.error("Extraction failed: %r", e)
        return Failure(ErrorKind.EXTRACTION_FAILED, cause=e)

    return Success(summary)
