import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from sqlmodel import Session

from meeting_recap.core.database import get_session
from meeting_recap.core.errors import Failure, processing_failed
from meeting_recap.models.meeting import MeetingListItem, MeetingRead, UserRead
from meeting_recap.routers.auth import get_current_email
from meeting_recap.services.extraction import extract_summary
from meeting_recap.services.pipeline import Extractor, MeetingPipeline, Transcriber
from meeting_recap.services.store import MeetingStore, identify_user
from meeting_recap.services.transcription import transcribe_audio

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_store(session: Session = Depends(get_session)) -> MeetingStore:
    return MeetingStore(session)


def get_transcriber() -> Transcriber:
    return transcribe_audio


def get_extractor() -> Extractor:
    return extract_summary


def get_pipeline(
        store: MeetingStore = Depends(get_store),
        transcribe: Transcriber = Depends(get_transcriber),
        extract: Extractor = Depends(get_extractor),
) -> MeetingPipeline:
    return MeetingPipeline(store, transcribe=transcribe, extract=extract)


def error_response(failure: Failure) -> JSONResponse:
    return JSONResponse(failure.to_response(), status_code=failure.status_code)


@router.post("/meetings/process")
async def process_meeting(
        request: Request,
        email: Optional[str] = Depends(get_current_email),
        pipeline: MeetingPipeline = Depends(get_pipeline),
):
    # Unauthenticated callers are turned away before the body is parsed
    identified = identify_user(pipeline.store, email)
    if isinstance(identified, Failure):
        return error_response(identified)

    try:
        async with request.form() as form:
            outcome = await pipeline.run(email, form.get("file"))
    except HTTPException as e:
        logger.warning("Rejected upload body: %s", e.detail)
        return JSONResponse({"error": e.detail}, status_code=e.status_code)
    except Exception as e:
        logger.exception("Error reading upload")
        return error_response(processing_failed(e))

    return JSONResponse(outcome.to_response(), status_code=outcome.status_code)


@router.get("/meetings")
def list_meetings(
        email: Optional[str] = Depends(get_current_email),
        store: MeetingStore = Depends(get_store),
):
    identified = identify_user(store, email)
    if isinstance(identified, Failure):
        return error_response(identified)
    user = identified.value

    items = [MeetingListItem.from_meeting(m) for m in store.list_meetings(user.id)]
    return [item.model_dump(mode="json", by_alias=True) for item in items]


@router.get("/meetings/{meeting_id}")
def get_meeting(
        meeting_id: str,
        email: Optional[str] = Depends(get_current_email),
        store: MeetingStore = Depends(get_store),
):
    identified = identify_user(store, email)
    if isinstance(identified, Failure):
        return error_response(identified)
    user = identified.value

    meeting = store.get_meeting(meeting_id, user.id)
    if meeting is None:
        return JSONResponse({"error": "Meeting not found"}, status_code=404)
    return MeetingRead.from_meeting(meeting).model_dump(mode="json", by_alias=True)


@router.get("/me")
def me(
        email: Optional[str] = Depends(get_current_email),
        store: MeetingStore = Depends(get_store),
):
    identified = identify_user(store, email)
    if isinstance(identified, Failure):
        return error_response(identified)
    user = identified.value
    return UserRead(email=user.email, name=user.name, image=user.image).model_dump(by_alias=True)
