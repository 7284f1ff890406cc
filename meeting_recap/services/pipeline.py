"""Upload processing: validate -> transcribe -> extract -> title -> persist.

Each step returns a ``Success`` or a ``Failure``; the first failure aborts the
run, so a Meeting row only exists for a run that got through every step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from meeting_recap.core.errors import ErrorKind, Failure, Result, Success, processing_failed
from meeting_recap.models.meeting import Meeting, MeetingSummary, User
from meeting_recap.services.extraction import extract_summary
from meeting_recap.services.store import MeetingStore, identify_user
from meeting_recap.services.transcription import transcribe_audio
from meeting_recap.services.validation import AudioUpload, read_upload

logger = logging.getLogger(__name__)

Transcriber = Callable[[AudioUpload], Awaitable[Result[str]]]
Extractor = Callable[[str], Awaitable[Result[MeetingSummary]]]

# Fixed English names, the process locale must not change titles
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

SUCCESS_MESSAGE = "Meeting processed successfully"


class Stage(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    TRANSCRIBED = "transcribed"
    EXTRACTED = "extracted"
    TITLED = "titled"
    PERSISTED = "persisted"
    RESPONDED = "responded"
    ABORTED = "aborted"


def meeting_title(day: date) -> str:
    """'Meeting on March 5, 2024' for 2024-03-05."""
    return f"Meeting on {MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


@dataclass
class RunState:
    """Everything the steps have produced so far."""

    user: User
    file_field: Any
    upload: Optional[AudioUpload] = None
    transcript: Optional[str] = None
    summary: Optional[MeetingSummary] = None
    title: Optional[str] = None
    meeting: Optional[Meeting] = None


@dataclass
class PipelineOutcome:
    stage: Stage
    history: list = field(default_factory=list)
    meeting: Optional[Meeting] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def status_code(self) -> int:
        return 200 if self.failure is None else self.failure.status_code

    def to_response(self) -> dict:
        if self.failure is not None:
            return self.failure.to_response()
        return {"success": True, "meetingId": self.meeting.id, "message": SUCCESS_MESSAGE}


class MeetingPipeline:
    def __init__(
        self,
        store: MeetingStore,
        transcribe: Transcriber = transcribe_audio,
        extract: Extractor = extract_summary,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.transcribe = transcribe
        self.extract = extract
        self.today = today
        self.steps = (
            (Stage.VALIDATED, self._validate),
            (Stage.TRANSCRIBED, self._transcribe),
            (Stage.EXTRACTED, self._extract),
            (Stage.TITLED, self._title),
            (Stage.PERSISTED, self._persist),
        )

    async def run(self, email: Optional[str], file_field: Any) -> PipelineOutcome:
        """Processes one upload for the user behind ``email``.

        ``email`` is the identity resolved from the caller's session, or None
        when there is no valid session.
        """
        history = [Stage.RECEIVED]
        try:
            identified = identify_user(self.store, email)
            if isinstance(identified, Failure):
                return self._abort(history, identified)

            state = RunState(user=identified.value, file_field=file_field)
            for stage, step in self.steps:
                result = await step(state)
                if isinstance(result, Failure):
                    return self._abort(history, result)
                history.append(stage)
                logger.info("Stage %s reached", stage.value)
        except Exception as e:
            logger.exception("Error processing meeting")
            return self._abort(history, processing_failed(e))

        history.append(Stage.RESPONDED)
        logger.info("Meeting processed successfully: %s", state.meeting.id)
        return PipelineOutcome(stage=Stage.RESPONDED, history=history, meeting=state.meeting)

    def _abort(self, history: list, failure: Failure) -> PipelineOutcome:
        logger.warning("Pipeline aborted after %s: %s", history[-1].value, failure.kind.value)
        return PipelineOutcome(stage=Stage.ABORTED, history=history + [Stage.ABORTED], failure=failure)

    async def _validate(self, state: RunState) -> Result[AudioUpload]:
        result = await read_upload(state.file_field)
        if isinstance(result, Success):
            state.upload = result.value
        return result

    async def _transcribe(self, state: RunState) -> Result[str]:
        logger.info("Transcribing audio file: %s", state.upload.filename)
        result = await self.transcribe(state.upload)
        if isinstance(result, Failure):
            return result
        if not result.value or not result.value.strip():
            return Failure(ErrorKind.EMPTY_TRANSCRIPT)
        state.transcript = result.value
        return result

    async def _extract(self, state: RunState) -> Result[MeetingSummary]:
        logger.info("Extracting action items from transcript")
        result = await self.extract(state.transcript)
        if isinstance(result, Success):
            state.summary = result.value
        return result

    async def _title(self, state: RunState) -> Result[str]:
        state.title = meeting_title(self.today())
        return Success(state.title)

    async def _persist(self, state: RunState) -> Result[Meeting]:
        state.meeting = self.store.create_meeting(
            title=state.title,
            original_file_name=state.upload.filename,
            transcript=state.transcript,
            summary=state.summary,
            user_id=state.user.id,
        )
        return Success(state.meeting)
