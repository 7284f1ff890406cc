from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, Column, Text
from sqlmodel import Field, SQLModel


def new_id() -> str:
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# --- Summary returned by the extraction model ---

class ActionItem(SQLModel):
    task: str
    assignee: Optional[str] = None


class MeetingSummary(SQLModel):
    decisions: List[str] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)


# --- Tables ---

class User(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class Meeting(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    title: str
    original_file_name: str
    transcript: str = Field(sa_column=Column(Text, nullable=False))
    summary_json: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    user_id: str = Field(foreign_key="user.id", index=True)

    @property
    def summary(self) -> MeetingSummary:
        return MeetingSummary.model_validate(self.summary_json or {})


# --- API schemas (camelCase on the wire) ---

class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MeetingRead(ApiModel):
    id: str
    title: str
    original_file_name: str
    transcript: str
    summary_json: MeetingSummary
    created_at: datetime
    updated_at: datetime
    user_id: str

    @classmethod
    def from_meeting(cls, meeting: Meeting) -> "MeetingRead":
        return cls(
            id=meeting.id,
            title=meeting.title,
            original_file_name=meeting.original_file_name,
            transcript=meeting.transcript,
            summary_json=meeting.summary,
            created_at=meeting.created_at,
            updated_at=meeting.updated_at,
            user_id=meeting.user_id,
        )


class MeetingListItem(ApiModel):
    id: str
    title: str
    original_file_name: str
    created_at: datetime
    decision_count: int
    action_item_count: int

    @classmethod
    def from_meeting(cls, meeting: Meeting) -> "MeetingListItem":
        summary = meeting.summary
        return cls(
            id=meeting.id,
            title=meeting.title,
            original_file_name=meeting.original_file_name,
            created_at=meeting.created_at,
            decision_count=len(summary.decisions),
            action_item_count=len(summary.action_items),
        )


class UserRead(ApiModel):
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
