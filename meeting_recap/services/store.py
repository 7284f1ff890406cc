from typing import List, Optional

from sqlmodel import Session, select

from meeting_recap.core.errors import ErrorKind, Failure, Result, Success
from meeting_recap.models.meeting import Meeting, MeetingSummary, User


class MeetingStore:
    """Database access for users and their meetings."""

    def __init__(self, session: Session):
        self.session = session

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def create_meeting(
        self,
        *,
        title: str,
        original_file_name: str,
        transcript: str,
        summary: MeetingSummary,
        user_id: str,
    ) -> Meeting:
        meeting = Meeting(
            title=title,
            original_file_name=original_file_name,
            transcript=transcript,
            summary_json=summary.model_dump(),
            user_id=user_id,
        )
        self.session.add(meeting)
        self.session.commit()
        self.session.refresh(meeting)
        return meeting

    def list_meetings(self, user_id: str) -> List[Meeting]:
        statement = select(Meeting).where(Meeting.user_id == user_id).order_by(Meeting.created_at.desc())
        return list(self.session.exec(statement).all())

    def get_meeting(self, meeting_id: str, user_id: str) -> Optional[Meeting]:
        statement = select(Meeting).where(Meeting.id == meeting_id, Meeting.user_id == user_id)
        return self.session.exec(statement).first()


def identify_user(store: MeetingStore, email: Optional[str]) -> Result[User]:
    """Maps the session identity to a User row."""
    if not email:
        return Failure(ErrorKind.UNAUTHORIZED)
    user = store.find_user_by_email(email)
    if user is None:
        return Failure(ErrorKind.USER_NOT_FOUND)
    return Success(user)
