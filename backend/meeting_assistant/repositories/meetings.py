from __future__ import annotations

import logging
from typing import Any, Mapping, NoReturn, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from meeting_assistant.errors import NotFoundError, StoreError
from meeting_assistant.models.meeting import Meeting, as_utc, utcnow

logger = logging.getLogger("meeting_assistant.repository")


UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "audio_file_path",
        "transcript",
        "summary",
        "tone_analysis",
        "action_items",
        "mind_map",
        "duration",
    }
)


class MeetingsRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        title: str,
        description: Optional[str] = None,
        audio_file_path: Optional[str] = None,
    ) -> Meeting:
        now = utcnow()
        meeting = Meeting(
            title=title,
            description=description or None,
            audio_file_path=audio_file_path or None,
            created_at=now,
            updated_at=now,
        )
        try:
            self.session.add(meeting)
            self.session.commit()
            self.session.refresh(meeting)
        except SQLAlchemyError as exc:
            self._fail("Meeting creation failed", exc)
        return meeting

    def get(self, meeting_id: int) -> Optional[Meeting]:
        try:
            return self.session.get(Meeting, meeting_id)
        except SQLAlchemyError as exc:
            self._fail("Failed to fetch meeting", exc)

    def list(self) -> list[Meeting]:
        statement = select(Meeting).order_by(Meeting.created_at.desc(), Meeting.id.desc())
        try:
            return list(self.session.exec(statement))
        except SQLAlchemyError as exc:
            self._fail("Failed to fetch meetings", exc)

    def update(self, meeting_id: int, changes: Mapping[str, Any]) -> Meeting:
        """Apply ``changes`` to a meeting.

        Keys missing from ``changes`` are left alone; a ``None`` value clears
        the column. ``updated_at`` moves forward on every call.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        meeting = self.get(meeting_id)
        if meeting is None:
            raise NotFoundError(f"Meeting with id {meeting_id} not found")

        for field, value in changes.items():
            setattr(meeting, field, value)
        meeting.updated_at = max(utcnow(), as_utc(meeting.created_at))
        try:
            self.session.add(meeting)
            self.session.commit()
            self.session.refresh(meeting)
        except SQLAlchemyError as exc:
            self._fail("Meeting update failed", exc)
        return meeting

    def delete(self, meeting_id: int) -> bool:
        meeting = self.get(meeting_id)
        if meeting is None:
            return False
        try:
            self.session.delete(meeting)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail("Meeting deletion failed", exc)
        return True

    def _fail(self, message: str, exc: SQLAlchemyError) -> NoReturn:
        self.session.rollback()
        logger.exception(message)
        raise StoreError(f"{message}: {exc}") from exc
