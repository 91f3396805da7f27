from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class UTCDateTime(TypeDecorator):
    """Stores naive UTC, loads timezone-aware UTC.

    SQLite has no timezone support, so offsets are normalised away on write.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return as_utc(value).astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


ARTIFACT_FIELDS = ("summary", "tone_analysis", "action_items", "mind_map")


class Meeting(SQLModel, table=True):
    __tablename__ = "meetings"
    # Without AUTOINCREMENT SQLite hands a deleted max id out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    audio_file_path: Optional[str] = None
    transcript: Optional[str] = None
    summary: Optional[str] = None
    tone_analysis: Optional[str] = None
    action_items: Optional[str] = None
    mind_map: Optional[str] = None
    duration: Optional[int] = None  # seconds
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
