from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProcessingStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    completed = "completed"
    failed = "failed"


class MeetingRead(BaseModel):
    id: int
    title: str
    description: Optional[str]
    audio_file_path: Optional[str]
    transcript: Optional[str]
    summary: Optional[str]
    tone_analysis: Optional[str]
    action_items: Optional[str]
    mind_map: Optional[str]
    duration: Optional[int]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class _Input(BaseModel):
    # Numbers must arrive as numbers, not numeric strings or booleans
    model_config = ConfigDict(strict=True, populate_by_name=True)


class EmptyInput(_Input):
    pass


class CreateMeetingInput(_Input):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    audio_file_path: Optional[str] = None


class UpdateMeetingInput(_Input):
    """Partial update.

    A field left out of the request is untouched, a field sent as ``null`` is
    cleared, anything else is written. ``changes()`` keeps that distinction.
    """

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    audio_file_path: Optional[str] = None
    transcript: Optional[str] = None
    summary: Optional[str] = None
    tone_analysis: Optional[str] = None
    action_items: Optional[str] = None
    mind_map: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("title cannot be null")
        if not value:
            raise ValueError("Title is required")
        return value

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(include=self.model_fields_set - {"id"})


class MeetingIdInput(_Input):
    id: int


class MeetingRefInput(_Input):
    meeting_id: int = Field(alias="meetingId")


class ProcessAudioInput(_Input):
    meeting_id: int
    audio_file_path: str


class ProcessTextInput(_Input):
    meeting_id: int
    transcript: str


class StatusResult(BaseModel):
    meeting_id: int
    status: ProcessingStatus
    message: Optional[str] = None
    progress: int = Field(ge=0, le=100)


class DashboardComponents(BaseModel):
    summary: Optional[str]
    tone_analysis: Optional[str]
    action_items: Optional[str]
    mind_map: Optional[str]


class DashboardData(BaseModel):
    meeting: MeetingRead
    components: DashboardComponents


class HealthStatus(BaseModel):
    status: str = "ok"
    timestamp: datetime
