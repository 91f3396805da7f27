"""Named remote procedures and their input shapes.

Each procedure declares an input model and whether it is a query or a
mutation. ``call_procedure`` validates the raw input and hands the typed
value to the handler together with a ``ProcedureContext``; no transport is
involved, so the HTTP router and the tests share the same path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from meeting_assistant.errors import NotFoundError
from meeting_assistant.repositories.meetings import MeetingsRepository
from meeting_assistant.schemas import (
    CreateMeetingInput,
    DashboardComponents,
    DashboardData,
    EmptyInput,
    HealthStatus,
    MeetingIdInput,
    MeetingRead,
    MeetingRefInput,
    ProcessAudioInput,
    ProcessTextInput,
    StatusResult,
    UpdateMeetingInput,
)
from meeting_assistant.services.processing_service import ProcessingService
from meeting_assistant.validation import validate_input

logger = logging.getLogger("meeting_assistant.api")


QUERY = "query"
MUTATION = "mutation"


@dataclass
class ProcedureContext:
    meetings: MeetingsRepository
    processing: ProcessingService


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: str
    input_model: Type[BaseModel]
    handler: Callable[[ProcedureContext, Any], Any]


def healthcheck(ctx: ProcedureContext, _: EmptyInput) -> HealthStatus:
    return HealthStatus(status="ok", timestamp=datetime.now(timezone.utc))


def create_meeting(ctx: ProcedureContext, body: CreateMeetingInput) -> MeetingRead:
    meeting = ctx.meetings.create(
        title=body.title,
        description=body.description,
        audio_file_path=body.audio_file_path,
    )
    logger.info("Created meeting %s", meeting.id)
    return MeetingRead.model_validate(meeting)


def get_meetings(ctx: ProcedureContext, _: EmptyInput) -> List[MeetingRead]:
    return [MeetingRead.model_validate(m) for m in ctx.meetings.list()]


def get_meeting_by_id(ctx: ProcedureContext, body: MeetingIdInput) -> Optional[MeetingRead]:
    meeting = ctx.meetings.get(body.id)
    return MeetingRead.model_validate(meeting) if meeting is not None else None


def update_meeting(ctx: ProcedureContext, body: UpdateMeetingInput) -> MeetingRead:
    meeting = ctx.meetings.update(body.id, body.changes())
    return MeetingRead.model_validate(meeting)


def delete_meeting(ctx: ProcedureContext, body: MeetingIdInput) -> bool:
    removed = ctx.meetings.delete(body.id)
    if removed:
        logger.info("Deleted meeting %s", body.id)
    return removed


def process_audio(ctx: ProcedureContext, body: ProcessAudioInput) -> StatusResult:
    return ctx.processing.process_from_audio(body.meeting_id, body.audio_file_path)


def process_text(ctx: ProcedureContext, body: ProcessTextInput) -> StatusResult:
    return ctx.processing.process_from_text(body.meeting_id, body.transcript)


def get_processing_status(ctx: ProcedureContext, body: MeetingRefInput) -> StatusResult:
    return ctx.processing.get_processing_status(body.meeting_id)


def get_dashboard_data(ctx: ProcedureContext, body: MeetingRefInput) -> Optional[DashboardData]:
    meeting = ctx.meetings.get(body.meeting_id)
    if meeting is None:
        return None
    read = MeetingRead.model_validate(meeting)
    return DashboardData(
        meeting=read,
        components=DashboardComponents(
            summary=read.summary,
            tone_analysis=read.tone_analysis,
            action_items=read.action_items,
            mind_map=read.mind_map,
        ),
    )


PROCEDURES: Dict[str, Procedure] = {
    p.name: p
    for p in [
        Procedure("healthcheck", QUERY, EmptyInput, healthcheck),
        Procedure("createMeeting", MUTATION, CreateMeetingInput, create_meeting),
        Procedure("getMeetings", QUERY, EmptyInput, get_meetings),
        Procedure("getMeetingById", QUERY, MeetingIdInput, get_meeting_by_id),
        Procedure("updateMeeting", MUTATION, UpdateMeetingInput, update_meeting),
        Procedure("deleteMeeting", MUTATION, MeetingIdInput, delete_meeting),
        Procedure("processAudio", MUTATION, ProcessAudioInput, process_audio),
        Procedure("processText", MUTATION, ProcessTextInput, process_text),
        Procedure("getProcessingStatus", QUERY, MeetingRefInput, get_processing_status),
        Procedure("getDashboardData", QUERY, MeetingRefInput, get_dashboard_data),
    ]
}


def get_procedure(name: str) -> Procedure:
    procedure = PROCEDURES.get(name)
    if procedure is None:
        raise NotFoundError(f'No procedure found named "{name}"')
    return procedure


def call_procedure(ctx: ProcedureContext, name: str, raw_input: Any = None) -> Any:
    procedure = get_procedure(name)
    body = validate_input(procedure.input_model, raw_input)
    return procedure.handler(ctx, body)
