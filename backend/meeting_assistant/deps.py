from __future__ import annotations

from typing import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from meeting_assistant.config import Settings
from meeting_assistant.procedures import ProcedureContext
from meeting_assistant.repositories.meetings import MeetingsRepository
from meeting_assistant.services.analysis import TemplateAnalyzer
from meeting_assistant.services.processing_service import ProcessingService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request) -> Iterator[Session]:
    with Session(request.app.state.engine) as session:
        yield session


def get_context(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ProcedureContext:
    meetings = MeetingsRepository(session)
    processing = ProcessingService(
        meetings,
        analyzer=TemplateAnalyzer(delay_seconds=settings.processing_delay_seconds),
    )
    return ProcedureContext(meetings=meetings, processing=processing)
