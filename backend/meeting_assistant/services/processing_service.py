from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional

from meeting_assistant.errors import NotFoundError
from meeting_assistant.models.meeting import ARTIFACT_FIELDS, Meeting
from meeting_assistant.repositories.meetings import MeetingsRepository
from meeting_assistant.schemas import ProcessingStatus, StatusResult
from meeting_assistant.services.analysis import (
    Analyzer,
    PlaceholderAnalyzer,
    PlaceholderTranscriber,
    TemplateAnalyzer,
    Transcriber,
    trim,
)

logger = logging.getLogger("meeting_assistant.processing")


MEETING_NOT_FOUND = "Meeting not found"
TRANSCRIPT_REQUIRED = "Transcript is required for processing"


def _failed(meeting_id: int, message: str) -> StatusResult:
    return StatusResult(meeting_id=meeting_id, status=ProcessingStatus.failed, message=message, progress=0)


class ProcessingService:
    """Turns audio or pasted text into transcript and artifacts for a meeting.

    The two ``process_*`` methods never raise: every problem comes back as a
    ``failed`` StatusResult. ``get_processing_status`` raises NotFoundError
    for an unknown meeting.
    """

    def __init__(
        self,
        meetings: MeetingsRepository,
        transcriber: Optional[Transcriber] = None,
        analyzer: Optional[Analyzer] = None,
        audio_analyzer: Optional[Analyzer] = None,
    ) -> None:
        self.meetings = meetings
        self.transcriber = transcriber or PlaceholderTranscriber()
        self.analyzer = analyzer or TemplateAnalyzer()
        self.audio_analyzer = audio_analyzer or PlaceholderAnalyzer()

    def process_from_text(self, meeting_id: int, transcript: str) -> StatusResult:
        try:
            if self.meetings.get(meeting_id) is None:
                return _failed(meeting_id, MEETING_NOT_FOUND)
            if not transcript or not trim(transcript):
                return _failed(meeting_id, TRANSCRIPT_REQUIRED)

            artifacts = self.analyzer.analyze(transcript)
            self.meetings.update(meeting_id, {"transcript": transcript, **asdict(artifacts)})
        except Exception:
            logger.exception("Text processing failed for meeting %s", meeting_id)
            return _failed(meeting_id, "Processing failed due to internal error")

        logger.info("Processed transcript for meeting %s", meeting_id)
        return StatusResult(
            meeting_id=meeting_id,
            status=ProcessingStatus.completed,
            message="Text processing completed successfully",
            progress=100,
        )

    def process_from_audio(self, meeting_id: int, audio_file_path: str) -> StatusResult:
        try:
            if self.meetings.get(meeting_id) is None:
                return _failed(meeting_id, MEETING_NOT_FOUND)

            self.meetings.update(meeting_id, {"audio_file_path": audio_file_path})

            transcription = self.transcriber.transcribe(audio_file_path)
            artifacts = self.audio_analyzer.analyze(transcription.text)
            self.meetings.update(
                meeting_id,
                {
                    "transcript": transcription.text,
                    **asdict(artifacts),
                    "duration": transcription.duration,
                },
            )
        except Exception:
            logger.exception("Audio processing failed for meeting %s", meeting_id)
            return _failed(meeting_id, "Audio processing failed due to an internal error")

        logger.info("Processed audio %s for meeting %s", audio_file_path, meeting_id)
        return StatusResult(
            meeting_id=meeting_id,
            status=ProcessingStatus.completed,
            message="Audio processing completed successfully",
            progress=100,
        )

    def get_processing_status(self, meeting_id: int) -> StatusResult:
        meeting = self.meetings.get(meeting_id)
        if meeting is None:
            raise NotFoundError(f"Meeting with ID {meeting_id} not found")
        status, progress, message = derive_status(meeting)
        return StatusResult(meeting_id=meeting_id, status=status, message=message, progress=progress)


def derive_status(meeting: Meeting) -> tuple[ProcessingStatus, int, str]:
    has_artifacts = all(getattr(meeting, name) for name in ARTIFACT_FIELDS)

    if meeting.audio_file_path and not meeting.transcript:
        return ProcessingStatus.processing, 25, "Transcribing audio file"
    if meeting.transcript and not has_artifacts:
        return ProcessingStatus.processing, 60, "Processing transcript with AI"
    if meeting.transcript and has_artifacts:
        return ProcessingStatus.completed, 100, "Meeting processing completed successfully"
    return ProcessingStatus.pending, 0, "Waiting to start processing"
