from __future__ import annotations

import logging
from pathlib import PurePath
from typing import List, Optional

import httpx

from meeting_assistant.client.api_client import MeetingAssistantClient, RemoteProcedureError
from meeting_assistant.schemas import DashboardData, MeetingRead, StatusResult
from meeting_assistant.services.analysis import trim

logger = logging.getLogger("meeting_assistant.client")

_CALL_ERRORS = (RemoteProcedureError, httpx.HTTPError)


class ClientState:
    """Client-side view of the meetings and the selected meeting's dashboard.

    Failed calls are logged and leave the state as it was, except that a
    failed dashboard load clears the snapshot.
    """

    def __init__(self, client: MeetingAssistantClient) -> None:
        self.client = client
        self.meetings: List[MeetingRead] = []
        self.selected: Optional[MeetingRead] = None
        self.dashboard: Optional[DashboardData] = None
        self.processing_status: Optional[StatusResult] = None
        self.is_loading = False

    def load_meetings(self) -> None:
        try:
            self.meetings = self.client.get_meetings()
        except _CALL_ERRORS:
            logger.exception("Failed to load meetings")

    def load_dashboard(self, meeting_id: int) -> None:
        try:
            self.dashboard = self.client.get_dashboard_data(meeting_id)
        except _CALL_ERRORS:
            logger.exception("Failed to load dashboard data")
            self.dashboard = None
        if self.dashboard is not None and self.selected is not None and self.selected.id == meeting_id:
            self.selected = self.dashboard.meeting
            self._replace_in_list(self.dashboard.meeting)

    def create_meeting(
        self,
        title: str,
        description: Optional[str] = None,
        audio_file_path: Optional[str] = None,
    ) -> Optional[MeetingRead]:
        self.is_loading = True
        try:
            meeting = self.client.create_meeting(title, description, audio_file_path)
        except _CALL_ERRORS:
            logger.exception("Failed to create meeting")
            return None
        finally:
            self.is_loading = False
        # newest first, same order as getMeetings
        self.meetings.insert(0, meeting)
        return meeting

    def select_meeting(self, meeting: MeetingRead) -> None:
        self.selected = meeting
        self.load_dashboard(meeting.id)

    def process_audio(self, file_name: str) -> Optional[StatusResult]:
        if self.selected is None:
            return None
        # TODO: upload the file and send the stored path once the backend accepts uploads
        audio_path = f"uploads/{PurePath(file_name).name}"
        return self._process(lambda meeting_id: self.client.process_audio(meeting_id, audio_path), "audio")

    def process_text(self, text: str) -> Optional[StatusResult]:
        if self.selected is None or not trim(text):
            return None
        transcript = trim(text)
        return self._process(lambda meeting_id: self.client.process_text(meeting_id, transcript), "text")

    def refresh_status(self) -> Optional[StatusResult]:
        if self.selected is None:
            return None
        try:
            self.processing_status = self.client.get_processing_status(self.selected.id)
        except _CALL_ERRORS:
            logger.exception("Failed to fetch processing status")
        return self.processing_status

    def delete_meeting(self, meeting_id: int) -> bool:
        try:
            removed = self.client.delete_meeting(meeting_id)
        except _CALL_ERRORS:
            logger.exception("Failed to delete meeting")
            return False
        self.meetings = [m for m in self.meetings if m.id != meeting_id]
        if self.selected is not None and self.selected.id == meeting_id:
            self.selected = None
            self.dashboard = None
        return removed

    def _process(self, call, kind: str) -> Optional[StatusResult]:
        if self.selected is None:
            return None
        meeting_id = self.selected.id
        self.is_loading = True
        try:
            self.processing_status = call(meeting_id)
            self.load_dashboard(meeting_id)
        except _CALL_ERRORS:
            logger.exception("Failed to process %s", kind)
        finally:
            self.is_loading = False
        return self.processing_status

    def _replace_in_list(self, meeting: MeetingRead) -> None:
        self.meetings = [meeting if m.id == meeting.id else m for m in self.meetings]
