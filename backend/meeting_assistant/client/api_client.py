from __future__ import annotations

import json
from typing import Any, List, Optional

import httpx

from meeting_assistant.schemas import DashboardData, HealthStatus, MeetingRead, StatusResult


class RemoteProcedureError(Exception):
    def __init__(self, code: str, message: str, status_code: int) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status_code = status_code


class MeetingAssistantClient:
    """Calls the backend's named procedures over HTTP.

    Pass ``http`` to reuse an existing ``httpx.Client`` (for example a
    FastAPI ``TestClient``); otherwise one is opened against ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:2022",
        http: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "MeetingAssistantClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def query(self, name: str, input: Any = None) -> Any:
        params = {"input": json.dumps(input)} if input is not None else None
        return self._unwrap(self.http.get(f"/rpc/{name}", params=params))

    def mutate(self, name: str, input: Any = None) -> Any:
        return self._unwrap(self.http.post(f"/rpc/{name}", json=input))

    @staticmethod
    def _unwrap(response: httpx.Response) -> Any:
        try:
            payload = response.json()
        except ValueError:
            raise RemoteProcedureError("INTERNAL_SERVER_ERROR", response.text, response.status_code)
        if response.is_error or "error" in payload:
            error = payload.get("error") or {}
            raise RemoteProcedureError(
                error.get("code", "INTERNAL_SERVER_ERROR"),
                error.get("message", response.reason_phrase),
                response.status_code,
            )
        return payload["result"]["data"]

    def healthcheck(self) -> HealthStatus:
        return HealthStatus.model_validate(self.query("healthcheck"))

    def create_meeting(
        self,
        title: str,
        description: Optional[str] = None,
        audio_file_path: Optional[str] = None,
    ) -> MeetingRead:
        data = self.mutate(
            "createMeeting",
            {"title": title, "description": description, "audio_file_path": audio_file_path},
        )
        return MeetingRead.model_validate(data)

    def get_meetings(self) -> List[MeetingRead]:
        return [MeetingRead.model_validate(m) for m in self.query("getMeetings")]

    def get_meeting_by_id(self, meeting_id: int) -> Optional[MeetingRead]:
        data = self.query("getMeetingById", {"id": meeting_id})
        return MeetingRead.model_validate(data) if data is not None else None

    def update_meeting(self, meeting_id: int, **changes: Any) -> MeetingRead:
        return MeetingRead.model_validate(self.mutate("updateMeeting", {"id": meeting_id, **changes}))

    def delete_meeting(self, meeting_id: int) -> bool:
        return bool(self.mutate("deleteMeeting", {"id": meeting_id}))

    def process_audio(self, meeting_id: int, audio_file_path: str) -> StatusResult:
        data = self.mutate("processAudio", {"meeting_id": meeting_id, "audio_file_path": audio_file_path})
        return StatusResult.model_validate(data)

    def process_text(self, meeting_id: int, transcript: str) -> StatusResult:
        data = self.mutate("processText", {"meeting_id": meeting_id, "transcript": transcript})
        return StatusResult.model_validate(data)

    def get_processing_status(self, meeting_id: int) -> StatusResult:
        return StatusResult.model_validate(self.query("getProcessingStatus", {"meetingId": meeting_id}))

    def get_dashboard_data(self, meeting_id: int) -> Optional[DashboardData]:
        data = self.query("getDashboardData", {"meetingId": meeting_id})
        return DashboardData.model_validate(data) if data is not None else None
