from __future__ import annotations

import json
from fastapi.testclient import TestClient

from meeting_assistant.schemas import MeetingRead


def query(client: TestClient, name: str, input=None):
    params = {"input": json.dumps(input)} if input is not None else None
    return client.get(f"/rpc/{name}", params=params)


def mutate(client: TestClient, name: str, input=None):
    return client.post(f"/rpc/{name}", json=input)


def data(response) -> object:
    assert response.status_code == 200, response.text
    return response.json()["result"]["data"]


def create(client: TestClient, title: str, **fields) -> dict:
    return data(mutate(client, "createMeeting", {"title": title, **fields}))


def test_healthz(client: TestClient) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_healthcheck_procedure(client: TestClient) -> None:
    body = data(query(client, "healthcheck"))
    assert body["status"] == "ok"
    assert body["timestamp"]


def test_create_and_fetch_meeting(client: TestClient) -> None:
    created = create(client, "Kickoff", description="Project kickoff")

    assert created["title"] == "Kickoff"
    assert created["transcript"] is None
    assert created["duration"] is None

    fetched = data(query(client, "getMeetingById", {"id": created["id"]}))
    assert fetched == created


def test_get_missing_meeting_returns_null(client: TestClient) -> None:
    assert data(query(client, "getMeetingById", {"id": 404})) is None


def test_get_meetings_newest_first(client: TestClient) -> None:
    a = create(client, "A")
    b = create(client, "B")

    ids = [m["id"] for m in data(query(client, "getMeetings"))]

    assert ids == [b["id"], a["id"]]


def test_create_rejects_empty_title(client: TestClient) -> None:
    response = mutate(client, "createMeeting", {"title": ""})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "BAD_REQUEST"
    assert error["details"][0]["path"] == ["title"]


def test_update_partial_and_null(client: TestClient) -> None:
    created = create(client, "Draft", description="remove me", audio_file_path="uploads/a.wav")

    updated = data(mutate(client, "updateMeeting", {"id": created["id"], "description": None, "summary": "S"}))

    assert updated["description"] is None
    assert updated["summary"] == "S"
    assert updated["title"] == "Draft"
    assert updated["audio_file_path"] == "uploads/a.wav"
    assert MeetingRead.model_validate(updated).updated_at >= MeetingRead.model_validate(created).updated_at


def test_timestamps_carry_utc_offset(client: TestClient) -> None:
    created = create(client, "Zoned")

    fetched = data(query(client, "getMeetingById", {"id": created["id"]}))

    for field in ("created_at", "updated_at"):
        assert fetched[field].endswith(("Z", "+00:00"))
        assert fetched[field] == created[field]


def test_update_unknown_meeting_is_not_found(client: TestClient) -> None:
    response = mutate(client, "updateMeeting", {"id": 999, "title": "x"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_delete_true_once_then_false(client: TestClient) -> None:
    created = create(client, "Temp")

    assert data(mutate(client, "deleteMeeting", {"id": created["id"]})) is True
    assert data(mutate(client, "deleteMeeting", {"id": created["id"]})) is False
    assert data(query(client, "getMeetingById", {"id": created["id"]})) is None


def test_process_text_and_dashboard(client: TestClient) -> None:
    created = create(client, "Incident review")

    status = data(
        mutate(
            client,
            "processText",
            {"meeting_id": created["id"], "transcript": "We have a problem with the current system."},
        )
    )
    assert status == {
        "meeting_id": created["id"],
        "status": "completed",
        "message": "Text processing completed successfully",
        "progress": 100,
    }

    dashboard = data(query(client, "getDashboardData", {"meetingId": created["id"]}))
    meeting = dashboard["meeting"]
    assert "Concerned" in dashboard["components"]["tone_analysis"]
    for field in ("summary", "tone_analysis", "action_items", "mind_map"):
        assert dashboard["components"][field] == meeting[field]

    progress = data(query(client, "getProcessingStatus", {"meetingId": created["id"]}))
    assert (progress["status"], progress["progress"]) == ("completed", 100)


def test_process_text_blank_transcript_reports_failure(client: TestClient) -> None:
    created = create(client, "Empty")

    status = data(mutate(client, "processText", {"meeting_id": created["id"], "transcript": "   "}))

    assert status["status"] == "failed"
    assert status["progress"] == 0
    assert status["message"] == "Transcript is required for processing"


def test_process_audio_missing_meeting_reports_failure(client: TestClient) -> None:
    status = data(mutate(client, "processAudio", {"meeting_id": 31337, "audio_file_path": "uploads/x.mp3"}))
    assert status["status"] == "failed"
    assert status["message"] == "Meeting not found"


def test_processing_status_pending_and_transcribing(client: TestClient) -> None:
    fresh = create(client, "Fresh")
    with_audio = create(client, "Audio", audio_file_path="uploads/a.mp3")

    pending = data(query(client, "getProcessingStatus", {"meetingId": fresh["id"]}))
    transcribing = data(query(client, "getProcessingStatus", {"meetingId": with_audio["id"]}))

    assert (pending["status"], pending["progress"]) == ("pending", 0)
    assert (transcribing["status"], transcribing["progress"]) == ("processing", 25)


def test_processing_status_unknown_meeting(client: TestClient) -> None:
    response = query(client, "getProcessingStatus", {"meetingId": 5150})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_dashboard_missing_meeting_is_null(client: TestClient) -> None:
    assert data(query(client, "getDashboardData", {"meetingId": 1})) is None


def test_unknown_procedure(client: TestClient) -> None:
    response = query(client, "dropTables")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_wrong_method_for_procedure(client: TestClient) -> None:
    assert mutate(client, "getMeetings").status_code == 405
    response = query(client, "createMeeting", {"title": "x"})
    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_SUPPORTED"


def test_query_input_must_be_json(client: TestClient) -> None:
    response = client.get("/rpc/getMeetingById", params={"input": "{id: 1"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"
