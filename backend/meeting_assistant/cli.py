from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from meeting_assistant.client.api_client import MeetingAssistantClient, RemoteProcedureError
from meeting_assistant.client.render import (
    render_dashboard,
    render_meeting_list,
    render_processing_panel,
)
from meeting_assistant.client.state import ClientState


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="meeting-assistant", description="Meeting Assistant")
    parser.add_argument("--url", default="http://127.0.0.1:2022", help="Backend base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the backend server")
    serve.add_argument("--host", default=None, help="Host to bind to")
    serve.add_argument("--port", type=int, default=None, help="Port to bind to")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload (dev only)")

    sub.add_parser("list", help="List meetings, newest first")

    create = sub.add_parser("create", help="Create a meeting")
    create.add_argument("title")
    create.add_argument("--description", default=None)
    create.add_argument("--audio", dest="audio_file_path", default=None)

    show = sub.add_parser("show", help="Show a meeting's dashboard")
    show.add_argument("meeting_id", type=int)

    text = sub.add_parser("process-text", help="Analyze a transcript")
    text.add_argument("meeting_id", type=int)
    source = text.add_mutually_exclusive_group(required=True)
    source.add_argument("text", nargs="?")
    source.add_argument("--file", type=Path)

    audio = sub.add_parser("process-audio", help="Process an audio file")
    audio.add_argument("meeting_id", type=int)
    audio.add_argument("file")

    status = sub.add_parser("status", help="Show processing status")
    status.add_argument("meeting_id", type=int)

    delete = sub.add_parser("delete", help="Delete a meeting")
    delete.add_argument("meeting_id", type=int)

    return parser


def _select(state: ClientState, meeting_id: int) -> bool:
    meeting = state.client.get_meeting_by_id(meeting_id)
    if meeting is None:
        print(f"Meeting {meeting_id} not found", file=sys.stderr)
        return False
    state.select_meeting(meeting)
    return True


def run_command(args: argparse.Namespace, state: ClientState) -> int:
    if args.command == "list":
        state.load_meetings()
        print(render_meeting_list(state.meetings))
        return 0

    if args.command == "create":
        meeting = state.create_meeting(args.title, args.description, args.audio_file_path)
        if meeting is None:
            return 1
        print(f"Created meeting #{meeting.id}")
        return 0

    if args.command == "delete":
        if state.delete_meeting(args.meeting_id):
            print(f"Deleted meeting #{args.meeting_id}")
            return 0
        print(f"Meeting {args.meeting_id} not found", file=sys.stderr)
        return 1

    if not _select(state, args.meeting_id) or state.selected is None:
        return 1

    if args.command == "show":
        print(render_dashboard(state.dashboard))
        return 0

    if args.command == "status":
        state.refresh_status()
        print(render_processing_panel(state.selected, state.processing_status))
        return 0

    if args.command == "process-text":
        if args.file:
            try:
                transcript = args.file.read_text(encoding="utf-8-sig")
            except OSError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 1
        else:
            transcript = args.text
        result = state.process_text(transcript)
    else:
        result = state.process_audio(args.file)

    if result is None:
        print("Nothing to process", file=sys.stderr)
        return 1
    print(render_processing_panel(state.selected, result))
    return 0 if result.status.value == "completed" else 1


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        from meeting_assistant.main import run

        run(host=args.host, port=args.port, reload=args.reload)
        return 0

    with MeetingAssistantClient(base_url=args.url) as client:
        try:
            return run_command(args, ClientState(client))
        except (RemoteProcedureError, httpx.HTTPError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
