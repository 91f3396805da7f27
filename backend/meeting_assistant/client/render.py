from __future__ import annotations

import re
from typing import List, Optional

from meeting_assistant.schemas import DashboardData, MeetingRead, StatusResult


_LIST_MARKER = re.compile(r"^[\d\-•*.\s]+")


def format_duration(seconds: Optional[int]) -> Optional[str]:
    if not seconds:
        return None
    mins, secs = divmod(seconds, 60)
    return f"{mins}:{secs:02d}"


def card_badge(meeting: MeetingRead) -> str:
    if meeting.summary and meeting.tone_analysis and meeting.action_items and meeting.mind_map:
        return "Fully Processed"
    if meeting.transcript:
        return "Transcribed"
    return "Pending"


def render_meeting_card(meeting: MeetingRead, selected: bool = False) -> str:
    marker = ">" if selected else " "
    flags = []
    if meeting.audio_file_path:
        flags.append("audio")
    if meeting.transcript:
        flags.append("transcript")
    lines = [f"{marker} #{meeting.id} {meeting.title} [{card_badge(meeting)}]"]
    if meeting.description:
        lines.append(f"    {meeting.description}")
    footer = f"    {meeting.created_at:%Y-%m-%d}"
    duration = format_duration(meeting.duration)
    if duration:
        footer += f"  {duration}"
    if flags:
        footer += f"  ({', '.join(flags)})"
    lines.append(footer)
    return "\n".join(lines)


def render_meeting_list(meetings: List[MeetingRead], selected_id: Optional[int] = None) -> str:
    if not meetings:
        return "No meetings yet."
    return "\n".join(render_meeting_card(m, m.id == selected_id) for m in meetings)


def progress_bar(progress: int, width: int = 20) -> str:
    filled = round(width * max(0, min(progress, 100)) / 100)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_processing_panel(meeting: MeetingRead, status: Optional[StatusResult] = None) -> str:
    lines: List[str] = []
    if status is not None:
        lines.append(f"AI Processing Status: {status.status.value}")
        lines.append(f"{progress_bar(status.progress)} {status.progress}%")
        if status.message:
            lines.append(status.message)
        lines.append("")
    lines.append("Current Meeting Status")
    checklist = [
        ("Transcript", meeting.transcript),
        ("Summary", meeting.summary),
        ("Tone Analysis", meeting.tone_analysis),
        ("Action Items", meeting.action_items),
        ("Mind Map", meeting.mind_map),
    ]
    for label, value in checklist:
        lines.append(f"  [{'x' if value else ' '}] {label}")
    return "\n".join(lines)


def parse_action_items(text: str) -> List[str]:
    items = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        cleaned = _LIST_MARKER.sub("", line).strip()
        items.append(cleaned or line)
    return items


def render_mind_map(text: str) -> str:
    if "graph" in text or "flowchart" in text:
        return "```mermaid\n" + text + "\n```"
    return "\n".join(f"• {line.strip()}" for line in text.split("\n") if line.strip())


def _section(title: str, body: Optional[str]) -> str:
    return f"== {title} ==\n{body if body else 'Not available yet.'}"


def render_dashboard(data: Optional[DashboardData]) -> str:
    if data is None:
        return (
            "No Analysis Available\n"
            "Upload an audio file or enter a transcript to get AI-powered analysis including "
            "summary, tone analysis, action items, and mind mapping."
        )
    components = data.components
    action_items = None
    if components.action_items:
        items = parse_action_items(components.action_items)
        action_items = f"{len(items)} items\n" + "\n".join(f"- {item}" for item in items)
    sections = [
        f"Dashboard: {data.meeting.title}",
        _section("Summary", components.summary),
        _section("Tone Analysis", components.tone_analysis),
        _section("Action Items", action_items),
        _section("Mind Map", render_mind_map(components.mind_map) if components.mind_map else None),
    ]
    return "\n\n".join(sections)
