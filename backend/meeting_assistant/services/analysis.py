from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass
class Transcription:
    text: str
    duration: Optional[int] = None  # seconds


@dataclass
class Artifacts:
    summary: str
    tone_analysis: str
    action_items: str
    mind_map: str


class Transcriber(Protocol):
    def transcribe(self, audio_file_path: str) -> Transcription: ...


class Analyzer(Protocol):
    def analyze(self, transcript: str) -> Artifacts: ...


ACTION_KEYWORDS = ("will", "should", "need to", "must", "action")

PLACEHOLDER_TRANSCRIPT = "This is a mock transcript generated from the audio file processing."
PLACEHOLDER_DURATION = 1800


class PlaceholderTranscriber:
    """Stands in for speech-to-text; the audio itself is never read."""

    def transcribe(self, audio_file_path: str) -> Transcription:
        return Transcription(text=PLACEHOLDER_TRANSCRIPT, duration=PLACEHOLDER_DURATION)


class PlaceholderAnalyzer:
    """Fixed artifacts for the audio path, regardless of transcript."""

    def analyze(self, transcript: str) -> Artifacts:
        return Artifacts(
            summary="Meeting summary: Key points discussed and decisions made.",
            tone_analysis="Tone: Professional and collaborative with positive sentiment.",
            action_items=(
                "1. Follow up on project timeline\n"
                "2. Schedule next review meeting\n"
                "3. Prepare status report"
            ),
            mind_map=(
                "graph TD\n"
                "    A[Meeting Topic] --> B[Discussion Points]\n"
                "    B --> C[Action Items]\n"
                "    B --> D[Decisions Made]"
            ),
        )


_EDGE_BLANKS = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def trim(text: str) -> str:
    """Strip whitespace and byte-order marks from both ends."""
    return _EDGE_BLANKS.sub("", text)


def non_blank_lines(transcript: str) -> List[str]:
    return [line for line in transcript.split("\n") if trim(line)]


class TemplateAnalyzer:
    """Derives the four artifacts from transcript text with fixed templates.

    The output is deterministic for a given transcript. ``delay_seconds``
    pauses once per ``analyze`` call to mimic a remote model call.
    """

    def __init__(self, delay_seconds: float = 0.0) -> None:
        self.delay_seconds = delay_seconds

    def analyze(self, transcript: str) -> Artifacts:
        self._pause()
        return Artifacts(
            summary=self.summarize(transcript),
            tone_analysis=self.analyze_tone(transcript),
            action_items=self.extract_action_items(transcript),
            mind_map=self.build_mind_map(transcript),
        )

    def summarize(self, transcript: str) -> str:
        key_points = "\n".join(f"• {trim(line)}" for line in non_blank_lines(transcript)[:3])
        return (
            "Meeting Summary:\n"
            f"{key_points}\n"
            "\n"
            "Decisions Made:\n"
            "• Key decision points extracted from discussion\n"
            "\n"
            "Next Steps:\n"
            "• Follow up actions identified\n"
            "• Timeline established for deliverables"
        )

    def analyze_tone(self, transcript: str) -> str:
        # case-sensitive: "Problem" does not match
        sentiment = "Concerned" if "problem" in transcript or "issue" in transcript else "Positive"
        engagement = "High" if len(transcript) > 500 else "Medium"
        return (
            "Tone Analysis:\n"
            f"Overall Sentiment: {sentiment}\n"
            f"Engagement Level: {engagement}\n"
            "Communication Style: Professional and collaborative\n"
            "Key Emotions: Focus, determination, collaborative spirit"
        )

    def extract_action_items(self, transcript: str) -> str:
        action_lines = [
            line
            for line in non_blank_lines(transcript)
            if any(keyword in line.lower() for keyword in ACTION_KEYWORDS)
        ]
        if not action_lines:
            return (
                "Action Items:\n"
                "• Review meeting transcript and identify next steps\n"
                "• Schedule follow-up meeting if needed\n"
                "• Document key decisions made"
            )
        bullets = "\n".join(f"• {trim(line)}" for line in action_lines[:3])
        return f"Action Items:\n{bullets}"

    def build_mind_map(self, transcript: str) -> str:
        topics = "\n".join(
            f'    Meeting --> Topic{idx}["{trim(line)[:30]}..."]'
            for idx, line in enumerate(non_blank_lines(transcript)[:3], start=1)
        )
        return (
            "graph TD\n"
            '    Meeting["Meeting Overview"]\n'
            f"{topics}\n"
            '    Meeting --> Decisions["Key Decisions"]\n'
            '    Meeting --> Actions["Action Items"]\n'
            '    Meeting --> NextSteps["Next Steps"]'
        )

    def _pause(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
