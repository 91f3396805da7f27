from __future__ import annotations

from typing import Any, List, Optional


class MeetingAssistantError(Exception):
    """Base class for errors surfaced to procedure callers."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MeetingAssistantError):
    """Input rejected before it reached the repository."""

    code = "BAD_REQUEST"
    status_code = 400

    def __init__(self, message: str, details: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.details = details or []


class NotFoundError(MeetingAssistantError):
    code = "NOT_FOUND"
    status_code = 404


class StoreError(MeetingAssistantError):
    """The underlying database write or read failed."""


class MethodNotSupportedError(MeetingAssistantError):
    """A query was sent as a mutation or the other way round."""

    code = "METHOD_NOT_SUPPORTED"
    status_code = 405
