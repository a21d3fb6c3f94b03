"""Meeting Use Cases"""
from .create_meeting_session import (
    CreateMeetingSessionInput,
    CreateMeetingSessionOutput,
    CreateMeetingSessionUseCase,
    MeetingSessionError,
)

__all__ = [
    "CreateMeetingSessionInput",
    "CreateMeetingSessionOutput",
    "CreateMeetingSessionUseCase",
    "MeetingSessionError",
]
