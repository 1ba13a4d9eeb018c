from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


# Profile attributes the assistant is allowed to see
PROFILE_FIELDS = ("nickname", "course", "current_semester", "total_semesters")


class ChatHistoryEntry(BaseModel):
    # Stored as written by the client app; not coerced
    message: Any = None
    isUser: Any = None
    timestamp: datetime


class StudentRecords(BaseModel):
    """Everything gathered about a student for one question."""

    profile: dict[str, Any] = Field(default_factory=dict)
    timetable: Any = Field(default_factory=dict)
    exams: list[Any] = Field(default_factory=list)
    gpa: dict[str, Any] = Field(default_factory=dict)
    course_units: dict[str, Any] = Field(default_factory=dict)
    chat_history: list[ChatHistoryEntry] = Field(default_factory=list)


def reduce_profile(profile: dict[str, Any] | None) -> dict[str, Any]:
    """Keep only the whitelisted profile fields; {} when there is no profile."""
    if profile is None:
        return {}
    return {field: profile.get(field) for field in PROFILE_FIELDS}
