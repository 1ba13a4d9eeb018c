from app.models.records import (
    PROFILE_FIELDS,
    ChatHistoryEntry,
    StudentRecords,
    reduce_profile,
)

__all__ = [
    "PROFILE_FIELDS",
    "ChatHistoryEntry",
    "StudentRecords",
    "reduce_profile",
]
