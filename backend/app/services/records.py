"""
Record Store

Read-only accessors for a student's academic records in Firestore.

Every accessor returns a value or its category's empty default and never
raises: fetch failures and malformed documents are logged and swallowed
here, so callers see absence, not errors. Only ``ping`` propagates, since
the health check needs the failure.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from google.cloud.firestore import AsyncClient, AsyncDocumentReference, DocumentReference, GeoPoint

from app.models.records import ChatHistoryEntry

logger = logging.getLogger(__name__)


class RecordStore:
    def __init__(
        self,
        client: AsyncClient,
        users_collection: str = "users",
        chat_history_collection: str = "chat_history",
    ):
        self.client = client
        self.users_collection = users_collection
        self.chat_history_collection = chat_history_collection

    async def _get_user_document(self, user_id: str) -> dict[str, Any] | None:
        snap = await self.client.collection(self.users_collection).document(user_id).get()
        return snap.to_dict() if snap.exists else None

    async def _get_field(
        self, user_id: str, field: str, default_type: type, check_type: bool = True
    ) -> Any:
        """Fetch one field of the user document, falling back to an empty ``default_type``."""
        try:
            data = await self._get_user_document(user_id)
        except Exception:
            logger.exception("Error fetching %s for user %s", field, user_id)
            return default_type()

        if data is None:
            return default_type()

        value = data.get(field)
        if not value:
            return default_type()
        if check_type and not isinstance(value, default_type):
            logger.warning(
                "Ignoring malformed %s for user %s: expected %s, got %s",
                field, user_id, default_type.__name__, type(value).__name__,
            )
            return default_type()
        return to_json_safe(value)

    async def get_user_data(self, user_id: str) -> dict[str, Any] | None:
        """Whole profile document, or None if missing."""
        if not user_id:
            return None

        try:
            data = await self._get_user_document(user_id)
        except Exception:
            logger.exception("Error fetching user data for %s", user_id)
            return None
        return to_json_safe(data) if data is not None else None

    async def get_timetable(self, user_id: str) -> Any:
        # Any stored shape is passed through
        return await self._get_field(user_id, "timetable", dict, check_type=False)

    async def get_exams(self, user_id: str) -> list[Any]:
        return await self._get_field(user_id, "exams", list)

    async def get_gpa(self, user_id: str) -> dict[str, Any]:
        return await self._get_field(user_id, "gpa_data", dict)

    async def get_course_units(self, user_id: str) -> dict[str, Any]:
        return await self._get_field(user_id, "units", dict)

    async def get_chat_history(self, user_id: str, limit: int = 5) -> list[ChatHistoryEntry]:
        """Most recent chat messages, newest first."""
        try:
            query = (
                self.client.collection(self.users_collection)
                .document(user_id)
                .collection(self.chat_history_collection)
                .order_by("timestamp", direction="DESCENDING")
                .limit(limit)
            )
            snaps = await query.get()

            entries = []
            for snap in snaps:
                data = snap.to_dict() or {}
                entries.append(
                    ChatHistoryEntry(
                        message=to_json_safe(data.get("message")),
                        isUser=to_json_safe(data.get("isUser")),
                        timestamp=_to_datetime(data.get("timestamp"), snap.id),
                    )
                )
            return entries
        except Exception:
            logger.exception("Error fetching chat history for %s", user_id)
            return []

    async def ping(self) -> None:
        """Read at most one document; raises if Firestore is unreachable."""
        await self.client.collection(self.users_collection).limit(1).get()


def _to_datetime(value: Any, doc_id: str) -> datetime:
    # Firestore timestamps arrive as DatetimeWithNanoseconds (a datetime).
    # Anything else is replaced with "now", which hides corrupt records.
    # TODO: decide whether such entries should be dropped instead.
    if isinstance(value, datetime):
        return value
    logger.warning("Chat entry %s has no usable timestamp (%r); using now", doc_id, value)
    return datetime.now(timezone.utc)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, (DocumentReference, AsyncDocumentReference)):
        return value.path
    return str(value)


def to_json_safe(value: Any) -> Any:
    """Convert Firestore-native values (timestamps, geo points, references) to plain JSON types."""
    return json.loads(json.dumps(value, default=_json_default))
