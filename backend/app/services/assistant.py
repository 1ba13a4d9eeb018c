"""
Assistant Service

The question-answering pipeline behind /ask: gather the student's records,
build the prompt, ask the model. Each step waits for the previous one.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from app.core.config import Settings
from app.models.records import StudentRecords, reduce_profile
from app.services.llm.base import CompletionProvider
from app.services.prompt_builder import PromptTemplate, compile_system_prompt
from app.services.records import RecordStore

logger = logging.getLogger(__name__)


class AssistantAnswer(BaseModel):
    answer: str
    records: StudentRecords


async def gather_records(
    store: RecordStore,
    user_id: str,
    timetable: Any = None,
    chat_history_limit: int = 5,
) -> StudentRecords:
    """Fetch every record category; a supplied timetable replaces the stored one."""
    profile = await store.get_user_data(user_id)
    if timetable is None:
        timetable = await store.get_timetable(user_id)
    exams = await store.get_exams(user_id)
    gpa = await store.get_gpa(user_id)
    course_units = await store.get_course_units(user_id)
    chat_history = await store.get_chat_history(user_id, limit=chat_history_limit)

    return StudentRecords(
        profile=reduce_profile(profile),
        timetable=timetable,
        exams=exams,
        gpa=gpa,
        course_units=course_units,
        chat_history=chat_history,
    )


async def answer_query(
    query: str,
    user_id: str,
    store: RecordStore,
    provider: CompletionProvider,
    template: PromptTemplate,
    settings: Settings,
    timetable: Any = None,
    now: datetime | None = None,
) -> AssistantAnswer:
    """
    Answer a student's question grounded on their records.

    Completion errors are not caught here; the caller decides how to
    report them.
    """
    records = await gather_records(
        store, user_id, timetable=timetable, chat_history_limit=settings.chat_history_limit
    )

    now = now or datetime.now(timezone.utc)
    system_prompt = compile_system_prompt(template, records, now, settings.timezone)

    answer = await provider.complete(
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": query},
        ],
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )

    return AssistantAnswer(answer=answer, records=records)
