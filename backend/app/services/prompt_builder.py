"""
Prompt Builder Service

Turns a student's gathered records into the system prompt for the
assistant. The persona, the rules, and whether general questions are
allowed all come from a single PromptTemplate.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from app.core.config import Settings
from app.models.records import StudentRecords


DEFAULT_RULES = (
    "If data is missing, politely say you don't have that information.",
    "Never invent information.",
    "Keep answers short (1-3 paragraphs).",
    "Friendly and helpful tone.",
)


@dataclass
class PromptTemplate:
    assistant_name: str = "REMI"
    persona: str = "an intelligent student assistant"
    rules: tuple[str, ...] = DEFAULT_RULES
    answer_general_questions: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "PromptTemplate":
        return cls(
            assistant_name=settings.assistant_name,
            answer_general_questions=settings.answer_general_questions,
        )


def get_scope_instruction(answer_general_questions: bool) -> str:
    """Tell the model when the academic data applies."""
    if answer_general_questions:
        return (
            "Use the student's academic data below only for academic questions "
            "(timetable, exams, GPA, course units). For general questions, answer "
            "from your own knowledge as a helpful assistant."
        )
    return (
        "Use only the following data to answer the user's question.\n"
        "Never make up information."
    )


def format_datetime_block(now: datetime, tz_name: str) -> str:
    """Render the current date and time in the student's timezone."""
    local = now.astimezone(ZoneInfo(tz_name))
    offset = local.strftime("%z")
    utc_offset = f"UTC{offset[:3]}:{offset[3:]}" if offset else "UTC"
    return (
        f"Current date: {local.strftime('%A, %B %d, %Y')}\n"
        f"Current time: {local.strftime('%I:%M %p')} {local.tzname()} ({utc_offset})\n"
        f"ISO timestamp: {local.isoformat()}"
    )


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def compile_system_prompt(
    template: PromptTemplate,
    records: StudentRecords,
    now: datetime,
    tz_name: str,
) -> str:
    """
    Compile the system prompt for one question.

    Args:
        template: Persona, rules and scope switches
        records: The student's records, profile already reduced
        now: Current time (timezone-aware)
        tz_name: IANA timezone used for the date/time block

    Returns:
        System prompt string for the LLM
    """
    scope_instruction = get_scope_instruction(template.answer_general_questions)
    datetime_block = format_datetime_block(now, tz_name)
    chats = [entry.model_dump(mode="json") for entry in records.chat_history]
    rules = "\n".join(f"{i}. {rule}" for i, rule in enumerate(template.rules, start=1))

    prompt = f"""You are {template.assistant_name} - {template.persona}.
{scope_instruction}

CURRENT DATE AND TIME:
{datetime_block}

PROFILE:
{_to_json(records.profile)}

TIMETABLE:
{_to_json(records.timetable)}

EXAMS:
{_to_json(records.exams)}

GPA:
{_to_json(records.gpa)}

COURSE UNITS:
{_to_json(records.course_units)}

RECENT CHATS:
{_to_json(chats)}

RULES:
{rules}"""

    return prompt.strip()
