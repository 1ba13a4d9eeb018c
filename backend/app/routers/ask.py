"""
Ask Router

The assistant endpoint: answers a student's question using their
academic records.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from app.core.config import Settings, get_settings
from app.dependencies import (
    get_completion_provider,
    get_current_user_id,
    get_prompt_template,
    get_record_store,
)
from app.services.assistant import answer_query
from app.services.llm.base import CompletionProvider
from app.services.prompt_builder import PromptTemplate
from app.services.records import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


# Schemas
class AskRequest(BaseModel):
    query: str | None = None
    timetable: Any = None


class AskResponse(BaseModel):
    answer: str
    profile: dict[str, Any]
    timetable: Any
    exams: list[Any]
    gpa: dict[str, Any]
    courseUnits: dict[str, Any]


# Dependency
CurrentUserId = Annotated[str, Depends(get_current_user_id)]


# Endpoints
@router.post("", response_model=AskResponse)
async def ask(
    data: AskRequest,
    user_id: CurrentUserId,
    store: RecordStore = Depends(get_record_store),
    provider: CompletionProvider = Depends(get_completion_provider),
    template: PromptTemplate = Depends(get_prompt_template),
    settings: Settings = Depends(get_settings),
):
    """Answer a question grounded on the caller's academic records."""
    if not data.query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query is required",
        )

    try:
        result = await answer_query(
            data.query,
            user_id,
            store=store,
            provider=provider,
            template=template,
            settings=settings,
            timetable=data.timetable,
        )
    except Exception as e:
        logger.exception("AI processing failed for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "AI processing failed", "details": str(e)},
        )

    records = result.records
    return AskResponse(
        answer=result.answer,
        profile=records.profile,
        timetable=records.timetable,
        exams=records.exams,
        gpa=records.gpa,
        courseUnits=records.course_units,
    )
