"""
FastAPI dependencies.

Collaborators are built once in the app lifespan and kept on ``app.state``;
routes receive them through these functions so tests can override them.
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from app.core.config import get_settings
from app.core.security import FirebaseIdentityVerifier, InvalidTokenError, extract_bearer_token
from app.services.llm.base import CompletionProvider
from app.services.prompt_builder import PromptTemplate
from app.services.records import RecordStore

logger = logging.getLogger(__name__)


def get_identity_verifier(request: Request) -> FirebaseIdentityVerifier:
    return request.app.state.identity_verifier


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_completion_provider(request: Request) -> CompletionProvider:
    return request.app.state.completion_provider


def get_prompt_template() -> PromptTemplate:
    return PromptTemplate.from_settings(get_settings())


async def get_current_user_id(
    request: Request,
    verifier: FirebaseIdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """Authenticate the request's bearer token and return the user's uid."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized. No token provided.",
        )

    try:
        user_id = await verifier.verify(token)
    except InvalidTokenError as e:
        logger.warning("Firebase auth error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
        )

    logger.info("Authenticated user: %s", user_id)
    return user_id
