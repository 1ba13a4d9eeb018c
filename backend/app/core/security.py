import logging

import firebase_admin
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class InvalidTokenError(Exception):
    """Raised when an ID token cannot be verified."""


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Return the token from a ``Bearer <token>`` header, or None."""
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        return None
    token = auth_header[len(BEARER_PREFIX):].strip()
    return token or None


class FirebaseIdentityVerifier:
    """Verifies Firebase ID tokens and yields the user's uid."""

    def __init__(self, app: firebase_admin.App | None = None, check_revoked: bool = False):
        self.app = app
        self.check_revoked = check_revoked

    async def verify(self, token: str) -> str:
        """
        Verify an ID token.

        verify_id_token may fetch Google's public certificates over the
        network, so it runs in the thread pool.

        Raises:
            InvalidTokenError: token is malformed, expired, revoked, or the
                certificates could not be fetched
        """
        try:
            decoded = await run_in_threadpool(
                auth.verify_id_token,
                token,
                app=self.app,
                check_revoked=self.check_revoked,
            )
        except (ValueError, FirebaseError) as e:
            raise InvalidTokenError(str(e)) from e

        return decoded["uid"]
