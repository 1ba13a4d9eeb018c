"""
Firebase Admin bootstrap.

Builds the Firebase app from the service-account settings and hands out
the async Firestore client used by the record store.
"""

import logging

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore import AsyncClient

from app.core.config import Settings

logger = logging.getLogger(__name__)


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    """Initialise the default Firebase app, reusing it if already present."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    cred = credentials.Certificate(settings.firebase_credentials)
    app = firebase_admin.initialize_app(
        cred, {"projectId": settings.firebase_project_id}
    )
    logger.info("Firebase Admin initialized for project %s", settings.firebase_project_id)
    return app


def get_firestore_client(app: firebase_admin.App) -> AsyncClient:
    return firestore_async.client(app)
