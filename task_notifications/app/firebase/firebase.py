import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from ..config import Settings

logger = logging.getLogger(__name__)


def _load_certificate(cert_json: str) -> credentials.Certificate:
    cert_dict = json.loads(cert_json)
    # The secret is sometimes stored as a JSON-encoded string
    if isinstance(cert_dict, str):
        cert_dict = json.loads(cert_dict)
    return credentials.Certificate(cert_dict)


def get_firebase_app(settings: Settings) -> firebase_admin.App:
    """
    Return the default Firebase app, initializing it on first use.

    Credentials come from the ``firebase_secret`` setting when present,
    otherwise from Application Default Credentials.
    """
    try:
        app = firebase_admin.get_app()
        logger.info("Retrieved existing Firebase app")
        return app
    except ValueError:
        pass

    options: Optional[dict] = None
    if settings.firebase_project_id:
        options = {"projectId": settings.firebase_project_id}

    if settings.firebase_secret:
        cred = _load_certificate(settings.firebase_secret)
        app = firebase_admin.initialize_app(credential=cred, options=options)
    else:
        logger.info("Firebase secret not set, using application default credentials")
        app = firebase_admin.initialize_app(options=options)

    logger.info(f"Firebase app initialized. App name: {app.name}")
    return app
