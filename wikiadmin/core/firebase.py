import logging

from firebase_admin import credentials, get_app, initialize_app

from wikiadmin.core.settings import get_settings

logger = logging.getLogger(__name__)


def init_firebase() -> None:
    """Initialize Firebase Admin SDK (idempotent).

    Uses the service account file from FIREBASE_CREDENTIALS when set,
    otherwise Application Default Credentials.
    """
    try:
        get_app()
        return
    except ValueError:
        pass

    settings = get_settings()
    if settings.firebase_credentials:
        initialize_app(credentials.Certificate(settings.firebase_credentials))
        logger.info("Firebase initialized from service account file")
    else:
        initialize_app()
        logger.info("Firebase initialized with default credentials")
