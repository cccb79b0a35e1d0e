"""Firebase service-account credential resolution.

Credentials are resolved once at startup, in priority order:

1. ``FIREBASE_SERVICE_ACCOUNT_KEY``: base64-encoded service account JSON
2. Application default credentials from the hosting environment
3. A service account JSON file (``FIREBASE_CREDENTIALS_PATH``)

The first source that yields a usable credential wins.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.auth.exceptions import GoogleAuthError

from todo_relay.core.config import Settings

logger = logging.getLogger(__name__)


class CredentialSource(str, Enum):
    """Where the database credential came from."""

    ENVIRONMENT = "environment"
    APPLICATION_DEFAULT = "application_default"
    FILE = "file"


class CredentialLoadError(Exception):
    """Raised when no credential source produced a usable credential."""

    pass


@dataclass(frozen=True)
class DatabaseCredential:
    """Resolved service identity for the document database."""

    source: CredentialSource
    credential: credentials.Base


@dataclass(frozen=True)
class DatabaseHandle:
    """Initialized Firebase app bound to a credential."""

    source: CredentialSource
    app: Any

    @property
    def client(self) -> Any:
        """Firestore client for the initialized app."""
        return firestore.client(self.app)


def decode_service_account_key(encoded: str) -> dict:
    """
    Decode a base64-encoded service account JSON blob.

    Raises:
        ValueError: If the blob is not valid base64 or does not hold a JSON object
    """
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Service account key is not valid base64: {e}") from e

    info = json.loads(raw.decode("utf-8"))
    if not isinstance(info, dict):
        raise ValueError("Service account key must decode to a JSON object")
    return info


def _from_environment(settings: Settings) -> Optional[credentials.Base]:
    if not settings.firebase_service_account_key:
        logger.debug("FIREBASE_SERVICE_ACCOUNT_KEY is not set")
        return None
    info = decode_service_account_key(settings.firebase_service_account_key)
    return credentials.Certificate(info)


def _from_application_default(settings: Settings) -> Optional[credentials.Base]:
    if not settings.firebase_use_application_default:
        return None
    credential = credentials.ApplicationDefault()
    # ApplicationDefault is lazy; probing it surfaces DefaultCredentialsError now
    credential.get_credential()
    return credential


def _from_file(settings: Settings) -> Optional[credentials.Base]:
    path = Path(settings.firebase_credentials_path)
    if not path.is_file():
        logger.debug(f"Credential file not found: {path}")
        return None
    return credentials.Certificate(str(path))


_LOADERS = (
    (CredentialSource.ENVIRONMENT, _from_environment),
    (CredentialSource.APPLICATION_DEFAULT, _from_application_default),
    (CredentialSource.FILE, _from_file),
)


def load_credential(settings: Settings) -> DatabaseCredential:
    """
    Resolve the database credential from the first working source.

    Args:
        settings: Application settings

    Returns:
        DatabaseCredential with the source that succeeded

    Raises:
        CredentialLoadError: If every source failed
    """
    for source, loader in _LOADERS:
        try:
            credential = loader(settings)
        except (ValueError, OSError, GoogleAuthError) as e:
            logger.error(f"Failed to load Firebase credential from {source.value}: {e}")
            continue

        if credential is not None:
            logger.info(f"Firebase credential loaded from {source.value}")
            return DatabaseCredential(source=source, credential=credential)

    logger.error("No Firebase credential source succeeded")
    raise CredentialLoadError(
        "Firebase credentials are not configured: set FIREBASE_SERVICE_ACCOUNT_KEY, "
        "provide application default credentials, or add "
        f"{settings.firebase_credentials_path}"
    )


def initialize_database(credential: DatabaseCredential) -> DatabaseHandle:
    """Initialize the Firebase app for the resolved credential."""
    try:
        app = firebase_admin.get_app()
        logger.debug("Reusing existing Firebase app")
    except ValueError:
        app = firebase_admin.initialize_app(credential.credential)
        logger.info("Firebase Admin SDK initialized successfully")
    return DatabaseHandle(source=credential.source, app=app)


def bootstrap_database(settings: Settings) -> DatabaseHandle:
    """Load the credential and initialize the database app."""
    return initialize_database(load_credential(settings))
