from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from ..core.constants import DEFAULT_COLLECTION

logger = logging.getLogger(__name__)

APP_NAME = "attendance-checkin"


@dataclass
class FirebaseConfig:
    project_id: Optional[str] = None
    service_account_key: Optional[str] = None
    service_account_key_path: Optional[str] = None
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    collection: str = DEFAULT_COLLECTION
    enabled: bool = True

    @classmethod
    def from_mapping(cls, values: dict) -> "FirebaseConfig":
        return cls(
            project_id=values.get("project_id") or None,
            service_account_key=values.get("service_account_key") or None,
            service_account_key_path=values.get("service_account_key_path") or None,
            client_email=values.get("client_email") or None,
            private_key=values.get("private_key") or None,
            collection=values.get("collection") or DEFAULT_COLLECTION,
            enabled=bool(values.get("enabled", True)),
        )


class FirestoreConnection:
    """Lazily initialised Firebase Admin app and Firestore client.

    Initialisation is deferred to the first call so the service can start (and
    serve from the fallback store) without credentials or network access.
    Errors propagate to the caller on every attempt until one succeeds.
    """

    def __init__(self, config: FirebaseConfig):
        self._config = config
        self._client: Any = None
        self._lock = threading.Lock()

    @property
    def config(self) -> FirebaseConfig:
        return self._config

    def client(self):
        if not self._config.enabled:
            raise RuntimeError("Firestore is disabled by configuration")
        with self._lock:
            if self._client is None:
                app = self._get_or_init_app()
                self._client = firestore.client(app=app)
            return self._client

    def collection(self):
        return self.client().collection(self._config.collection)

    def _get_or_init_app(self):
        try:
            return firebase_admin.get_app(APP_NAME)
        except ValueError:
            pass

        options = {"projectId": self._config.project_id} if self._config.project_id else None
        cred, source = self._credentials()
        app = firebase_admin.initialize_app(cred, options, name=APP_NAME)
        logger.info("Firebase Admin SDK initialized (%s)", source)
        return app

    def _credentials(self):
        cfg = self._config

        # 1) Full service account JSON in an environment variable
        if cfg.service_account_key:
            return credentials.Certificate(json.loads(cfg.service_account_key)), "service account key from environment"

        # 2) Service account file (local development)
        if cfg.service_account_key_path and os.path.exists(cfg.service_account_key_path):
            return credentials.Certificate(cfg.service_account_key_path), "service account key file"

        # 3) Individual project/email/private key variables
        if cfg.project_id and cfg.client_email and cfg.private_key:
            info = {
                "type": "service_account",
                "project_id": cfg.project_id,
                "client_email": cfg.client_email,
                "private_key": cfg.private_key.replace("\\n", "\n"),
                "token_uri": "https://oauth2.googleapis.com/token",
            }
            return credentials.Certificate(info), "service account fields"

        # 4) Application Default Credentials (GOOGLE_APPLICATION_CREDENTIALS, metadata server)
        return credentials.ApplicationDefault(), "application default credentials"
