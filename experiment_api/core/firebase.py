"""Firebase initialization and Firestore connection lifecycle.

The connection is created once during application startup, shared by every
request and torn down on shutdown. It is passed explicitly to the
repositories that need it instead of living in module state.
"""

import os
from typing import Optional

import firebase_admin
from firebase_admin import (
    credentials,
    firestore_async,
)
from google.cloud.firestore import AsyncClient

from experiment_api.core.config import (
    Environment,
    Settings,
)
from experiment_api.core.logging import logger


class FirestoreConnection:
    """Owns the Firebase app and its async Firestore client."""

    def __init__(self, settings: Settings, app_name: str = "experiment-api"):
        """Initialize the connection holder.

        Args:
            settings: Application settings with Firebase configuration
            app_name: Name of the Firebase app instance
        """
        self.settings = settings
        self.app_name = app_name
        self._app: Optional[firebase_admin.App] = None
        self._client: Optional[AsyncClient] = None

    @property
    def client(self) -> Optional[AsyncClient]:
        """Get the Firestore client, or None when not connected."""
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def connect(self) -> None:
        """Initialize the Firebase app and Firestore client.

        Outside production a failure is logged and the service starts without
        a store, so lookups fail with a storage error instead of the process
        refusing to boot.
        """
        if self._client is not None:
            return

        options = {}
        if self.settings.FIREBASE_PROJECT_ID:
            options["projectId"] = self.settings.FIREBASE_PROJECT_ID

        try:
            credentials_path = self.settings.FIREBASE_CREDENTIALS_PATH
            if credentials_path and os.path.exists(credentials_path):
                cred = credentials.Certificate(credentials_path)
            else:
                # Application Default Credentials on GCP
                cred = credentials.ApplicationDefault()

            self._app = firebase_admin.initialize_app(cred, options, name=self.app_name)
            self._client = firestore_async.client(app=self._app)
        except Exception as e:
            self._release_app()
            if self.settings.APP_ENV == Environment.PRODUCTION:
                logger.critical("firestore_connection_failed", error=str(e), exc_info=True)
                raise RuntimeError(f"Failed to initialize Firestore: {e}") from e
            logger.warning("firestore_unavailable", error=str(e), environment=self.settings.APP_ENV.value)
            return

        logger.info(
            "firestore_connected",
            project_id=self.settings.FIREBASE_PROJECT_ID or None,
            collection=self.settings.EXPERIMENTS_COLLECTION,
        )

    def close(self) -> None:
        """Release the Firestore client and Firebase app."""
        if self._app is None:
            return
        self._client = None
        self._release_app()
        logger.info("firestore_disconnected")

    def _release_app(self) -> None:
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
