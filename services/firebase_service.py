import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError
import json
import logging
from typing import Any, Dict, Optional

from core.exceptions import PersistenceError
from services.storage import Storage

logger = logging.getLogger(__name__)


def initialize_firebase(service_account_key_json: str, database_url: str):
    """Initializes the Firebase Admin SDK once per process."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if not service_account_key_json or not database_url:
        raise ValueError("Firebase storage needs FIREBASE_SERVICE_ACCOUNT_KEY_JSON and FIREBASE_DATABASE_URL.")

    # The service account key is expected to be a JSON string in the environment variable.
    service_account_info = json.loads(service_account_key_json)
    cred = credentials.Certificate(service_account_info)
    app = firebase_admin.initialize_app(cred, {
        'databaseURL': database_url
    })
    logger.info("Firebase initialized for %s", database_url)
    return app


class FirebaseStorage(Storage):
    """Storage backed by the Firebase Realtime Database."""

    def __init__(self, service_account_key_json: str, database_url: str):
        self._app = initialize_firebase(service_account_key_json, database_url)

    def _ref(self, path: str):
        return db.reference(path, app=self._app)

    def get(self, path: str) -> Optional[Any]:
        try:
            return self._ref(path).get()
        except FirebaseError as e:
            logger.exception("Firebase read failed for %s", path)
            raise PersistenceError(f"Could not read {path}: {e}") from e

    def set(self, path: str, value: Any) -> None:
        try:
            self._ref(path).set(value)
        except FirebaseError as e:
            logger.exception("Firebase write failed for %s", path)
            raise PersistenceError(f"Could not write {path}: {e}") from e

    def update(self, path: str, values: Dict[str, Any]) -> None:
        try:
            self._ref(path).update(values)
        except FirebaseError as e:
            logger.exception("Firebase update failed for %s", path)
            raise PersistenceError(f"Could not update {path}: {e}") from e

    def delete(self, path: str) -> None:
        try:
            self._ref(path).delete()
        except FirebaseError as e:
            logger.exception("Firebase delete failed for %s", path)
            raise PersistenceError(f"Could not delete {path}: {e}") from e

