import json
import os

from core import config
from core.database import Database
from core.errors import StorageFault
from core.logging_utils import get_logger
from models.setting import Setting

logger = get_logger(__name__)


class SecureStore:
    """
    Small file-backed key/value store for sensitive items (PIN hash,
    biometric flag). The file is rewritten whole on every change and
    kept readable by the owner only.
    """

    def __init__(self, path: str | None = None):
        self.path = path or config.SECURE_STORE_PATH

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Secure store unreadable at %s: %s", self.path, e)
            raise StorageFault("Secure store unreadable", cause=e) from e

    def _save(self, data: dict) -> None:
        store_dir = os.path.dirname(self.path)
        if store_dir:
            os.makedirs(store_dir, exist_ok=True)
        tmp_path = self.path + ".tmp"
        try:
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Secure store write failed at %s: %s", self.path, e)
            raise StorageFault("Secure store write failed", cause=e) from e

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class Preferences:
    """
    Single entry point for app configuration.

    Plain preferences go to the `settings` table; sensitive secrets go to
    the SecureStore. Callers pick the capability, not the backend.
    """

    def __init__(self, database: Database, secure_store: SecureStore | None = None):
        self.database = database
        self.secure_store = secure_store or SecureStore()

    # -----------------------------
    # Plain preferences
    # -----------------------------
    def get_preference(self, key: str, default: str | None = None) -> str | None:
        with self.database.session_scope() as db:
            row = db.get(Setting, key)
            return row.value if row else default

    def set_preference(self, key: str, value: str) -> None:
        with self.database.session_scope() as db:
            row = db.get(Setting, key)
            if row:
                row.value = value
            else:
                db.add(Setting(key=key, value=value))

    def is_dark_mode(self) -> bool:
        return self.get_preference(config.THEME_KEY, "light") == "dark"

    def toggle_theme(self) -> bool:
        """Flip light/dark and return the new dark-mode flag."""
        dark = not self.is_dark_mode()
        self.set_preference(config.THEME_KEY, "dark" if dark else "light")
        return dark

    # -----------------------------
    # Sensitive secrets
    # -----------------------------
    def get_secret(self, key: str) -> str | None:
        return self.secure_store.get_item(key)

    def set_secret(self, key: str, value: str) -> None:
        self.secure_store.set_item(key, value)

    def delete_secret(self, key: str) -> None:
        self.secure_store.delete_item(key)
