"""Runtime configuration loaded from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.cwd() / "data"
DEFAULT_FIRESTORE_URL = "https://firestore.googleapis.com/v1"

# Keys the remote store cannot work without.
REQUIRED_REMOTE_KEYS = ("FIREBASE_API_KEY", "FIREBASE_PROJECT_ID")
OPTIONAL_REMOTE_KEYS = (
    "FIREBASE_AUTH_DOMAIN",
    "FIREBASE_STORAGE_BUCKET",
    "FIREBASE_MESSAGING_SENDER_ID",
    "FIREBASE_APP_ID",
)


def is_placeholder(value: str | None) -> bool:
    """Return True for missing values and template placeholders like ``YOUR_API_KEY``."""
    if not value or not value.strip():
        return True
    return value == "YOUR_API_KEY" or value.startswith("YOUR_")


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Centralized configuration for the tracker."""

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        env = os.environ if env is None else env

        self.data_dir: Path = Path(
            env.get("GYM_TRACKER_DATA_DIR") or DEFAULT_DATA_DIR
        ).expanduser()
        self.db_path: Path = self.data_dir / "gym_tracker.db"
        self.log_level: str = (env.get("GYM_TRACKER_LOG_LEVEL") or "INFO").upper()
        self.default_user: str | None = env.get("GYM_TRACKER_USER") or None
        self.force_local: bool = _truthy(env.get("GYM_TRACKER_FORCE_LOCAL"))

        # ---- Remote document store (Firestore) ----
        self.firebase_api_key: str = env.get("FIREBASE_API_KEY", "")
        self.firebase_project_id: str = env.get("FIREBASE_PROJECT_ID", "")
        self.firebase_auth_domain: str = env.get("FIREBASE_AUTH_DOMAIN", "")
        self.firebase_storage_bucket: str = env.get("FIREBASE_STORAGE_BUCKET", "")
        self.firebase_messaging_sender_id: str = env.get(
            "FIREBASE_MESSAGING_SENDER_ID", ""
        )
        self.firebase_app_id: str = env.get("FIREBASE_APP_ID", "")
        self.firebase_measurement_id: str = env.get("FIREBASE_MEASUREMENT_ID", "")
        self.firebase_database_id: str = (
            env.get("FIREBASE_DATABASE_ID") or "(default)"
        )
        self.firebase_id_token: str | None = env.get("FIREBASE_ID_TOKEN") or None
        self.firestore_base_url: str = (
            env.get("FIRESTORE_BASE_URL") or DEFAULT_FIRESTORE_URL
        ).rstrip("/")
        self.http_timeout: float = float(env.get("GYM_TRACKER_HTTP_TIMEOUT") or "10")

        self._missing_optional = [
            key for key in OPTIONAL_REMOTE_KEYS if not env.get(key)
        ]

    def has_remote_config(self) -> bool:
        """Check whether the required remote keys hold real values."""
        return not (
            is_placeholder(self.firebase_api_key)
            or is_placeholder(self.firebase_project_id)
        )

    def warn_missing(self) -> None:
        """Log remote keys that are absent from the environment."""
        if self._missing_optional:
            logger.warning(
                "Missing Firebase environment variables: %s",
                ", ".join(self._missing_optional),
            )


def get_settings(env_file: str | Path | None = None) -> Settings:
    """Load ``.env`` (if present) and build settings from the environment."""
    load_dotenv(env_file)
    return Settings()
