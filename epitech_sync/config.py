"""Configuration for Epitech calendar sync."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from epitech_sync.constants import INTRA_BASE_URL

try:
    from dotenv import load_dotenv
except ImportError:
    load_dotenv = None


class SyncConfig(BaseModel):
    """Runtime configuration with Pydantic validation.

    Holds where things live and how to reach the services. User preferences
    (title prefix, sync period, enabled calendars) are persisted in the store
    as ``SyncSettings`` instead.
    """

    # Storage paths
    data_dir: Path = Field(default=Path("data"))
    log_dir: Path = Field(default=Path("logs"))

    # File naming
    store_filename: str = Field(default="store.json")
    log_filename: str = Field(default="epitech_sync.log")
    log_max_bytes: int = Field(default=1_048_576, gt=0)
    log_backup_count: int = Field(default=3, ge=0)

    # Intranet
    intra_base_url: str = Field(default=INTRA_BASE_URL)
    session_cookie: str | None = None

    # Remote calendar bearer tokens (obtained out of band)
    google_access_token: str | None = None
    outlook_access_token: str | None = None

    # HTTP
    http_timeout: float = Field(default=30.0, gt=0)

    @property
    def store_path(self) -> Path:
        """Path of the JSON key-value store."""
        return self.data_dir / self.store_filename

    @classmethod
    def from_env(cls) -> "SyncConfig":
        """Load configuration from environment variables and .env file."""
        if load_dotenv is not None:
            load_dotenv()

        config_dict = {}

        # Storage paths
        if "EPITECH_DATA_DIR" in os.environ:
            config_dict["data_dir"] = Path(os.environ["EPITECH_DATA_DIR"])
        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])

        # File naming
        if "EPITECH_STORE_FILENAME" in os.environ:
            config_dict["store_filename"] = os.environ["EPITECH_STORE_FILENAME"]
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]

        # Log rotation
        if "LOG_MAX_BYTES" in os.environ:
            try:
                max_bytes = int(os.environ["LOG_MAX_BYTES"])
                if max_bytes > 0:
                    config_dict["log_max_bytes"] = max_bytes
            except ValueError:
                pass  # Keep default if invalid
        if "LOG_BACKUP_COUNT" in os.environ:
            try:
                backup_count = int(os.environ["LOG_BACKUP_COUNT"])
                if backup_count >= 0:
                    config_dict["log_backup_count"] = backup_count
            except ValueError:
                pass  # Keep default if invalid

        # Intranet
        if "EPITECH_INTRA_URL" in os.environ:
            config_dict["intra_base_url"] = os.environ["EPITECH_INTRA_URL"].rstrip("/")
        if "EPITECH_SESSION_COOKIE" in os.environ:
            config_dict["session_cookie"] = os.environ["EPITECH_SESSION_COOKIE"]

        # Remote tokens
        if "GOOGLE_ACCESS_TOKEN" in os.environ:
            config_dict["google_access_token"] = os.environ["GOOGLE_ACCESS_TOKEN"]
        if "OUTLOOK_ACCESS_TOKEN" in os.environ:
            config_dict["outlook_access_token"] = os.environ["OUTLOOK_ACCESS_TOKEN"]

        # HTTP
        if "HTTP_TIMEOUT" in os.environ:
            try:
                timeout = float(os.environ["HTTP_TIMEOUT"])
                if timeout > 0:
                    config_dict["http_timeout"] = timeout
            except ValueError:
                pass  # Keep default if invalid

        return cls(**config_dict)
