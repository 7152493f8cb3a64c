"""Order API settings."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class OrderApiConfig:
    """Settings for the order API process."""

    secret_key: str
    database_url: str
    log_level: str
    page_size: int
    jwt_algorithm: str
    project_root: Path

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    @property
    def settings_file(self) -> Path:
        return self.data_dir / "settings.json"

    @classmethod
    def load(cls) -> "OrderApiConfig":
        """Build settings from .env, data/settings.json and the environment.

        Environment variables win over the settings file.
        """

        project_root = Path(__file__).resolve().parent
        load_dotenv(project_root / ".env")

        settings = {}
        settings_file = project_root / "data" / "settings.json"
        if settings_file.exists():
            settings = json.loads(settings_file.read_text(encoding="utf-8"))

        def _get(key: str, default: str) -> str:
            return os.environ.get(key) or str(settings.get(key) or default)

        default_db = f"sqlite:///{project_root / 'data' / 'orders.db'}"
        return cls(
            secret_key=_get("ORDER_API_SECRET_KEY", "order-api-dev-secret"),
            database_url=_get("DATABASE_URL", default_db),
            log_level=_get("LOG_LEVEL", "INFO").upper(),
            page_size=validate_page_size(_get("ORDER_API_PAGE_SIZE", "15")),
            jwt_algorithm=_get("ORDER_API_JWT_ALGORITHM", "HS256"),
            project_root=project_root,
        )


def validate_page_size(value) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid page size: {value!r}")
    if size <= 0:
        raise ValueError(f"Invalid page size: {value!r} (expected a positive integer)")
    return size
