from __future__ import annotations

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from event_ocr.domain.ports.Settings_provider import Settings_provider


KNOWN_KEYS = [
    "DOMAIN",
    "PORT",
    "ALLOWED_CORS_ORIGINS",
    "SWAGGER_ENABLED",
    "LOG_LEVEL",
    "TITLE_TOP_N",
    "PARAGRAPH_GAP",
    "SERVE",
]


class EnvSettings(Settings_provider):
    """Settings backed by process environment (optionally seeded from `.env`)."""

    def __init__(self, *, use_dotenv: bool = True) -> None:
        if use_dotenv:
            load_dotenv()

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return os.getenv(key, default)

    def get_int(self, key: str, default: int) -> int:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {raw!r}") from None

    def get_bool(self, key: str, default: bool = False) -> bool:
        v = os.getenv(key)
        if v is None:
            return default
        return v.lower() in ("1", "true", "yes")

    def snapshot(self) -> Dict[str, str]:
        return {k: os.getenv(k, "") for k in KNOWN_KEYS}
