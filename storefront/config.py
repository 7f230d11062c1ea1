from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]

DEFAULT_API_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 10.0


def _get_env(*keys: str, default: Optional[str] = None) -> Optional[str]:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class StorefrontSettings:
    api_url: str = DEFAULT_API_URL
    state_dir: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return self.api_url.rstrip("/")


def load_settings(env_file: Optional[Path] = None) -> StorefrontSettings:
    """Build settings from the environment after loading ``.env`` if present."""
    load_dotenv(dotenv_path=env_file or ROOT_DIR / ".env")
    return StorefrontSettings(
        api_url=_get_env("STOREFRONT_API_URL", default=DEFAULT_API_URL) or DEFAULT_API_URL,
        state_dir=_get_env("STOREFRONT_STATE_DIR"),
        timeout=_get_float("STOREFRONT_TIMEOUT", default=DEFAULT_TIMEOUT),
    )
