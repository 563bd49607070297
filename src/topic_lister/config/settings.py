from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


DEFAULT_POLL_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class Settings:
    project_id: str
    poll_interval: float
    page_size: Optional[int]

    mock_mode: bool
    mock_data_dir: str

    log_level: str


_settings: Settings | None = None


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = _env(name).strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = _env(name).strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def _env_int(name: str) -> Optional[int]:
    raw = _env(name).strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def get_settings() -> Settings:
    global _settings
    if _settings is not None:
        return _settings

    _settings = Settings(
        project_id=_env("GCP_PROJECT_ID") or _env("GOOGLE_CLOUD_PROJECT"),
        poll_interval=_env_float("POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS),
        page_size=_env_int("PUBSUB_PAGE_SIZE"),
        mock_mode=_env_bool("MOCK_MODE"),
        mock_data_dir=_env("MOCK_DATA_DIR", "mock_data"),
        log_level=_env("LOG_LEVEL", "WARNING").upper(),
    )

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
