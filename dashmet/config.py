"""Environment-driven settings for wiring dashmet into an application."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "http://localhost:3000"
DEFAULT_INTELLIGENCE_URL = "http://localhost:8053"


def _env(key: str, default: str) -> str:
    value = os.getenv(key, default)
    return value.strip() if isinstance(value, str) else default


def _env_float(key: str, default: float) -> float:
    try:
        return float(_env(key, str(default)))
    except ValueError:
        return default


def _env_optional_int(key: str) -> Optional[int]:
    value = _env(key, "")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(key: str, default: bool) -> bool:
    value = _env(key, str(default)).lower()
    if value in {"1", "true", "yes", "y"}:
        return True
    if value in {"0", "false", "no", "n"}:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    intelligence_url: str = DEFAULT_INTELLIGENCE_URL
    http_timeout: float = 10.0
    http_connect_timeout: float = 3.0
    fetch_deadline: float = 15.0
    use_mock_data: bool = False
    mock_seed: Optional[int] = None
    log_level: str = "INFO"


def get_settings() -> Settings:
    # Real environment variables win over values from the env file.
    env_file = os.getenv("DASHMET_ENV_FILE", ".env")
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    return Settings(
        api_base_url=_env("DASHMET_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        intelligence_url=_env("DASHMET_INTELLIGENCE_URL", DEFAULT_INTELLIGENCE_URL).rstrip("/"),
        http_timeout=_env_float("DASHMET_HTTP_TIMEOUT", 10.0),
        http_connect_timeout=_env_float("DASHMET_HTTP_CONNECT_TIMEOUT", 3.0),
        fetch_deadline=_env_float("DASHMET_FETCH_DEADLINE", 15.0),
        use_mock_data=_env_bool("DASHMET_USE_MOCK_DATA", False),
        mock_seed=_env_optional_int("DASHMET_MOCK_SEED"),
        log_level=_env("DASHMET_LOG_LEVEL", "INFO").upper(),
    )
