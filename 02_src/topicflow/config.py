"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

# Capacity of the bounded queue in front of every loaded agent
DEFAULT_QUEUE_CAPACITY = 100


PathLike = Union[str, Path]


@dataclass
class Settings:
    """Runtime settings read from the environment."""

    api_host: str = "localhost"
    api_port: int = 8080
    log_level: str = "INFO"
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    initial_config: Path | None = None
    exit_on_stdin_eof: bool = True


def _env_flag(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def resolve_config_path(env_value: PathLike | None = None) -> Path | None:
    """Resolve INITIAL_CONFIG to an absolute path."""
    if not env_value:
        return None

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def load_settings() -> Settings:
    """Build Settings from environment variables."""
    capacity = int(os.getenv("QUEUE_CAPACITY", str(DEFAULT_QUEUE_CAPACITY)))
    if capacity < 1:
        raise ValueError(f"QUEUE_CAPACITY must be positive, got {capacity}")

    return Settings(
        api_host=os.getenv("API_HOST", "localhost"),
        api_port=int(os.getenv("API_PORT", "8080")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        queue_capacity=capacity,
        initial_config=resolve_config_path(os.getenv("INITIAL_CONFIG")),
        exit_on_stdin_eof=_env_flag(os.getenv("EXIT_ON_STDIN_EOF"), True),
    )
