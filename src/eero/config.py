"""Configuration helpers: environment-driven settings and the token store."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import platformdirs
from loguru import logger
from pydantic import BaseModel, ValidationError

APP_NAME = "eero-cli"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "EERO_CONFIG"

DEFAULT_BASE_URL = "https://api-user.e2ro.com"
DEFAULT_USER_AGENT = "eero-ios/2.16.0 (iPhone8,1; iOS 11.3)"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MONITOR_INTERVAL = 10

ENV_PREFIX = "EERO_"
ENV_FILE_VAR = "EERO_ENV_FILE"


def _env_search_paths(start: Path) -> Iterator[Path]:
    """Yield .env candidates, closest first.

    An explicit ``EERO_ENV_FILE`` is the only candidate when set. Otherwise the
    working directory and its parents are searched, then the per-user config
    directory that also holds the token file.
    """
    override = os.environ.get(ENV_FILE_VAR)
    if override:
        yield Path(override).expanduser()
        return

    for directory in (start, *start.parents):
        yield directory / ".env"
    yield platformdirs.user_config_path(APP_NAME) / ".env"


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :]

    key, sep, value = line.partition("=")
    if not sep:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        value = value[1:-1]
    return key.strip(), value


def _load_env_file(path: Path | None = None) -> dict[str, str]:
    """Export the ``EERO_*`` entries of a .env file and return those applied."""
    env_path = path or next(
        (candidate for candidate in _env_search_paths(Path.cwd()) if candidate.is_file()),
        None,
    )
    if env_path is None or not env_path.is_file():
        logger.debug("No .env file discovered for configuration")
        return {}

    applied: dict[str, str] = {}
    ignored: list[str] = []
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        entry = _parse_env_line(raw_line)
        if entry is None:
            continue
        key, value = entry
        if not key.startswith(ENV_PREFIX):
            ignored.append(key)
            continue
        # Existing environment variables win over the file.
        if key in os.environ:
            continue
        os.environ[key] = value
        applied[key] = value

    logger.bind(path=str(env_path), applied=sorted(applied), ignored=ignored).debug(
        "Loaded eero settings from .env"
    )
    return applied


_load_env_file()


def _number_from_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Typed accessors for configuration derived from the environment."""

    base_url: str
    user_agent: str
    timeout: float
    monitor_interval: int

    @classmethod
    def from_env(cls) -> Settings:
        base_url = os.environ.get("EERO_BASE_URL", DEFAULT_BASE_URL)
        user_agent = os.environ.get("EERO_USER_AGENT", DEFAULT_USER_AGENT)
        timeout = _number_from_env("EERO_TIMEOUT", DEFAULT_TIMEOUT)
        interval = int(
            _number_from_env("EERO_MONITOR_INTERVAL", DEFAULT_MONITOR_INTERVAL)
        )

        logger.bind(base_url=base_url, timeout=timeout).debug(
            "Configuration loaded from environment"
        )

        return cls(
            base_url=base_url,
            user_agent=user_agent,
            timeout=timeout,
            monitor_interval=interval,
        )


settings = Settings.from_env()


def default_config_path() -> Path:
    """Return the per-user location of the token file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return platformdirs.user_config_path(APP_NAME) / CONFIG_FILENAME


class StoredConfig(BaseModel):
    """Session state persisted between invocations."""

    model_config = {"frozen": True, "extra": "ignore"}

    token: str = ""
    network_id: str = ""


class ConfigStore:
    """JSON-file key-value store holding the session token and active network."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_config_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoredConfig:
        """Read the stored session, returning an empty one if none exists."""
        if not self._path.exists():
            return StoredConfig()

        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return StoredConfig()
        try:
            return StoredConfig.model_validate_json(raw)
        except ValidationError as exc:
            raise ValueError(f"Invalid config file: {self._path}\n{exc}") from exc

    def save(self, token: str, network_id: str) -> StoredConfig:
        """Persist the token and network ID, readable by the owner only."""
        stored = StoredConfig(token=token or "", network_id=network_id or "")
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(stored.model_dump_json(indent=2), encoding="utf-8")
        os.chmod(self._path, 0o600)
        logger.bind(path=str(self._path), network_id=stored.network_id).debug(
            "Saved session config"
        )
        return stored

    def clear(self) -> StoredConfig:
        """Forget the token and network ID."""
        return self.save("", "")

    def has_token(self) -> bool:
        return bool(self.load().token)


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "ConfigStore",
    "Settings",
    "StoredConfig",
    "default_config_path",
    "settings",
]
