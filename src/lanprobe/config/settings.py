from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

APP_NAME = "lanprobe"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "LANPROBE_CONFIG"


def default_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / APP_NAME / CONFIG_FILENAME


class ScanningConfig(BaseModel):
    """Timeouts (seconds) and concurrency ceilings for one scan run."""

    model_config = {"frozen": True, "extra": "forbid"}

    networks: list[str] = Field(default_factory=list)
    ping_timeout: float = Field(default=1.0, gt=0)
    arp_timeout: float = Field(default=1.0, gt=0)
    nslookup_timeout: float = Field(default=1.0, gt=0)
    ping_concurrency: int = Field(default=50, ge=1, le=254)
    detail_concurrency: int = Field(default=10, ge=1, le=254)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    scanning: ScanningConfig = Field(default_factory=ScanningConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path).expanduser()
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def _toml_value(value: object) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    scanning = settings.scanning
    lines = [
        "# lanprobe configuration",
        "",
        "[scanning]",
        "# Explicit /24 ranges to scan; leave empty to use local interfaces",
        f"networks = {_toml_value(scanning.networks)}",
        f"ping_timeout = {scanning.ping_timeout}",
        f"arp_timeout = {scanning.arp_timeout}",
        f"nslookup_timeout = {scanning.nslookup_timeout}",
        f"ping_concurrency = {scanning.ping_concurrency}",
        f"detail_concurrency = {scanning.detail_concurrency}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
