from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from licensechain_nft.errors import ConfigError

DEFAULT_BASE_URL = "https://api.licensechain.app"


class ClientConfig(BaseModel):
    """Connection settings shared read-only by the executor and managers."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_key: str = Field(repr=False)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout_s: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=1)
    retry_initial_delay_s: float = Field(default=1.0, ge=0)

    @field_validator("api_key")
    @classmethod
    def _validate_api_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("API key is required")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url cannot be empty")
        return value


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO")
    jsonl: bool = Field(default=True)
    log_file: str | None = Field(default=None)

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = value.upper()
        if level not in allowed:
            raise ValueError(f"Invalid log level: {value}")
        return level


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    api: ClientConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def build_client_config(**values: Any) -> ClientConfig:
    """Build a ClientConfig, dropping None overrides and wrapping pydantic errors."""
    payload = {key: value for key, value in values.items() if value is not None}
    try:
        return ClientConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"Config not found: {path}")

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigError("Config root must be a mapping")

    try:
        return AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
