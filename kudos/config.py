"""Ledger settings.

Defaults reproduce the stock ledger: a limit of 100 kudos per sender per
86400-second window, 140-character comments, the ``cosmos`` address prefix
and in-memory storage. Every field can be overridden from YAML or from
``KUDOS_<SECTION>__<FIELD>`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "KUDOS_"
ENV_NESTED_DELIMITER = "__"


class QuotaConfig(BaseModel):
    daily_limit: int = Field(default=100, ge=1)
    window_seconds: int = Field(default=60 * 60 * 24, ge=1)


class MessagesConfig(BaseModel):
    max_comment_length: int = Field(default=140, ge=1)
    address_prefix: str = "cosmos"

    @field_validator("address_prefix")
    @classmethod
    def _validate_prefix(cls, value: str) -> str:
        if not value or not value.isalnum() or value != value.lower():
            raise ValueError("messages.address_prefix must be lowercase alphanumeric")
        return value


class LeaderboardConfig(BaseModel):
    """``default_limit`` applies when a leaderboard query asks for limit 0."""

    default_limit: int = Field(default=10, ge=1)


class StorageConfig(BaseModel):
    """Where committed state lives. ``db_path=None`` keeps state in memory."""

    db_path: Path | None = None


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class KudosSettings(BaseSettings):
    quota: QuotaConfig = Field(default_factory=QuotaConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    leaderboard: LeaderboardConfig = Field(default_factory=LeaderboardConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter=ENV_NESTED_DELIMITER,
        extra="ignore",
    )


def _env_overrides(environ: Mapping[str, str]) -> dict[str, object]:
    """Turn ``KUDOS_SECTION__FIELD=value`` variables into a nested mapping.

    Values are parsed as YAML scalars, so ``"7"`` becomes ``7`` and ``"true"``
    becomes ``True``. An empty value stays an empty string.
    """
    overrides: dict[str, object] = {}
    for name, raw_value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        *sections, field = name[len(ENV_PREFIX) :].lower().split(ENV_NESTED_DELIMITER)
        target = overrides
        for section in sections:
            target = target.setdefault(section, {})  # type: ignore[assignment]
        parsed = yaml.safe_load(raw_value)
        target[field] = raw_value if parsed is None else parsed
    return overrides


def _deep_merge(base: dict[str, object], overrides: dict[str, object]) -> dict[str, object]:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(path: str | Path = "config/kudos.yaml") -> KudosSettings:
    """Read ledger settings from a YAML file, then apply ``KUDOS_*`` overrides.

    The file may hold the settings at the top level or under a ``kudos:`` key.
    Environment variables win over file values, field by field.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    document = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(document, dict):
        raise ValueError("config file must contain a top-level mapping")

    section = document.get("kudos", document)
    if not isinstance(section, dict):
        raise ValueError("kudos config section must be a mapping")

    return KudosSettings.model_validate(_deep_merge(section, _env_overrides(os.environ)))


__all__ = [
    "KudosSettings",
    "LeaderboardConfig",
    "LoggingConfig",
    "MessagesConfig",
    "QuotaConfig",
    "StorageConfig",
    "load_config",
]
