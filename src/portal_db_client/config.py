"""Client configuration models and loaders."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Final, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from portal_db_client.errors import (
    APIKeyNotProvidedError,
    APIVersionNotProvidedError,
    BaseURLNotProvidedError,
    ConfigFileError,
    UnsupportedAPIVersionError,
)

__all__ = [
    "APIVersion",
    "SUPPORTED_API_VERSIONS",
    "ClientConfig",
    "ClientSettings",
    "load_config",
]

ENV_PREFIX: Final[str] = "PORTAL_DB_"
CONFIG_SECTION: Final[str] = "portal_db"


class APIVersion(str, Enum):
    """API versions served by the Portal HTTP DB."""

    V2 = "v2"


SUPPORTED_API_VERSIONS: Final[frozenset[str]] = frozenset(version.value for version in APIVersion)


class ClientConfig(BaseModel):
    """Connection settings for one client handle."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(default="", description="Root URL of the Portal HTTP DB.")
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Value sent verbatim in the Authorization header.",
    )
    version: str = Field(default="", description="API version path segment, e.g. 'v2'.")
    retries: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="Retry attempts after the first call on transport errors and 5xx.",
    )
    timeout: PositiveFloat | None = Field(
        default=30.0,
        description="Deadline in seconds for a whole call, retries and backoff included.",
    )

    @field_validator("base_url", "version", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("base_url")
    @classmethod
    def _drop_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def validate_config(self) -> None:
        """Raise a distinct :class:`ConfigurationError` for the first problem found."""

        if not self.base_url:
            raise BaseURLNotProvidedError()
        if not self.api_key.get_secret_value():
            raise APIKeyNotProvidedError()
        if not self.version:
            raise APIVersionNotProvidedError()
        if self.version not in SUPPORTED_API_VERSIONS:
            raise UnsupportedAPIVersionError(self.version, SUPPORTED_API_VERSIONS)


class ClientSettings(BaseSettings):
    """``PORTAL_DB_*`` environment variables (and ``.env``) as a typed view."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str | None = None
    api_key: SecretStr | None = None
    version: str | None = None
    retries: int | None = None
    timeout: float | None = None

    def overrides(self) -> dict[str, Any]:
        """Return only the values that were actually provided."""

        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


def _deep_merge(
    base: MutableMapping[str, Any], override: Mapping[str, Any]
) -> MutableMapping[str, Any]:
    for key, value in override.items():
        if key in base and isinstance(base[key], MutableMapping) and isinstance(value, Mapping):
            _deep_merge(cast(MutableMapping[str, Any], base[key]), value)
        else:
            base[key] = value
    return base


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigFileError(f"unable to read configuration file {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigFileError(f"configuration file {path} must contain a mapping")
    section = raw.get(CONFIG_SECTION, raw)
    if not isinstance(section, Mapping):
        raise ConfigFileError(f"section {CONFIG_SECTION!r} in {path} must be a mapping")
    return dict(section)


def load_config(
    path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    env_file: Path | None = None,
) -> ClientConfig:
    """Build a :class:`ClientConfig` from layered sources.

    Precedence, lowest first: model defaults, the YAML file at ``path`` (either
    flat or under a ``portal_db`` section), ``PORTAL_DB_*`` environment
    variables, then ``overrides``. The result is not validated for
    completeness; client construction does that.
    """

    payload: MutableMapping[str, Any] = {}
    if path is not None:
        _deep_merge(payload, _load_yaml(path))

    settings = ClientSettings(_env_file=env_file) if env_file is not None else ClientSettings()
    _deep_merge(payload, settings.overrides())

    if overrides:
        _deep_merge(payload, overrides)

    try:
        return ClientConfig.model_validate(payload)
    except PydanticValidationError as exc:
        raise ConfigFileError(f"invalid client configuration: {exc}") from exc
