"""Environment-backed settings primitives for :mod:`podfingerprint`."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["PodFingerprintSettings", "get_settings"]

_LOG_FORMATS = ("text", "json")
_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


class PodFingerprintSettings(BaseSettings):
    """Expose environment-derived configuration knobs for podfingerprint.

    All environment lookups go through this class. Malformed values fall back
    to the field default rather than failing, so a typo in a deployment
    manifest never prevents fingerprints from being computed.

    Attributes:
        node_name: Node whose workloads are fingerprinted; recorded in trace
            status output.
        trace: Whether the CLI records a trace status by default.
        log_level: Logging level name for the CLI.
        log_format: ``"text"`` for plain log lines or ``"json"`` for the
            structured pipeline.
    """

    node_name: str | None = Field(default=None, alias="PODFINGERPRINT_NODE_NAME")
    trace: bool = Field(default=False, alias="PODFINGERPRINT_TRACE")
    log_level: str = Field(default="WARNING", alias="PODFINGERPRINT_LOG_LEVEL")
    log_format: str = Field(default="text", alias="PODFINGERPRINT_LOG_FORMAT")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("trace", mode="before")
    @classmethod
    def _parse_flag(cls, value: object) -> bool:
        """Parse boolean flags while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed flag; unrecognised strings are treated as ``False``.
        """

        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUTHY:
                return True
            if lowered in _FALSY:
                return False
        return False

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: object) -> str:
        """Normalise the level name, defaulting to ``WARNING`` when unknown."""

        if isinstance(value, str):
            name = value.strip().upper()
            if name in logging.getLevelNamesMapping():
                return name
        return "WARNING"

    @field_validator("log_format", mode="before")
    @classmethod
    def _parse_log_format(cls, value: object) -> str:
        if isinstance(value, str) and value.strip().lower() in _LOG_FORMATS:
            return value.strip().lower()
        return "text"

    @property
    def log_level_number(self) -> int:
        """Return the numeric logging level."""

        return logging.getLevelNamesMapping()[self.log_level]


def get_settings() -> PodFingerprintSettings:
    """Return a :class:`PodFingerprintSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return PodFingerprintSettings()
