"""
Configuration model and YAML I/O for repplink.

This module defines the Pydantic model that maps 1:1 to a
``repplink.yaml`` file, plus helpers for loading and saving it.

Key model:
- RepplinkConfig: download endpoint, transport timeout/headers,
  staging directory and text encoding.

Key functions:
- load_config(path) -> RepplinkConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Every field has a default, so ``RepplinkConfig()`` is a working
configuration for public Google Drive links.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from repplink.exceptions import ConfigValidationError
from repplink.link import DEFAULT_EXPORT_ENDPOINT

logger = logging.getLogger(__name__)


class RepplinkConfig(BaseModel):
    """Settings shared by every request a ``Repplink`` handle makes."""

    export_endpoint: str = Field(
        DEFAULT_EXPORT_ENDPOINT,
        description="Base URL of the direct download endpoint",
    )
    timeout: float | None = Field(
        None,
        gt=0,
        description="Per-request timeout in seconds; None waits indefinitely",
    )
    staging_dir: str | None = Field(
        None,
        description="Root directory for staged downloads; None uses the system temp dir",
    )
    encoding: str = Field(
        "utf-8-sig",
        description="Text encoding of the shared file (utf-8-sig also accepts a BOM)",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra HTTP headers sent with the probe and the download",
    )

    @field_validator("export_endpoint")
    @classmethod
    def _check_endpoint_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(
                f"export_endpoint must be an http(s) URL, got {value!r}"
            )
        return value.rstrip("?")

    @field_validator("encoding")
    @classmethod
    def _check_encoding_known(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {value!r}") from exc
        return value


def load_config(path: str | Path) -> RepplinkConfig:
    """Load and validate a repplink YAML config.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return RepplinkConfig.model_validate(raw)


def save_config(config: RepplinkConfig, path: str | Path) -> None:
    """Serialize a RepplinkConfig to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# repplink configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def resolve_config(config: RepplinkConfig | str | Path | None) -> RepplinkConfig:
    """Accept a model, a YAML path, or ``None`` and return a model."""
    if config is None:
        return RepplinkConfig()
    if isinstance(config, RepplinkConfig):
        return config
    return load_config(config)
