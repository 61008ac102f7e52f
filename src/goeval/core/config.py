"""Evaluator configuration model.

Settings are optional: EvalConfig() gives the defaults used by the CLI
and by evaluate() when no config is passed. A YAML file can override
them via load_config().
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from goeval.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Config files are tiny; anything larger is almost certainly a mistake
MAX_CONFIG_SIZE: int = 64 * 1024

# Environment variable naming a default config file for the CLI
CONFIG_ENV_VAR: str = "GOEVAL_CONFIG"

DEFAULT_SOURCE_FILENAME: str = "goeval_main.go"


class EvalConfig(BaseModel):
    """Evaluator configuration.

    Attributes:
        toolchain: Registry name of the toolchain used to build and run.
        go_binary: Go executable name or path.
        tmpdir: Directory for the generated program. None = TMPDIR,
            TEMPDIR, then the platform default.
        source_filename: Fixed name of the generated program file.
        timeout: Seconds before the run is killed. None = wait forever.

    Example:
        >>> config = EvalConfig(timeout=30)
        >>> config.go_binary
        'go'

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    toolchain: str = Field(default="go", min_length=1)
    go_binary: str = Field(default="go", min_length=1)
    tmpdir: str | None = Field(default=None)
    source_filename: str = Field(default=DEFAULT_SOURCE_FILENAME, min_length=4)
    timeout: int | None = Field(default=None, ge=1)

    @field_validator("source_filename", mode="after")
    @classmethod
    def validate_source_filename(cls, v: str) -> str:
        """Require a bare *.go filename (go run needs the suffix)."""
        if "/" in v or "\\" in v:
            raise ValueError(f"source_filename must not contain a path: '{v}'")
        if not v.endswith(".go"):
            raise ValueError(f"source_filename must end with .go: '{v}'")
        return v


def load_config(path: Path) -> EvalConfig:
    """Load and validate evaluator configuration from a YAML file.

    Args:
        path: Path to the YAML config file.

    Returns:
        Validated EvalConfig.

    Raises:
        ConfigError: On file/parse/validation errors.

    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigError(f"Config file {path} exceeds {MAX_CONFIG_SIZE // 1024}KB limit")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # Empty file means "all defaults"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    try:
        config = EvalConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e

    logger.debug("Loaded config from %s: %s", path, config)
    return config


def resolve_config(path: str | None = None) -> EvalConfig:
    """Resolve config from an explicit path, GOEVAL_CONFIG, or defaults.

    Args:
        path: Explicit config file path (e.g., from --config).

    Returns:
        Loaded EvalConfig, or EvalConfig() if no file is configured.

    Raises:
        ConfigError: If a configured file cannot be loaded.

    """
    config_path = path or os.environ.get(CONFIG_ENV_VAR, "")
    if not config_path:
        return EvalConfig()
    return load_config(Path(config_path).expanduser())
