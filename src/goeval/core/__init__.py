"""Core infrastructure: configuration and exception hierarchy."""

from goeval.core.config import EvalConfig, load_config, resolve_config
from goeval.core.exceptions import (
    ConfigError,
    GoEvalError,
    MalformedInputError,
    NewlineInStringError,
    ToolchainError,
    ToolchainTimeoutError,
    UnclosedBracketError,
)

__all__ = [
    "EvalConfig",
    "load_config",
    "resolve_config",
    "ConfigError",
    "GoEvalError",
    "MalformedInputError",
    "NewlineInStringError",
    "ToolchainError",
    "ToolchainTimeoutError",
    "UnclosedBracketError",
]
