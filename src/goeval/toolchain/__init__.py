"""External toolchains that build and run assembled programs."""

from goeval.toolchain.base import (
    BaseToolchain,
    DiagnosticClassifier,
    ToolchainResult,
    resolve_program_path,
)
from goeval.toolchain.diagnostics import GoDiagnosticClassifier, translate_diagnostics
from goeval.toolchain.go import GoToolchain
from goeval.toolchain.registry import get_toolchain, is_valid_toolchain, list_toolchains

__all__ = [
    "BaseToolchain",
    "DiagnosticClassifier",
    "ToolchainResult",
    "resolve_program_path",
    "GoDiagnosticClassifier",
    "translate_diagnostics",
    "GoToolchain",
    "get_toolchain",
    "is_valid_toolchain",
    "list_toolchains",
]
