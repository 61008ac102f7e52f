"""Abstract toolchain interface.

A toolchain builds and runs one generated program and knows how to read
its own compiler's diagnostics. The repair loop in goeval.evaluator only
talks to this interface, so the regexes tied to one compiler's wording
stay inside that compiler's DiagnosticClassifier.
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from goeval.core.config import EvalConfig
from goeval.core.exceptions import ToolchainError

logger = logging.getLogger(__name__)

# Checked in order when EvalConfig.tmpdir is not set
TMPDIR_ENV_VARS: tuple[str, ...] = ("TMPDIR", "TEMPDIR")


@dataclass(frozen=True)
class ToolchainResult:
    """Outcome of one build-and-run.

    Attributes:
        output: Combined stdout and stderr, in emission order.
        exit_code: Process exit code (0 = built and ran successfully).
        duration_ms: Wall time of the subprocess in milliseconds.
        command: Executed command as a tuple.
        source_path: Where the program was written.

    """

    output: str
    exit_code: int
    duration_ms: int = 0
    command: tuple[str, ...] = ()
    source_path: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class DiagnosticClassifier(ABC):
    """Recognises diagnostics caused by a wrongly inferred import."""

    @abstractmethod
    def implicated_packages(self, diagnostics: str) -> set[str]:
        """Return package names or paths the diagnostics blame on imports.

        Args:
            diagnostics: Raw compiler output.

        Returns:
            Names (e.g., "rand") or paths (e.g., "math/rand") that were
            reported as unused or clashing imports.

        """


class BaseToolchain(ABC):
    """Builds and runs a generated program with an external compiler."""

    def __init__(self, config: EvalConfig | None = None) -> None:
        self.config = config or EvalConfig()

    @property
    @abstractmethod
    def toolchain_name(self) -> str:
        """Unique registry identifier (e.g., "go")."""

    @property
    @abstractmethod
    def classifier(self) -> DiagnosticClassifier:
        """Diagnostic classifier for this compiler."""

    @abstractmethod
    def run(self, program: str) -> ToolchainResult:
        """Write program to disk, build and run it.

        Args:
            program: Complete source of the program.

        Returns:
            ToolchainResult; a non-zero exit_code means build or run failed.

        Raises:
            ToolchainError: If the toolchain cannot be started.
            ToolchainTimeoutError: If a configured timeout expires.

        """

    @abstractmethod
    def translate(self, diagnostics: str) -> str:
        """Reformat raw diagnostics into "line:message" lines."""


def resolve_program_path(config: EvalConfig) -> Path:
    """Return the fixed path the generated program is written to.

    Setting TMPDIR (or TEMPDIR) is the supported way to inspect the
    generated program after a run.

    Args:
        config: Evaluator config (tmpdir and source_filename).

    Returns:
        Path of the program file.

    """
    tmpdir = config.tmpdir
    if not tmpdir:
        for var in TMPDIR_ENV_VARS:
            tmpdir = os.environ.get(var, "")
            if tmpdir:
                break
    if not tmpdir:
        tmpdir = tempfile.gettempdir()
    return Path(tmpdir) / config.source_filename


def write_program(program: str, config: EvalConfig) -> Path:
    """Persist program at its fixed path, overwriting any previous run.

    Raises:
        ToolchainError: If the file cannot be written.

    """
    path = resolve_program_path(config)
    try:
        path.write_text(program, encoding="utf-8")
    except OSError as e:
        raise ToolchainError(f"Unable to write program file '{path}': {e}") from e
    logger.debug("Wrote program to %s (%d bytes)", path, len(program))
    return path
