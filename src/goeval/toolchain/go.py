"""Go toolchain: ``go run`` on the generated program.

stdout and stderr are merged into one stream so output keeps its
emission order (``println`` writes to stderr, ``fmt.Println`` to stdout).
A failed build and a failed run (panic, non-zero os.Exit) both surface
as a non-zero exit code; callers treat the output as diagnostics then.

Example:
    >>> toolchain = GoToolchain()
    >>> result = toolchain.run('package main\\nfunc main() { println(1) }\\n')
    >>> result.output
    '1\\n'

"""

import logging
import time
from subprocess import PIPE, STDOUT, Popen, TimeoutExpired

from goeval.core.exceptions import ToolchainError, ToolchainTimeoutError
from goeval.toolchain.base import (
    BaseToolchain,
    DiagnosticClassifier,
    ToolchainResult,
    write_program,
)
from goeval.toolchain.diagnostics import GoDiagnosticClassifier, translate_diagnostics

logger = logging.getLogger(__name__)

# Maximum output length in log messages before truncation
OUTPUT_TRUNCATE_LENGTH: int = 500


class GoToolchain(BaseToolchain):
    """Builds and runs programs with the ``go`` command."""

    _classifier = GoDiagnosticClassifier()

    @property
    def toolchain_name(self) -> str:
        return "go"

    @property
    def classifier(self) -> DiagnosticClassifier:
        return self._classifier

    def translate(self, diagnostics: str) -> str:
        return translate_diagnostics(diagnostics)

    def run(self, program: str) -> ToolchainResult:
        """Write program and execute it with ``go run``.

        Blocks until the process exits, or until config.timeout expires
        when one is configured.

        Args:
            program: Complete Go source.

        Returns:
            ToolchainResult with combined output and exit code.

        Raises:
            ToolchainError: If the go binary is missing or not executable,
                or the program file cannot be written.
            ToolchainTimeoutError: If config.timeout expires.

        """
        source_path = write_program(program, self.config)
        command = [self.config.go_binary, "run", str(source_path)]
        timeout = self.config.timeout

        logger.debug("Running: %s (timeout=%s)", " ".join(command), timeout)
        start_time = time.perf_counter()

        try:
            process = Popen(
                command,
                stdout=PIPE,
                stderr=STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.error("Go toolchain not found: %s", self.config.go_binary)
            raise ToolchainError(
                f"Go toolchain not found. Is '{self.config.go_binary}' in PATH?"
            ) from e
        except PermissionError as e:
            raise ToolchainError(
                f"Permission denied executing '{self.config.go_binary}'"
            ) from e

        try:
            output, _ = process.communicate(timeout=timeout)
        except TimeoutExpired:
            process.kill()
            partial, _ = process.communicate()
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.warning(
                "Go run timeout: timeout=%ds, duration_ms=%d, source=%s",
                timeout,
                duration_ms,
                source_path,
            )
            raise ToolchainTimeoutError(
                f"go run timeout after {timeout}s",
                partial_output=partial or "",
            ) from None

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        output = output or ""
        returncode = process.returncode

        if returncode != 0:
            logger.debug(
                "go run failed: exit_code=%d, duration=%dms, output=%s",
                returncode,
                duration_ms,
                output[:OUTPUT_TRUNCATE_LENGTH],
            )
        else:
            logger.info(
                "go run completed: duration=%dms, output_len=%d",
                duration_ms,
                len(output),
            )

        return ToolchainResult(
            output=output,
            exit_code=returncode,
            duration_ms=duration_ms,
            command=tuple(command),
            source_path=str(source_path),
        )
