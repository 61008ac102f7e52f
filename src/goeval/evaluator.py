"""Evaluate a Go snippet by compiling and running it.

evaluate() is the library entry point. It accepts either a complete
file (anything starting with a package clause, passed through as-is)
or a bare snippet, which is expanded into a program:

1. ``p a, b`` / ``t a, b`` alias lines become print-helper calls.
2. Standard packages are inferred from ``name.`` usage and imported.
3. import/type/func blocks are pulled above main; everything else is
   wrapped in main, with ``//line`` directives keeping line numbers.

Example:
    >>> result = evaluate('''
    ... p "Eval demo"
    ... type A struct {
    ...     S string
    ...     V int
    ... }
    ... a := A{S: "The answer is", V: 42}
    ... fmt.Printf("%s: %d\\n", a.S, a.V)
    ... ''')
    >>> print(result.output, end="")
    Eval demo
    The answer is: 42

Set TMPDIR to keep the generated program in a known place for
inspection (see goeval.toolchain.base.resolve_program_path).
"""

from __future__ import annotations

import logging
from collections.abc import MutableSet
from dataclasses import dataclass

from goeval.core.config import EvalConfig
from goeval.core.exceptions import GoEvalError, MalformedInputError
from goeval.source.aliases import expand_aliases
from goeval.source.assembler import FORMAT_PACKAGE, assemble_program, has_package_clause
from goeval.source.imports import short_name
from goeval.source.partition import Partition, partition
from goeval.toolchain.base import BaseToolchain, DiagnosticClassifier, ToolchainResult
from goeval.toolchain.registry import get_toolchain

logger = logging.getLogger(__name__)

# One initial attempt plus at most one repair cycle
MAX_COMPILE_ATTEMPTS: int = 2

# Line reported for errors with no better location
FALLBACK_LINE: int = 1


@dataclass(frozen=True)
class EvalResult:
    """Outcome of one evaluation.

    Exactly one of output and error is meaningful: on failure output is
    always empty.

    Attributes:
        output: Captured stdout+stderr of the program on success.
        error: Newline-joined "line:message" diagnostics on failure.
        attempts: Number of compile attempts made (0 if none).
        program: Last program text submitted (empty if none).

    """

    output: str = ""
    error: str = ""
    attempts: int = 0
    program: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


def _failure(
    toolchain: BaseToolchain, result: ToolchainResult, program: str, attempts: int
) -> EvalResult:
    error = toolchain.translate(result.output)
    if not error:
        # A silent non-zero exit still has to read as a failure
        error = f"{FALLBACK_LINE}:exit status {result.exit_code}"
    return EvalResult(error=error, attempts=attempts, program=program)


def build_program(code: str) -> tuple[Partition | None, str]:
    """Expand a snippet into the first program to compile.

    Args:
        code: Snippet or complete file.

    Returns:
        (partition, program). partition is None for pass-through input.

    Raises:
        MalformedInputError: If the snippet cannot be partitioned.

    """
    if has_package_clause(code):
        return None, code
    parts = partition(expand_aliases(code))
    program = assemble_program(parts.top_level, parts.body, parts.imports | {FORMAT_PACKAGE})
    return parts, program


def repair_imports(
    diagnostics: str, imports: MutableSet[str], classifier: DiagnosticClassifier
) -> bool:
    """Drop inferred imports the compiler rejected.

    A package is removed when the diagnostics name either its full path
    ("math/rand") or its short name ("rand").

    Args:
        diagnostics: Raw compiler output.
        imports: Inferred canonical paths, updated in place.
        classifier: Compiler-specific diagnostic classifier.

    Returns:
        True if at least one import was removed.

    """
    implicated = classifier.implicated_packages(diagnostics)
    removed = {path for path in imports if path in implicated or short_name(path) in implicated}
    if removed:
        logger.debug("Removing falsely inferred imports: %s", sorted(removed))
        imports.difference_update(removed)
    return bool(removed)


def compile_and_run(parts: Partition, toolchain: BaseToolchain) -> EvalResult:
    """Run the assembled program, repairing inferred imports at most once.

    Args:
        parts: Partitioned snippet.
        toolchain: Toolchain that builds and runs the program.

    Returns:
        EvalResult with output, or translated diagnostics of the last attempt.

    Raises:
        ToolchainError: If the toolchain cannot be run.

    """
    imports = set(parts.imports) | {FORMAT_PACKAGE}
    attempt = 0
    while True:
        attempt += 1
        program = assemble_program(parts.top_level, parts.body, imports)
        result = toolchain.run(program)
        if result.ok:
            return EvalResult(output=result.output, attempts=attempt, program=program)

        logger.debug("Compile attempt %d/%d failed", attempt, MAX_COMPILE_ATTEMPTS)
        if attempt >= MAX_COMPILE_ATTEMPTS or not repair_imports(
            result.output, imports, toolchain.classifier
        ):
            return _failure(toolchain, result, program, attempt)
        logger.info("Retrying with imports: %s", ", ".join(sorted(imports)))


def evaluate(
    code: str,
    config: EvalConfig | None = None,
    toolchain: BaseToolchain | None = None,
) -> EvalResult:
    """Compile and run a Go snippet, returning its output or diagnostics.

    Never raises: every failure is converted into EvalResult.error.

    Args:
        code: Snippet, or a complete file starting with a package clause.
        config: Evaluator config; defaults to EvalConfig().
        toolchain: Toolchain override; defaults to config.toolchain
            resolved through the registry.

    Returns:
        EvalResult with either output or error.

    """
    config = config or EvalConfig()
    try:
        if toolchain is None:
            toolchain = get_toolchain(config.toolchain, config)

        if has_package_clause(code):
            logger.debug("Package clause present, compiling input unchanged")
            result = toolchain.run(code)
            if result.ok:
                return EvalResult(output=result.output, attempts=1, program=code)
            return _failure(toolchain, result, code, 1)

        parts = partition(expand_aliases(code))
        return compile_and_run(parts, toolchain)
    except MalformedInputError as e:
        logger.debug("Malformed input: %s", e.diagnostic)
        return EvalResult(error=e.diagnostic)
    except GoEvalError as e:
        logger.error("Evaluation failed: %s", e)
        return EvalResult(error=f"{FALLBACK_LINE}:{e}")
    except Exception as e:
        logger.exception("Unexpected internal error during evaluation")
        return EvalResult(error=f"{FALLBACK_LINE}:{e}")
