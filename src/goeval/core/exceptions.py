"""Custom exception hierarchy for goeval.

All custom exceptions inherit from GoEvalError to enable:
- Unified exception handling at the evaluate() boundary
- Clear distinction from built-in exceptions
- Consistent "line:message" error strings for malformed input
"""

__all__ = [
    "GoEvalError",
    "ConfigError",
    "MalformedInputError",
    "NewlineInStringError",
    "UnclosedBracketError",
    "ToolchainError",
    "ToolchainTimeoutError",
]


class GoEvalError(Exception):
    """Base exception for all goeval errors.

    All custom exceptions in goeval should inherit from this class
    to enable unified exception handling and clear error boundaries.
    """

    pass


class ConfigError(GoEvalError):
    """Configuration loading or validation error.

    Raised when:
    - Config file is missing, unreadable or too large
    - Config file is not a YAML mapping
    - Pydantic validation of the config fails
    - An unknown toolchain name is requested from the registry
    """

    pass


class MalformedInputError(GoEvalError):
    """Snippet cannot be partitioned.

    Fatal and never retried: raised as soon as the problem is detected,
    before any compile attempt.

    Attributes:
        line: 1-based line number in the original input.

    Example:
        >>> try:
        ...     partition("func f() {\n")
        ... except MalformedInputError as e:
        ...     print(e.diagnostic)
        1:bracket or paren not closed (1 open)

    """

    def __init__(self, message: str, line: int = 1) -> None:
        """Initialize MalformedInputError with message and line number.

        Args:
            message: Human-readable error message (without line prefix).
            line: 1-based line number in the original input.

        """
        super().__init__(message)
        self.message = message
        self.line = line

    @property
    def diagnostic(self) -> str:
        """Return the error in the uniform "line:message" shape."""
        return f"{self.line}:{self.message}"


class NewlineInStringError(MalformedInputError):
    """Raw newline inside a single- or double-quoted literal.

    Go only allows embedded newlines in backtick raw strings.
    """

    pass


class UnclosedBracketError(MalformedInputError):
    """Bracket or paren still open after the last line.

    Attributes:
        line: Line where the outermost still-open block was opened.
        depth: Number of blocks left open.

    """

    def __init__(self, line: int, depth: int) -> None:
        """Initialize UnclosedBracketError.

        Args:
            line: Line where the outermost open block started.
            depth: Number of unclosed brackets/parens.

        """
        super().__init__(f"bracket or paren not closed ({depth} open)", line=line)
        self.depth = depth


class ToolchainError(GoEvalError):
    """External toolchain execution error.

    Raised when:
    - The toolchain executable is not found (FileNotFoundError)
    - Permission denied executing the toolchain
    - The program file cannot be written
    """

    pass


class ToolchainTimeoutError(ToolchainError):
    """Toolchain run exceeded the configured timeout.

    Only raised when EvalConfig.timeout is set; by default a run is
    allowed to block until the subprocess exits.

    Attributes:
        partial_output: Output captured before the process was killed
            (empty string if none).

    """

    def __init__(self, message: str, partial_output: str = "") -> None:
        """Initialize ToolchainTimeoutError.

        Args:
            message: Error message describing the timeout.
            partial_output: Output captured before the timeout occurred.

        """
        super().__init__(message)
        self.partial_output = partial_output
