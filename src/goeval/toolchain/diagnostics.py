"""Go compiler diagnostics: reformatting and import-error classification.

Both halves depend on the exact wording of go's output, which has
changed across releases. Each recognised shape is listed explicitly.
"""

from __future__ import annotations

import re

from goeval.toolchain.base import DiagnosticClassifier

# Package banner printed before compile errors; carries no information
BANNER_PREFIX = "# command-line-arguments"

# Location prefixes:
#   :12[/tmp/goeval_main.go:40]: msg   (old gc, //line-mapped)
#   :12:5: msg                         (//line :N with empty filename)
#   ./goeval_main.go:12:5: msg
#   goeval_main.go:12: msg
_LOCATION_PATTERN = re.compile(
    r"^(?P<file>[^\s:]*):(?P<line>\d+)(?:\[[^\]]*\])?(?::\d+)?:\s?(?P<message>.*)$"
)

_IMPORT_ERROR_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?m)(\w+) redeclared as imported package name"),
    re.compile(r'(?m)imported and not used: "([\w/.]+)"'),
    # go 1.20+ wording
    re.compile(r'(?m)"([\w/.]+)" imported (?:as \w+ )?and not used'),
    re.compile(r"(?m)\b(\w+) redeclared in this block"),
)


def translate_diagnostics(raw: str) -> str:
    """Reformat compiler output into newline-joined "line:message" lines.

    Drops the package banner and blank lines. Lines without a
    recognisable location pass through unchanged.

    Args:
        raw: Combined compiler/runtime output.

    Returns:
        Translated diagnostics.

    Example:
        >>> translate_diagnostics("# command-line-arguments\\n:3:2: undefined: x\\n")
        '3:undefined: x'

    """
    translated: list[str] = []
    for line in raw.splitlines():
        if not line.strip() or line.startswith(BANNER_PREFIX):
            continue
        match = _LOCATION_PATTERN.match(line)
        if match:
            translated.append(f"{match.group('line')}:{match.group('message')}")
        else:
            translated.append(line)
    return "\n".join(translated)


class GoDiagnosticClassifier(DiagnosticClassifier):
    """Finds unused or shadowed imports in go build output."""

    def implicated_packages(self, diagnostics: str) -> set[str]:
        names: set[str] = set()
        for pattern in _IMPORT_ERROR_PATTERNS:
            names.update(match.group(1) for match in pattern.finditer(diagnostics))
        return names
