"""Shorthand print aliases.

``p a, b`` pretty-prints each argument and ``t a, b`` prints the type of
each argument. Both are rewritten to calls of helpers emitted by the
assembler. A line is only rewritten when the alias is the first word
and the rest does not look like an assignment or call (``p := 10``,
``p (100)``), so variables named ``p`` or ``t`` keep working.
"""

import re

from goeval.source.assembler import PRINT_HELPER, TYPE_HELPER

_PRINT_ALIAS = re.compile(r"^[ \t]*p +([^\s=:(].*)$", re.MULTILINE)
_TYPE_ALIAS = re.compile(r"^[ \t]*t +([^\s=:(].*)$", re.MULTILINE)


def expand_aliases(code: str) -> str:
    """Rewrite ``p``/``t`` alias lines into helper calls.

    Args:
        code: Snippet source.

    Returns:
        Source with alias lines replaced, line count unchanged.

    Example:
        >>> expand_aliases('p "hi", 42')
        '__p("hi", 42)'

    """
    code = _PRINT_ALIAS.sub(lambda m: f"{PRINT_HELPER}({m.group(1)})", code)
    return _TYPE_ALIAS.sub(lambda m: f"{TYPE_HELPER}({m.group(1)})", code)
