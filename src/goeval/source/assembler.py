"""Assemble partitioned snippet text into one compilable Go file."""

from __future__ import annotations

import re
from collections.abc import Iterable

# Always-needed import: the print helpers below use it
FORMAT_PACKAGE = "fmt"

PRINT_HELPER = "__p"
TYPE_HELPER = "__t"

_PACKAGE_CLAUSE = re.compile(r"^\s*package ")

_PROGRAM_TEMPLATE = """package main

{imports}
{top_level}
func main() {{
{body}
}}

func {print_helper}(values ...interface{{}}) {{
	for _, v := range values {{
		fmt.Printf("%+v\\n", v)
	}}
}}

func {type_helper}(values ...interface{{}}) {{
	for _, v := range values {{
		fmt.Printf("%T\\n", v)
	}}
}}
"""


def has_package_clause(code: str) -> bool:
    """Return True if the code is already a complete file.

    Such input is compiled as-is: no alias expansion, no reordering.
    """
    return _PACKAGE_CLAUSE.match(code) is not None


def assemble_program(top_level: str, body: str, imports: Iterable[str]) -> str:
    """Build a complete main package around partitioned snippet text.

    Args:
        top_level: Declarations placed before main (verbatim).
        body: Statements placed inside main (verbatim).
        imports: Canonical import paths; emitted sorted, one clause each.

    Returns:
        Go source for a complete program.

    """
    import_clauses = "".join(f'import "{path}"\n' for path in sorted(set(imports)))
    return _PROGRAM_TEMPLATE.format(
        imports=import_clauses,
        top_level=top_level,
        body=body,
        print_helper=PRINT_HELPER,
        type_helper=TYPE_HELPER,
    )
