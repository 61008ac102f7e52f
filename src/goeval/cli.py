"""goeval command-line entry point.

Usage:
    goeval 'p strings.ToUpper("hi")'
    echo 'println(200*300)' | goeval
    goeval --emit 'x := 1; p x'
"""

import logging

import typer

from goeval.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SIGINT,
    _error,
    _setup_logging,
    read_stdin,
)
from goeval.core.config import resolve_config
from goeval.core.exceptions import ConfigError, MalformedInputError
from goeval.evaluator import build_program, evaluate

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="goeval",
    help="Compile and run a fragment of Go code.",
    add_completion=False,
)


@app.command()
def run(
    source: str | None = typer.Argument(
        None,
        help="Go snippet to evaluate. Read from stdin when omitted.",
        show_default=False,
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML config file (default: $GOEVAL_CONFIG)",
    ),
    emit: bool = typer.Option(
        False,
        "--emit",
        help="Print the assembled program instead of running it",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
) -> None:
    """Evaluate a Go snippet and print its output."""
    _setup_logging(verbose=verbose, quiet=quiet)

    try:
        eval_config = resolve_config(config)
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    try:
        code = source if source is not None else read_stdin()
    except KeyboardInterrupt:
        raise typer.Exit(code=EXIT_SIGINT) from None

    if emit:
        try:
            _, program = build_program(code)
        except MalformedInputError as e:
            typer.echo(e.diagnostic, err=True)
            raise typer.Exit(code=EXIT_ERROR) from None
        typer.echo(program, nl=False)
        return

    logger.debug("Evaluating %d chars with toolchain %s", len(code), eval_config.toolchain)
    result = evaluate(code, config=eval_config)
    if not result.ok:
        typer.echo(result.error, err=True)
        raise typer.Exit(code=EXIT_ERROR)
    typer.echo(result.output, nl=False)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
