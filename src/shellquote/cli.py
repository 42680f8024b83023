"""Shellquote command line interface.

Parse a command line into JSON tokens, or quote words into a command line
that a POSIX shell splits back into the same words.
"""

import json
import os
import sys

import typer
from rich.markup import escape

from shellquote.config import DEFAULT_ESCAPE, ParseOptions
from shellquote.console import print_error, set_trace, set_verbose
from shellquote.errors import InvalidOptionError, ShellSyntaxError
from shellquote.parser import parse
from shellquote.quoting import quote
from shellquote.tokens import token_to_json

app = typer.Typer()


# ruff: noqa: FBT001 FBT003 Typer API uses boolean arguments for flags
# ruff: noqa: B008 function-call-in-default-argument

ESCAPE_ENVVAR = "SHELLQUOTE_ESCAPE"


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show verbose output"
    ),
    trace: bool = typer.Option(
        False, "--trace", help="Show scanner state transitions"
    ),
) -> None:
    """Shellquote: parse and quote shell command lines."""
    if trace:
        set_trace()
    elif verbose:
        set_verbose()


@app.command("parse")
def parse_command(
    command: str = typer.Argument(help="Command line to parse"),
    env: list[str] | None = typer.Option(
        None, "-e", "--env", help="Variable definition, NAME=VALUE"
    ),
    inherit_env: bool = typer.Option(
        False,
        "--inherit-env",
        help="Substitute variables from the process environment",
    ),
    escape_char: str = typer.Option(
        DEFAULT_ESCAPE,
        "--escape",
        envvar=ESCAPE_ENVVAR,
        help="Escape character",
    ),
) -> None:
    """Parse a command line, print one JSON token per line."""
    variables = _build_environment(env or [], inherit_env=inherit_env)
    try:
        options = ParseOptions(escape=escape_char)
    except InvalidOptionError as error:
        print_error(None, escape(str(error)))
        raise typer.Exit(1) from error
    try:
        tokens = parse(command, variables, options)
    except ShellSyntaxError as error:
        print_error(None, error)
        raise typer.Exit(1) from error
    for token in tokens:
        sys.stdout.write(json.dumps(token_to_json(token)) + "\n")


@app.command("quote")
def quote_command(
    words: list[str] = typer.Argument(default_factory=list),
) -> None:
    """Quote words into a single command line."""
    sys.stdout.write(quote(words) + "\n")


def _build_environment(
    definitions: list[str], *, inherit_env: bool
) -> dict[str, str]:
    """Build the variable mapping from --env options."""
    variables = dict(os.environ) if inherit_env else {}
    for definition in definitions:
        name, sep, value = definition.partition("=")
        if not sep or not name:
            msg = f"Invalid variable definition: {definition!r}"
            print_error(None, escape(msg))
            raise typer.Exit(1)
        variables[name] = value
    return variables
