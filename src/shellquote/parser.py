"""Parser for shell command lines.

Splits a command line into words, operators, globs and a trailing comment,
honoring quotes, escapes and variable substitution. With PATTERN set to
"a b", ``cat *.txt | grep -v $PATTERN`` parses to:

    Word("cat"), Glob("*.txt"), Operator("|"), Word("grep"), Word("-v"),
    Word("a b")
"""

from __future__ import annotations

import typing

from rich.markup import escape

from shellquote.assembler import assemble
from shellquote.config import get_options
from shellquote.console import print_trace, print_verbose
from shellquote.environment import substitute
from shellquote.scanner import scan

if typing.TYPE_CHECKING:
    from collections.abc import Mapping

    from shellquote.config import ParseOptions
    from shellquote.environment import Environment
    from shellquote.tokens import Token


def parse(
    command: str,
    env: Environment | None = None,
    options: ParseOptions | Mapping[str, str] | None = None,
) -> list[Token]:
    """Parse a command line into tokens.

    Args:
        command: Command line text
        env: Mapping or function supplying variable values. A function may
            return an Operator to inject an operator token. Without env,
            variable references are removed.
        options: ParseOptions or a mapping like ``{"escape": "^"}``

    Returns:
        Tokens in input order. A Comment, if any, is the last token.

    Raises:
        UnterminatedQuoteError: If a quote is not closed
        BadSubstitutionError: If a ``${...}`` reference is malformed
        InvalidOptionError: If options are invalid
    """
    config = get_options(options)
    print_verbose("parse:", escape(repr(command)))
    fragments = scan(command, config.escape)
    print_trace("    fragments:", len(fragments))
    tokens = assemble(substitute(fragments, env))
    print_verbose("  tokens:", len(tokens))
    return tokens
