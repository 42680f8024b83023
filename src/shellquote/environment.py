"""Variable substitution for scanned fragments."""

from __future__ import annotations

import typing
from dataclasses import dataclass

from rich.markup import escape

from shellquote.console import print_trace
from shellquote.scanner import Kind, Literal, Variable
from shellquote.tokens import Operator

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

    from shellquote.scanner import (
        CommentSpan,
        Fragment,
        OperatorSpan,
        Separator,
    )


type Resolver = Callable[[str], str | Operator | None]
type Environment = Mapping[str, str | Operator] | Resolver


@dataclass(frozen=True)
class TextSubstitution:
    """Variable value spliced into the current word."""

    text: str


@dataclass(frozen=True)
class OperatorSubstitution:
    """Operator injected in place of the variable reference."""

    op: str


type Substitution = TextSubstitution | OperatorSubstitution


@dataclass(frozen=True)
class SubstitutedOperator:
    """Fragment for an injected operator, splits the surrounding word."""

    op: str


# Fragments left once every variable reference is substituted
type ResolvedFragment = (
    Literal | OperatorSpan | Separator | CommentSpan | SubstitutedOperator
)


def resolve(name: str, env: Environment | None) -> Substitution:
    """Look up a variable in a mapping or resolver function.

    Unknown variables resolve to the empty string.

    Raises:
        TypeError: If the environment returns an unsupported value
    """
    if env is None:
        return TextSubstitution("")
    value = env(name) if callable(env) else env.get(name)
    match value:
        case None:
            return TextSubstitution("")
        case str():
            return TextSubstitution(value)
        case Operator(op):
            return OperatorSubstitution(op)
        case _:
            msg = f"Unsupported value for variable {name!r}: {value!r}"
            raise TypeError(msg)


def substitute(
    fragments: Iterable[Fragment], env: Environment | None
) -> Iterator[ResolvedFragment]:
    """Replace variable references with their values.

    Values are never scanned again: quotes, escapes and ``$`` in a value are
    literal text.
    """
    for fragment in fragments:
        if not isinstance(fragment, Variable):
            yield fragment
            continue
        substitution = resolve(fragment.name, env)
        print_trace("    $" + escape(fragment.name), "=", substitution)
        match substitution:
            case TextSubstitution(text):
                kind = Kind.QUOTED if fragment.quoted else Kind.SUBSTITUTED
                yield Literal(text, kind)
            case OperatorSubstitution(op):
                yield SubstitutedOperator(op)
