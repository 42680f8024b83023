"""Token model shared by the parser and the quoter."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Word:
    """A literal argument."""

    value: str


@dataclass(frozen=True)
class Operator:
    """A shell control operator such as ``;``, ``&&`` or ``<(``.

    Also used as the marker passed to ``quote``, and as the structured value
    an environment resolver returns to inject an operator mid-stream.
    """

    op: str


@dataclass(frozen=True)
class Comment:
    """Trailing comment text, always the last token of a parse."""

    text: str


@dataclass(frozen=True)
class Glob:
    """Unquoted word containing unescaped wildcard metacharacters."""

    pattern: str


type Token = Word | Operator | Comment | Glob


def token_to_json(token: Token) -> dict[str, str]:
    """Convert a token to a JSON-friendly mapping."""
    match token:
        case Word(value):
            return {"word": value}
        case Operator(op):
            return {"op": op}
        case Comment(text):
            return {"comment": text}
        case Glob(pattern):
            return {"op": "glob", "pattern": pattern}
