"""Shell quoting, the inverse of parse."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rich.markup import escape

from shellquote.console import print_verbose
from shellquote.tokens import Comment, Glob, Operator, Word

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


type Quotable = (
    str | int | float | bool | None | Word | Operator | Glob | Comment
)


# Whitespace, quotes, backslash, and characters special to the parser or to
# POSIX shells. A leading "~" triggers tilde expansion.
SPECIAL_REGEX = re.compile(r"""[\s'"\\#(){}*?|\[\]!;<>&$`]|^~""")
# Characters escaped one by one, when the word is not wrapped in quotes
ESCAPE_REGEX = re.compile(r"""[\\#(){}*?|\[\]!;<>&$`]|^~""")
# Glob patterns keep "*?[]" active, everything else is escaped
GLOB_ESCAPE_REGEX = re.compile(r"""[\s'"\\#(){}|!;<>&$`]|^~""")
# Special inside double quotes
DOUBLE_QUOTED_CHARS = '\\"$`'


class CommentNotLastError(ValueError):
    """Comment followed by other values."""

    def __init__(self) -> None:  # noqa: D107
        super().__init__("A comment must be the last value")


def quote(values: Iterable[Quotable]) -> str:
    """Shell quote values and join in a single command string."""
    command = " ".join(quote_words(values))
    print_verbose("quote:", escape(repr(command)))
    return command


def quote_words(values: Iterable[Quotable]) -> Iterator[str]:
    """Shell quote values and yield each quoted word.

    Raises:
        CommentNotLastError: If a Comment is followed by another value
    """
    commented = False
    for value in values:
        if commented:
            raise CommentNotLastError
        match value:
            case str():
                yield quote_word(value)
            case Word(text):
                yield quote_word(text)
            case Operator(op):
                # Operators are always defanged
                yield _escape_chars(op)
            case Glob(pattern):
                yield GLOB_ESCAPE_REGEX.sub(r"\\\g<0>", pattern)
            case Comment(text):
                commented = True
                yield f"# {text}" if text else "#"
            case _:
                yield str(value)


def quote_word(word: str) -> str:
    """Quote a single word so that parse returns it unchanged."""
    if not word:
        return "''"
    if not SPECIAL_REGEX.search(word):
        return word
    if "'" in word:
        for char in DOUBLE_QUOTED_CHARS:
            word = word.replace(char, "\\" + char)
        return f'"{word}"'
    if re.search(r'[\s"]', word):
        # Single quotes suppress all special meaning
        return f"'{word}'"
    return ESCAPE_REGEX.sub(r"\\\g<0>", word)


def _escape_chars(text: str) -> str:
    return "".join("\\" + char for char in text)
