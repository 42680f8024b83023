"""Assemble scanned fragments into tokens."""

from __future__ import annotations

import re
import typing

from shellquote.environment import SubstitutedOperator
from shellquote.scanner import (
    CommentSpan,
    Kind,
    Literal,
    OperatorSpan,
    Separator,
)
from shellquote.tokens import Comment, Glob, Operator, Word

if typing.TYPE_CHECKING:
    from collections.abc import Iterable

    from shellquote.environment import ResolvedFragment
    from shellquote.tokens import Token

GLOB_REGEX = re.compile(
    r"""[*?]        # Wildcards
        |\[.+\]     # Bracket expression, at least one character inside
    """,
    re.VERBOSE + re.DOTALL,
)

# Stands for characters that cannot take part in a glob pattern
MASK_CHAR = "\0"


def classify_word(parts: list[Literal]) -> Word | Glob:
    """Make a Word, or a Glob if unquoted wildcards are present.

    Any quoted part disables glob classification for the whole word. Escaped
    and substituted characters never count as wildcards.
    """
    text = "".join(part.text for part in parts)
    if any(part.kind == Kind.QUOTED for part in parts):
        return Word(text)
    mask = "".join(
        part.text if part.kind == Kind.BARE else MASK_CHAR * len(part.text)
        for part in parts
    )
    if GLOB_REGEX.search(mask):
        return Glob(text)
    return Word(text)


class TokenAssembler:
    """Merge adjacent literal fragments into words."""

    def __init__(self) -> None:
        """Initialize the assembler."""
        self.tokens: list[Token] = []
        self.parts: list[Literal] = []
        # Set after an injected operator, empty words are dropped around it
        self.split = False

    def feed(self, fragment: ResolvedFragment) -> None:
        """Process one fragment."""
        match fragment:
            case Literal():
                self.parts.append(fragment)
            case Separator():
                self._finish_word()
                self.split = False
            case OperatorSpan(op):
                self._finish_word()
                self.split = False
                self.tokens.append(Operator(op))
            case SubstitutedOperator(op):
                self.split = True
                self._finish_word()
                self.tokens.append(Operator(op))
            case CommentSpan(text):
                self._finish_word()
                self.tokens.append(Comment(text))
            case _:
                typing.assert_never(fragment)

    def finish(self) -> list[Token]:
        """Flush the last word and return all tokens."""
        self._finish_word()
        return self.tokens

    def _finish_word(self) -> None:
        if not self.parts:
            return
        word = classify_word(self.parts)
        self.parts = []
        if self.split and isinstance(word, Word) and not word.value:
            return
        self.tokens.append(word)


def assemble(
    fragments: Iterable[ResolvedFragment],
) -> list[Token]:
    """Turn resolved fragments into the final token sequence."""
    assembler = TokenAssembler()
    for fragment in fragments:
        assembler.feed(fragment)
    return assembler.finish()
