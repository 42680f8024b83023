"""Parse and quote shell command lines."""

from shellquote.config import ParseOptions
from shellquote.errors import (
    BadSubstitutionError,
    InvalidOptionError,
    ShellSyntaxError,
    UnterminatedQuoteError,
)
from shellquote.parser import parse
from shellquote.quoting import quote
from shellquote.tokens import Comment, Glob, Operator, Token, Word

__all__ = [
    "BadSubstitutionError",
    "Comment",
    "Glob",
    "InvalidOptionError",
    "Operator",
    "ParseOptions",
    "ShellSyntaxError",
    "Token",
    "UnterminatedQuoteError",
    "Word",
    "parse",
    "quote",
]
