"""Parse options."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from shellquote.errors import InvalidOptionError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_ESCAPE = "\\"

# Characters that already have a role in the scanner
RESERVED_CHARS = frozenset(" \t\n\r\f\v'\"$#;&|<>(){}")


@dataclass(frozen=True)
class ParseOptions:
    """Options controlling how command lines are scanned.

    Attributes:
        escape: Character escaping the next character in unquoted and
            double-quoted text. Never special inside single quotes.
    """

    escape: str = DEFAULT_ESCAPE

    def __post_init__(self) -> None:
        """Validate the escape character."""
        if len(self.escape) != 1:
            msg = f"Escape must be a single character, got {self.escape!r}"
            raise InvalidOptionError(msg)
        if self.escape in RESERVED_CHARS:
            msg = f"Escape cannot be a special character: {self.escape!r}"
            raise InvalidOptionError(msg)

    @classmethod
    def from_mapping(cls, options: Mapping[str, str]) -> ParseOptions:
        """Build options from a plain mapping like ``{"escape": "^"}``."""
        known = {field.name for field in fields(cls)}
        if unknown := set(options) - known:
            msg = f"Unknown parse options: {', '.join(sorted(unknown))}"
            raise InvalidOptionError(msg)
        return cls(**options)


def get_options(
    options: ParseOptions | Mapping[str, str] | None,
) -> ParseOptions:
    """Normalize the options argument accepted by ``parse``."""
    if options is None:
        return ParseOptions()
    if isinstance(options, ParseOptions):
        return options
    return ParseOptions.from_mapping(options)
