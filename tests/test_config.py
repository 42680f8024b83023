"""Tests for parse options."""

import pytest

from shellquote.config import ParseOptions, get_options
from shellquote.errors import InvalidOptionError


def test_default_escape() -> None:
    """Backslash is the default escape character."""
    assert ParseOptions().escape == "\\"
    assert get_options(None) == ParseOptions()


def test_options_from_mapping() -> None:
    """A plain mapping is accepted."""
    assert get_options({"escape": "^"}) == ParseOptions(escape="^")
    assert get_options({}) == ParseOptions()


def test_options_instance_passthrough() -> None:
    """ParseOptions instances are used as is."""
    options = ParseOptions(escape="%")
    assert get_options(options) is options


@pytest.mark.parametrize(
    "escape", ["", "ab", " ", "'", '"', "$", "#", "|", "}"]
)
def test_invalid_escape(escape: str) -> None:
    """The escape must be one character without another role."""
    with pytest.raises(InvalidOptionError):
        ParseOptions(escape=escape)


def test_unknown_option() -> None:
    """Unknown keys are rejected."""
    with pytest.raises(InvalidOptionError, match="quote"):
        ParseOptions.from_mapping({"escape": "^", "quote": "'"})
