"""Shared console instance for shellquote diagnostics."""

from typing import Any

from rich.console import Console

_console = Console(soft_wrap=True, stderr=True)
_verbose = False
_trace = False


def set_verbose() -> None:
    """Turn on verbose mode.

    Note: Tests use the console_out fixture to clear flags between tests.
    """
    global _verbose  # noqa: PLW0603
    _verbose = True


def set_trace() -> None:
    """Turn on trace mode, which implies verbose mode."""
    global _trace  # noqa: PLW0603
    _trace = True
    set_verbose()


def is_verbose() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose


def is_trace() -> bool:
    """Check if trace mode is enabled."""
    return _trace


def print_verbose(*args: Any) -> None:  # noqa: ANN401
    """Print general verbose messages."""
    if _verbose:
        _console.print(*args, style="dim")
        _console.file.flush()


def print_trace(*args: Any) -> None:  # noqa: ANN401
    """Print trace messages (extra verbose)."""
    if _trace:
        _console.print(*args, style="dim")
        _console.file.flush()


def print_error(title: str | None, *args: Any) -> None:  # noqa: ANN401
    """Print an error message."""
    title = title or "Error:"
    _console.print(f"[bold]{title}", *args, style="red")
    _console.file.flush()
