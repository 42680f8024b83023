"""Errors raised while parsing command lines."""

from rich.markup import escape


class ShellSyntaxError(ValueError):
    """Malformed command line, detected while scanning."""

    def __init__(self, message: str, command: str, position: int) -> None:
        """Initialize with the command text and offending position."""
        self.message = message
        self.command = command
        self.position = position
        super().__init__(f"{message} at position {position}: {command!r}")

    def __rich__(self) -> str:
        """Rich formatted error message."""
        return (
            f"{escape(self.message)}\n"
            f"[bold]Input:[/] {escape(self.command)}\n"
            f"       {' ' * self.position}[bold]^"
        )


class UnterminatedQuoteError(ShellSyntaxError):
    """Quote opened but never closed."""

    def __init__(self, command: str, position: int) -> None:
        """Initialize with the position of the opening quote."""
        quote = command[position]
        super().__init__(f"Unterminated {quote} quote", command, position)


class BadSubstitutionError(ShellSyntaxError):
    """Malformed ``${...}`` variable reference."""

    def __init__(self, command: str, position: int) -> None:
        """Initialize with the position of the ``$``."""
        super().__init__("Bad substitution", command, position)


class InvalidOptionError(ValueError):
    """Invalid parse option."""
