"""Scanner for shell command lines.

The scanner reads the command line once, left to right, and splits it into
raw fragments: literal text spans, variable references, operators, word
separators and a trailing comment. It is a finite state automaton: the
(state, character class) pair selects an action from ``TRANSITIONS``, and
actions are the only place where the state changes.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from enum import Enum, auto

from shellquote.console import print_trace
from shellquote.errors import BadSubstitutionError, UnterminatedQuoteError

if typing.TYPE_CHECKING:
    from collections.abc import Callable


class State(Enum):
    """Scanner states."""

    NORMAL = auto()
    SINGLE_QUOTE = auto()
    DOUBLE_QUOTE = auto()
    COMMENT = auto()
    VARIABLE_BRACE = auto()


class CharClass(Enum):
    """Character classes driving scanner transitions."""

    BLANK = auto()
    ESCAPE = auto()
    SINGLE_QUOTE = auto()
    DOUBLE_QUOTE = auto()
    HASH = auto()
    DOLLAR = auto()
    OPERATOR = auto()
    CLOSE_BRACE = auto()
    OTHER = auto()


class Action(Enum):
    """Scanner actions, selected by the transition table."""

    LITERAL = auto()
    SEPARATE = auto()
    ESCAPE = auto()
    ESCAPE_QUOTED = auto()
    OPEN_SINGLE = auto()
    OPEN_DOUBLE = auto()
    CLOSE_QUOTE = auto()
    OPEN_COMMENT = auto()
    COMMENT_TEXT = auto()
    EXPAND = auto()
    VARIABLE_NAME = auto()
    CLOSE_BRACE = auto()
    OPERATOR = auto()


class Kind(Enum):
    """Origin of literal text, glob classification depends on it."""

    BARE = auto()
    ESCAPED = auto()
    QUOTED = auto()
    SUBSTITUTED = auto()


@dataclass(frozen=True)
class Literal:
    """Span of literal word text."""

    text: str
    kind: Kind


@dataclass(frozen=True)
class Variable:
    """Variable reference, ``$NAME``, ``${NAME}`` or ``$?``."""

    name: str
    quoted: bool


@dataclass(frozen=True)
class OperatorSpan:
    """Control operator."""

    op: str


@dataclass(frozen=True)
class Separator:
    """Word boundary (whitespace)."""


@dataclass(frozen=True)
class CommentSpan:
    """Comment text, up to the end of input."""

    text: str


type Fragment = Literal | Variable | OperatorSpan | Separator | CommentSpan


BLANK_CHARS = " \t\n\r\f\v"
OPERATOR_CHARS = ";&|<>()"

# Longest first, so the first match is the longest one
OPERATORS = tuple(
    sorted(
        [";;", "|&", "&&", "||", ">>", ">&", "<(", *OPERATOR_CHARS],
        key=len,
        reverse=True,
    )
)

SPECIAL_PARAMETERS = frozenset("*@#?-$!0_")

CHAR_CLASSES: dict[str, CharClass] = {
    **dict.fromkeys(BLANK_CHARS, CharClass.BLANK),
    **dict.fromkeys(OPERATOR_CHARS, CharClass.OPERATOR),
    "'": CharClass.SINGLE_QUOTE,
    '"': CharClass.DOUBLE_QUOTE,
    "#": CharClass.HASH,
    "$": CharClass.DOLLAR,
    "}": CharClass.CLOSE_BRACE,
}

TRANSITIONS: dict[State, dict[CharClass, Action]] = {
    State.NORMAL: {
        CharClass.BLANK: Action.SEPARATE,
        CharClass.ESCAPE: Action.ESCAPE,
        CharClass.SINGLE_QUOTE: Action.OPEN_SINGLE,
        CharClass.DOUBLE_QUOTE: Action.OPEN_DOUBLE,
        CharClass.HASH: Action.OPEN_COMMENT,
        CharClass.DOLLAR: Action.EXPAND,
        CharClass.OPERATOR: Action.OPERATOR,
    },
    State.SINGLE_QUOTE: {
        CharClass.SINGLE_QUOTE: Action.CLOSE_QUOTE,
    },
    State.DOUBLE_QUOTE: {
        CharClass.DOUBLE_QUOTE: Action.CLOSE_QUOTE,
        CharClass.ESCAPE: Action.ESCAPE_QUOTED,
        CharClass.DOLLAR: Action.EXPAND,
    },
    State.COMMENT: {},
    State.VARIABLE_BRACE: {
        CharClass.CLOSE_BRACE: Action.CLOSE_BRACE,
    },
}

# Action for character classes missing from the state's transitions
DEFAULT_ACTIONS: dict[State, Action] = {
    State.NORMAL: Action.LITERAL,
    State.SINGLE_QUOTE: Action.LITERAL,
    State.DOUBLE_QUOTE: Action.LITERAL,
    State.COMMENT: Action.COMMENT_TEXT,
    State.VARIABLE_BRACE: Action.VARIABLE_NAME,
}


def is_name_char(char: str) -> bool:
    """Check if char can be part of a variable identifier."""
    return char == "_" or (char.isascii() and char.isalnum())


def is_valid_brace_name(name: str) -> bool:
    """Check the name between ``${`` and ``}``."""
    if len(name) == 1 and name in SPECIAL_PARAMETERS:
        return True
    return bool(name) and all(is_name_char(char) for char in name)


class Scanner:
    """State machine splitting a command line into fragments."""

    def __init__(self, command: str, escape_char: str = "\\") -> None:
        """Initialize the scanner for a single command line."""
        self.command = command
        self.escape_char = escape_char
        self.state = State.NORMAL
        self.pos = 0
        self.fragments: list[Fragment] = []
        self.buffer: list[str] = []
        self.buffer_kind = Kind.BARE
        self.quote_start = 0
        self.brace_start = 0
        self.brace_return = State.NORMAL
        self.name: list[str] = []
        self.comment: list[str] = []
        self._actions: dict[Action, Callable[[], None]] = {
            Action.LITERAL: self._literal,
            Action.SEPARATE: self._separate,
            Action.ESCAPE: self._escape,
            Action.ESCAPE_QUOTED: self._escape_quoted,
            Action.OPEN_SINGLE: self._open_single,
            Action.OPEN_DOUBLE: self._open_double,
            Action.CLOSE_QUOTE: self._close_quote,
            Action.OPEN_COMMENT: self._open_comment,
            Action.COMMENT_TEXT: self._comment_text,
            Action.EXPAND: self._expand,
            Action.VARIABLE_NAME: self._variable_name,
            Action.CLOSE_BRACE: self._close_brace,
            Action.OPERATOR: self._operator,
        }

    def scan(self) -> list[Fragment]:
        """Scan the whole command line and return its fragments.

        Raises:
            UnterminatedQuoteError: If a quote is still open at end of input
            BadSubstitutionError: If a ``${...}`` reference is malformed
        """
        while self.pos < len(self.command):
            char_class = self._classify(self.command[self.pos])
            action = TRANSITIONS[self.state].get(
                char_class, DEFAULT_ACTIONS[self.state]
            )
            self._actions[action]()
        self._finish()
        return self.fragments

    def _classify(self, char: str) -> CharClass:
        # The escape character is configurable, so it takes precedence
        if char == self.escape_char:
            return CharClass.ESCAPE
        return CHAR_CLASSES.get(char, CharClass.OTHER)

    def _set_state(self, state: State) -> None:
        print_trace("   ", self.state.name, "->", state.name, "at", self.pos)
        self.state = state

    def _append(self, text: str, kind: Kind) -> None:
        if self.buffer and kind != self.buffer_kind:
            self._flush()
        self.buffer_kind = kind
        self.buffer.append(text)

    def _flush(self, *, empty: Kind | None = None) -> None:
        """Emit buffered text, or an empty literal of kind ``empty``."""
        if self.buffer:
            text = "".join(self.buffer)
            self.fragments.append(Literal(text, self.buffer_kind))
            self.buffer.clear()
        elif empty is not None:
            self.fragments.append(Literal("", empty))

    def _literal(self) -> None:
        kind = Kind.BARE if self.state == State.NORMAL else Kind.QUOTED
        self._append(self.command[self.pos], kind)
        self.pos += 1

    def _separate(self) -> None:
        self._flush()
        if self.fragments and not isinstance(self.fragments[-1], Separator):
            self.fragments.append(Separator())
        self.pos += 1

    def _escape(self) -> None:
        if self.pos + 1 == len(self.command):
            # Nothing left to escape, keep the escape character itself
            self._append(self.escape_char, Kind.ESCAPED)
            self.pos += 1
            return
        self._append(self.command[self.pos + 1], Kind.ESCAPED)
        self.pos += 2

    def _escape_quoted(self) -> None:
        next_char = self.command[self.pos + 1 : self.pos + 2]
        if next_char and next_char in ('"', "$", "`", self.escape_char):
            self._append(next_char, Kind.QUOTED)
            self.pos += 2
        else:
            self._append(self.escape_char, Kind.QUOTED)
            self.pos += 1

    def _open_single(self) -> None:
        self._open_quote(State.SINGLE_QUOTE)

    def _open_double(self) -> None:
        self._open_quote(State.DOUBLE_QUOTE)

    def _open_quote(self, state: State) -> None:
        self._flush()
        self.quote_start = self.pos
        self._set_state(state)
        self.pos += 1

    def _close_quote(self) -> None:
        # "" still makes a word
        self._flush(empty=Kind.QUOTED)
        self._set_state(State.NORMAL)
        self.pos += 1

    def _open_comment(self) -> None:
        self._flush()
        self._set_state(State.COMMENT)
        self.pos += 1

    def _comment_text(self) -> None:
        self.comment.append(self.command[self.pos])
        self.pos += 1

    def _expand(self) -> None:
        start = self.pos
        quoted = self.state == State.DOUBLE_QUOTE
        next_char = self.command[start + 1 : start + 2]
        if next_char == "{":
            self.brace_start = start
            self.brace_return = self.state
            self.name.clear()
            self._set_state(State.VARIABLE_BRACE)
            self.pos = start + 2
            return

        end = start + 1
        while end < len(self.command) and is_name_char(self.command[end]):
            end += 1
        if end > start + 1:
            self._variable(self.command[start + 1 : end], quoted=quoted)
            self.pos = end
        elif next_char and next_char in SPECIAL_PARAMETERS:
            self._variable(next_char, quoted=quoted)
            self.pos = start + 2
        else:
            # Not a variable reference: a literal dollar sign
            self._literal()

    def _variable_name(self) -> None:
        self.name.append(self.command[self.pos])
        self.pos += 1

    def _close_brace(self) -> None:
        name = "".join(self.name)
        if not is_valid_brace_name(name):
            raise BadSubstitutionError(self.command, self.brace_start)
        self._set_state(self.brace_return)
        self.pos += 1
        self._variable(name, quoted=self.state == State.DOUBLE_QUOTE)

    def _variable(self, name: str, *, quoted: bool) -> None:
        self._flush()
        self.fragments.append(Variable(name, quoted))

    def _operator(self) -> None:
        op = next(
            op for op in OPERATORS if self.command.startswith(op, self.pos)
        )
        self._flush()
        self.fragments.append(OperatorSpan(op))
        self.pos += len(op)

    def _finish(self) -> None:
        match self.state:
            case State.SINGLE_QUOTE | State.DOUBLE_QUOTE:
                raise UnterminatedQuoteError(self.command, self.quote_start)
            case State.VARIABLE_BRACE:
                raise BadSubstitutionError(self.command, self.brace_start)
            case State.COMMENT:
                text = "".join(self.comment).strip()
                self.fragments.append(CommentSpan(text))
            case State.NORMAL:
                self._flush()


def scan(command: str, escape_char: str = "\\") -> list[Fragment]:
    """Split a command line into raw fragments."""
    return Scanner(command, escape_char).scan()
