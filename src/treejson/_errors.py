"""Error taxonomy and exception types shared by every parsing stage."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """
    Categorizes why a parse failed, independent of the message text.

    OK is the distinguished success value so that callers never need to
    inspect a message to learn whether parsing worked.
    """

    OK = "ok"
    EMPTY_INPUT = "empty_input"
    MISSING_TOP_LEVEL_CONTAINER = "missing_top_level_container"
    UNEXPECTED_SYMBOL = "unexpected_symbol"
    MISSING_VALUE = "missing_value"
    MISSING_SYMBOL = "missing_symbol"
    INVALID_LITERAL = "invalid_literal"
    INVALID_KEY = "invalid_key"
    INVALID_STRING = "invalid_string"
    TRAILING_COMMA = "trailing_comma"
    NESTING_TOO_DEEP = "nesting_too_deep"


@dataclass(frozen=True)
class ParseError:
    """
    Describes the first problem found in a document.

    Values of this type are returned, not raised, by the tokenizer and the
    grammar validator. A ParseError is falsy when it represents success.
    """

    kind: ErrorKind
    message: str
    line: int = 1
    column: int = 1

    def __post_init__(self) -> None:
        if self.line < 1 or self.column < 1:
            raise ValueError("line and column are 1-based")

    @classmethod
    def ok(cls) -> "ParseError":
        """Returns the success value."""
        return cls(ErrorKind.OK, "No errors found")

    @property
    def is_ok(self) -> bool:
        return self.kind is ErrorKind.OK

    def __bool__(self) -> bool:
        return not self.is_ok

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, column {self.column}"


class JSONParseError(ValueError):
    """
    Raised by the parse entry points when a document is rejected.

    Wraps the ParseError so the taxonomy, message and line/column position
    survive the trip through the exception.
    """

    def __init__(self, error: ParseError) -> None:
        if error.is_ok:
            raise ValueError("cannot raise a successful ParseError")

        self.error = error
        self.kind = error.kind
        self.msg = error.message
        self.lineno = error.line
        self.colno = error.column

        super().__init__(str(error))


class ValueTypeError(TypeError):
    """Raised when a value is accessed as a kind it does not hold."""


class SourceOpenError(OSError):
    """Raised when a byte source cannot be opened for reading or writing."""


class InternalParserError(RuntimeError):
    """
    Signals a broken invariant inside the parser.

    Only raised when a literal that passed grammar validation cannot be
    converted, which means the validator and builder disagree.
    """
