"""
Recursive-descent grammar check over a token sequence.

The validator builds nothing. It walks the tokens once, left to right, and
reports the first violation it meets:

    Value  := Object | Array | String | Literal
    Object := '{' ( Pair (',' Pair)* )? '}'
    Pair   := String ':' Value
    Array  := '[' ( Value (',' Value)* )? ']'
    String := Quote Literal? Quote
"""

import re
from collections.abc import Sequence

from ._config import DEFAULT_MAX_DEPTH
from ._errors import ErrorKind
from ._errors import ParseError
from ._profiling import ProfileContext
from ._tokenizer import Token
from ._tokenizer import TokenKind

_NUMBER_PATTERN = re.compile(
    r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
)
_KEYWORDS = frozenset({"true", "false", "null"})
_CONTAINER_OPENERS = (TokenKind.OBJECT_OPEN, TokenKind.ARRAY_OPEN)


def is_number_literal(text: str) -> bool:
    """Checks text against the strict JSON number grammar."""
    return _NUMBER_PATTERN.fullmatch(text) is not None


def is_valid_literal(text: str) -> bool:
    """Checks a bare (unquoted) literal: a keyword or a JSON number."""
    return text in _KEYWORDS or is_number_literal(text)


class _GrammarViolation(Exception):
    """Unwinds the recursive descent carrying the first error found."""

    def __init__(self, error: ParseError) -> None:
        super().__init__(error.message)
        self.error = error


class _GrammarValidator:
    """Walks the token sequence with one token of lookahead."""

    def __init__(self, tokens: Sequence[Token], max_depth: int):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    def peek(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def violation(
        self, kind: ErrorKind, message: str, token: Token | None = None
    ) -> _GrammarViolation:
        """Builds an error at token, or at the last token if input ran out."""
        where = token if token is not None else self.tokens[-1]
        return _GrammarViolation(
            ParseError(kind, message, where.line, where.column)
        )

    def enter_container(self) -> None:
        """Consumes an opening bracket, enforcing the nesting limit."""
        token = self.tokens[self.pos]
        self.depth += 1
        if self.depth > self.max_depth:
            raise self.violation(
                ErrorKind.NESTING_TOO_DEEP,
                f"Maximum nesting depth of {self.max_depth} exceeded",
                token,
            )
        self.pos += 1

    def leave_container(self) -> None:
        self.depth -= 1
        self.pos += 1

    def validate_document(self) -> None:
        if not self.tokens:
            raise _GrammarViolation(
                ParseError(ErrorKind.EMPTY_INPUT, "Empty JSON input")
            )

        first = self.tokens[0]
        if first.kind not in _CONTAINER_OPENERS:
            raise self.violation(
                ErrorKind.MISSING_TOP_LEVEL_CONTAINER,
                "A JSON document must be an object or an array",
                first,
            )

        self.validate_value()

        extra = self.peek()
        if extra is not None:
            raise self.violation(
                ErrorKind.UNEXPECTED_SYMBOL,
                "Extra data after root value",
                extra,
            )

    def validate_value(self) -> None:
        token = self.peek()
        if token is None:
            raise self.violation(ErrorKind.MISSING_VALUE, "Expecting value")

        if token.kind is TokenKind.LITERAL:
            if not is_valid_literal(token.value):
                raise self.violation(
                    ErrorKind.INVALID_LITERAL,
                    f"Invalid literal: '{token.value}'",
                    token,
                )
            self.pos += 1
        elif token.kind is TokenKind.QUOTE:
            self.validate_string(ErrorKind.INVALID_STRING)
        elif token.kind is TokenKind.OBJECT_OPEN:
            self.validate_object()
        elif token.kind is TokenKind.ARRAY_OPEN:
            self.validate_array()
        elif token.kind is TokenKind.COLON:
            raise self.violation(
                ErrorKind.UNEXPECTED_SYMBOL,
                "Unexpected ':' where a value was expected",
                token,
            )
        else:
            raise self.violation(
                ErrorKind.MISSING_VALUE, "Expecting value", token
            )

    def validate_string(self, kind: ErrorKind) -> None:
        """Consumes Quote Literal? Quote, reporting problems as kind."""
        self.pos += 1
        token = self.peek()
        if token is not None and token.kind is TokenKind.LITERAL:
            self.pos += 1
            token = self.peek()

        if token is None:
            raise self.violation(kind, "Unterminated string literal")
        if token.kind is not TokenKind.QUOTE:
            raise self.violation(kind, "Malformed string literal", token)
        self.pos += 1

    def validate_key(self) -> None:
        token = self.peek()
        if token is None:
            raise self.violation(
                ErrorKind.MISSING_SYMBOL, "Missing closing '}' for object"
            )
        if token.kind is not TokenKind.QUOTE:
            raise self.violation(
                ErrorKind.INVALID_KEY,
                "Expecting property name enclosed in double quotes",
                token,
            )
        self.validate_string(ErrorKind.INVALID_KEY)

    def validate_object(self) -> None:
        self.enter_container()
        token = self.peek()
        if token is not None and token.kind is TokenKind.OBJECT_CLOSE:
            self.leave_container()
            return

        while True:
            self.validate_key()

            token = self.peek()
            if token is None or token.kind is not TokenKind.COLON:
                raise self.violation(
                    ErrorKind.MISSING_SYMBOL, "Expecting ':' after key", token
                )
            self.pos += 1

            self.validate_value()

            if not self._continues(TokenKind.OBJECT_CLOSE, "object"):
                return

    def validate_array(self) -> None:
        self.enter_container()
        token = self.peek()
        if token is None:
            raise self.violation(
                ErrorKind.MISSING_SYMBOL, "Missing closing ']' for array"
            )
        if token.kind is TokenKind.ARRAY_CLOSE:
            self.leave_container()
            return

        while True:
            self.validate_value()

            if not self._continues(TokenKind.ARRAY_CLOSE, "array"):
                return

    def _continues(self, close: TokenKind, container: str) -> bool:
        """
        Handles the token after an element.

        Returns True after a comma (more elements follow) and False after the
        closing bracket.
        """
        token = self.peek()
        if token is None:
            raise self.violation(
                ErrorKind.MISSING_SYMBOL,
                f"Missing closing '{close.value}' for {container}",
            )

        if token.kind is close:
            self.leave_container()
            return False

        if token.kind is TokenKind.COMMA:
            self.pos += 1
            following = self.peek()
            if following is None:
                raise self.violation(
                    ErrorKind.MISSING_SYMBOL,
                    f"Missing closing '{close.value}' for {container}",
                )
            if following.kind is close:
                raise self.violation(
                    ErrorKind.TRAILING_COMMA,
                    f"Illegal trailing comma before end of {container}",
                    token,
                )
            return True

        raise self.violation(
            ErrorKind.UNEXPECTED_SYMBOL,
            f"Expecting ',' or '{close.value}' in {container}",
            token,
        )


def validate(
    tokens: Sequence[Token], max_depth: int = DEFAULT_MAX_DEPTH
) -> ParseError:
    """
    Checks that tokens form exactly one JSON object or array.

    Returns ParseError.ok() on success, otherwise the first violation found
    in a left-to-right scan. Containers nested more than max_depth levels
    deep are rejected as NESTING_TOO_DEEP. A limit set higher than the
    interpreter's recursion limit allows is reported the same way, at the
    token where the descent ran out of stack.
    """
    validator = _GrammarValidator(tokens, max_depth)
    with ProfileContext("validate", len(tokens)) as profile:
        try:
            validator.validate_document()
            error = ParseError.ok()
        except _GrammarViolation as violation:
            error = violation.error
        except RecursionError:
            where = validator.peek() or tokens[-1]
            error = ParseError(
                ErrorKind.NESTING_TOO_DEEP,
                f"Nesting depth {validator.depth} exceeds the recursion limit",
                where.line,
                where.column,
            )
        profile.record(failed=bool(error))
    return error
