"""
Single-pass construction of a value tree from validated tokens.

Nesting is tracked with an explicit stack of open container frames rather
than recursion. Scalars are held back as a pending value until the comma or
closing bracket that ends them, since only then is it known that the value
is complete.
"""

import logging
from collections.abc import Sequence

from ._errors import InternalParserError
from ._profiling import ProfileContext
from ._tokenizer import Token
from ._tokenizer import TokenKind
from ._validator import is_number_literal
from ._value import Kind
from ._value import Value

logger = logging.getLogger(__name__)

_SCALAR_ENDS = (TokenKind.QUOTE, TokenKind.LITERAL)


def _literal_value(text: str) -> Value:
    """Converts a bare literal that already passed grammar validation."""
    if text == "true":
        return Value.boolean(True)
    if text == "false":
        return Value.boolean(False)
    if text == "null":
        return Value.null()

    if not is_number_literal(text):
        raise InternalParserError(
            f"literal {text!r} reached the tree builder without validation"
        )
    try:
        return Value.number(float(text))
    except ValueError as e:
        raise InternalParserError(
            f"validated number {text!r} failed conversion"
        ) from e


class _TreeBuilder:
    """
    State machine fed one token at a time.

    The stack holds every open container, outermost first. current_object
    is the nearest open object, which is not necessarily the top of the
    stack when arrays are nested inside it.
    """

    def __init__(self) -> None:
        self.root: Value | None = None
        self.stack: list[Value] = []
        self.current_object: Value | None = None
        self.pending: Value | None = None
        self.key = ""
        self.last_string = ""
        self.string_text = ""
        self.in_string = False
        self.previous: TokenKind | None = None
        self.nodes = 0

    def feed(self, token: Token) -> None:
        match token.kind:
            case TokenKind.OBJECT_OPEN:
                self.open_container(Value.object())
            case TokenKind.ARRAY_OPEN:
                self.open_container(Value.array())
            case TokenKind.OBJECT_CLOSE | TokenKind.ARRAY_CLOSE:
                self.close_container()
            case TokenKind.COMMA:
                self.flush()
            case TokenKind.COLON:
                self.key = self.last_string
                self.pending = None
            case TokenKind.QUOTE:
                self.toggle_string()
            case TokenKind.LITERAL:
                if self.in_string:
                    self.string_text = token.value
                else:
                    self.pending = _literal_value(token.value)

        self.previous = token.kind

    def attach(self, value: Value) -> None:
        """Adds value to the innermost open container."""
        self.nodes += 1
        parent = self.stack[-1]
        if parent.kind is Kind.ARRAY:
            parent.as_array().append(value)
        elif self.current_object is not None:
            self.current_object.as_object()[self.key] = value
        else:
            raise InternalParserError("object member outside any object")

    def open_container(self, container: Value) -> None:
        if not self.stack:
            if self.root is not None:
                raise InternalParserError("second root value in token stream")
            self.root = container
            self.nodes += 1
        else:
            self.attach(container)

        self.stack.append(container)
        if container.kind is Kind.OBJECT:
            self.current_object = container

    def flush(self) -> None:
        """Attaches the pending scalar if the previous token completed one."""
        if self.previous in _SCALAR_ENDS and self.pending is not None:
            self.attach(self.pending)
        self.pending = None

    def close_container(self) -> None:
        if not self.stack:
            raise InternalParserError("closing bracket with no open container")

        self.flush()
        self.stack.pop()
        self.recompute_current_object()

    def recompute_current_object(self) -> None:
        """Scans outward for the nearest open object after a pop."""
        self.current_object = None
        for frame in reversed(self.stack):
            if frame.kind is Kind.OBJECT:
                self.current_object = frame
                break

    def toggle_string(self) -> None:
        if not self.in_string:
            self.in_string = True
            self.string_text = ""
            return

        self.in_string = False
        self.last_string = self.string_text
        self.pending = Value.string(self.string_text)

    def finish(self) -> Value:
        if self.root is None or self.stack:
            raise InternalParserError("token stream ended inside a container")
        return self.root


def build(tokens: Sequence[Token]) -> Value:
    """
    Materializes the value tree for a validated token sequence.

    The root is an object or an array, decided by the first token. Passing
    tokens that failed validation is a programming error and raises
    InternalParserError.
    """
    with ProfileContext("build", len(tokens)) as profile:
        builder = _TreeBuilder()
        for token in tokens:
            builder.feed(token)
        root = builder.finish()
        profile.record(builder.nodes)

    logger.debug(
        "Built %s tree of %d nodes from %d tokens",
        root.kind.value,
        builder.nodes,
        len(tokens),
    )
    return root
