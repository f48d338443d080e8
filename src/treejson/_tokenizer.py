"""
Turns JSON text into a flat sequence of positioned tokens.

The tokenizer knows nothing about nesting rules. Numbers and the keywords
true/false/null all come out as bare LITERAL tokens, and quoted strings come
out as QUOTE, LITERAL (omitted when empty), QUOTE. Deciding what a literal
means is left to the validator and the builder.
"""

import codecs
from dataclasses import dataclass
from enum import Enum
from typing import IO
from typing import Protocol

from ._config import ParseConfig
from ._errors import ErrorKind
from ._errors import ParseError
from ._profiling import ProfileContext


class TokenKind(Enum):
    """Lexical categories produced by the tokenizer."""

    OBJECT_OPEN = "{"
    OBJECT_CLOSE = "}"
    ARRAY_OPEN = "["
    ARRAY_CLOSE = "]"
    COMMA = ","
    COLON = ":"
    QUOTE = '"'
    LITERAL = "literal"


@dataclass(frozen=True)
class Token:
    """
    A classified lexical unit with its 1-based source position.

    Only LITERAL tokens carry a payload; for every other kind value is "".
    """

    kind: TokenKind
    value: str
    line: int
    column: int


@dataclass(frozen=True)
class TokenStream:
    """Tokenizer output: the tokens plus the first string-decoding error."""

    tokens: tuple[Token, ...]
    error: ParseError

    def __len__(self) -> int:
        return len(self.tokens)


_STRUCTURAL = {
    "{": TokenKind.OBJECT_OPEN,
    "}": TokenKind.OBJECT_CLOSE,
    "[": TokenKind.ARRAY_OPEN,
    "]": TokenKind.ARRAY_CLOSE,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
}
_WHITESPACE = frozenset(" \t\r\n")
_LINE_BREAKS = frozenset("\r\n")
_DELIMITERS = frozenset(_STRUCTURAL) | _WHITESPACE | {'"'}
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class _Cursor(Protocol):
    def peek(self) -> str: ...

    def advance(self) -> str: ...


class _TextCursor:
    """Character cursor over a fully buffered string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def peek(self) -> str:
        """Returns current character without advancing, "" at the end."""
        return self.text[self.pos] if self.pos < self.length else ""

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char


class ByteReader:
    """
    Reads a binary stream one byte at a time with one byte of lookahead.

    Nothing beyond the next unread byte is ever requested from the stream,
    so documents of unbounded size can be tokenized without buffering.
    """

    def __init__(self, stream: IO[bytes]):
        if not hasattr(stream, "read"):
            raise TypeError("stream must have a read() method")
        self._stream = stream
        self._lookahead: int | None = None
        self._exhausted = False
        self.bytes_read = 0

    def peek_byte(self) -> int | None:
        """Returns the next byte without consuming it; None at the end."""
        if self._lookahead is None and not self._exhausted:
            chunk = self._stream.read(1)
            if isinstance(chunk, str):
                raise TypeError("stream must be opened in binary mode")
            if chunk:
                self._lookahead = chunk[0]
            else:
                self._exhausted = True
        return self._lookahead

    def read_byte(self) -> int | None:
        """Consumes and returns the next byte, None at end of stream."""
        byte = self.peek_byte()
        if byte is not None:
            self.bytes_read += 1
        self._lookahead = None
        return byte


class _StreamCursor:
    """
    Character cursor that decodes a ByteReader incrementally.

    Multi-byte characters are assembled byte by byte, so the characters seen
    by the scanner match decoding the whole input at once.
    """

    def __init__(self, reader: ByteReader, encoding: str):
        self._reader = reader
        self._decoder = codecs.getincrementaldecoder(encoding)()
        self._pending = ""

    def peek(self) -> str:
        while not self._pending:
            if self._reader.peek_byte() is None:
                self._pending = self._decoder.decode(b"", final=True)
                if not self._pending:
                    return ""
                break
            byte = self._reader.read_byte()
            self._pending = self._decoder.decode(bytes((byte,)))
        return self._pending[0]

    def advance(self) -> str:
        char = self.peek()
        self._pending = self._pending[1:]
        return char


class _Scanner:
    """
    Single-pass scanner shared by the in-memory and streaming tokenizers.

    Tracks 1-based line and column: a line feed starts a new line, every
    other consumed character moves one column to the right.
    """

    def __init__(self, cursor: _Cursor):
        self.cursor = cursor
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.error = ParseError.ok()

    def advance(self) -> str:
        char = self.cursor.advance()
        if char == "\n":
            self.line += 1
            self.column = 1
        elif char:
            self.column += 1
        return char

    def emit(self, kind: TokenKind, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(kind, value, line, column))

    def fail(self, message: str) -> None:
        """Records a string-decoding error; later errors are ignored."""
        if self.error.is_ok:
            self.error = ParseError(
                ErrorKind.INVALID_STRING, message, self.line, self.column
            )

    def scan(self) -> TokenStream:
        while True:
            char = self.cursor.peek()
            if not char:
                break

            if char in _WHITESPACE:
                self.advance()
            elif char in _STRUCTURAL:
                self.emit(_STRUCTURAL[char], "", self.line, self.column)
                self.advance()
            elif char == '"':
                self.scan_string()
            else:
                self.scan_literal()

        return TokenStream(tuple(self.tokens), self.error)

    def scan_literal(self) -> None:
        """Scans a bare literal, the longest run of non-delimiters."""
        line, column = self.line, self.column
        chars = []
        while True:
            char = self.cursor.peek()
            if not char or char in _DELIMITERS:
                break
            chars.append(self.advance())
        self.emit(TokenKind.LITERAL, "".join(chars), line, column)

    def scan_string(self) -> None:
        """Scans a quoted string and emits QUOTE, [LITERAL], QUOTE."""
        self.emit(TokenKind.QUOTE, "", self.line, self.column)
        self.advance()

        line, column = self.line, self.column
        body = self._decode_body()
        if body is None:
            self._skip_body()
        elif body:
            self.emit(TokenKind.LITERAL, body, line, column)

        self.emit(TokenKind.QUOTE, "", self.line, self.column)
        if self.cursor.peek() == '"':
            self.advance()

    def _decode_body(self) -> str | None:
        """Decodes up to the closing quote; returns None after an error."""
        chars = []
        while True:
            char = self.cursor.peek()
            if not char:
                self.fail("Unterminated string")
                return None
            if char == '"':
                return "".join(chars)
            if char in _LINE_BREAKS:
                self.fail("Control character in string")
                return None

            self.advance()
            if char != "\\":
                chars.append(char)
                continue

            escaped = self.cursor.peek()
            if not escaped:
                self.fail("Escape at end of input")
                return None
            if escaped == "u":
                self.fail("Unicode escapes are not supported")
                return None
            if escaped not in _ESCAPES:
                self.fail(f"Invalid escape \\{escaped}")
                return None
            self.advance()
            chars.append(_ESCAPES[escaped])

    def _skip_body(self) -> None:
        """Skips the rest of a malformed string so scanning can resume."""
        while True:
            char = self.cursor.peek()
            if not char or char == '"' or char in _LINE_BREAKS:
                return
            self.advance()
            if char == "\\":
                escaped = self.cursor.peek()
                if escaped and escaped not in _LINE_BREAKS:
                    self.advance()


def tokenize(
    text: str | bytes, config: ParseConfig | None = None
) -> TokenStream:
    """
    Tokenizes an in-memory document.

    Bytes are decoded with the configured encoding first. String-decoding
    problems are reported through TokenStream.error rather than raised.
    """
    config = config or ParseConfig()
    if isinstance(text, bytes | bytearray):
        text = bytes(text).decode(config.encoding)
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON document must be str or bytes, not {type(text).__name__}"
        )

    with ProfileContext("tokenize", len(text)) as profile:
        result = _Scanner(_TextCursor(text)).scan()
        profile.record(len(result.tokens), failed=bool(result.error))
    return result


def tokenize_stream(
    stream: IO[bytes] | ByteReader, config: ParseConfig | None = None
) -> TokenStream:
    """
    Tokenizes a binary stream without reading it into memory first.

    The stream must be positioned at the start of the document. The result
    is identical to tokenize() on the same bytes.
    """
    config = config or ParseConfig()
    reader = stream if isinstance(stream, ByteReader) else ByteReader(stream)

    start = reader.bytes_read
    with ProfileContext("tokenize_stream") as profile:
        result = _Scanner(_StreamCursor(reader, config.encoding)).scan()
        profile.record(
            len(result.tokens),
            failed=bool(result.error),
            units_in=reader.bytes_read - start,
        )
    return result
