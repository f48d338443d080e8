"""
The Json handle and the tokenize -> validate -> build pipeline.

A Json always owns exactly one object or array. Copying a handle deep-clones
its tree; take() moves the tree out and leaves an empty object behind.
"""

import logging
import os
from dataclasses import dataclass
from typing import IO
from typing import Any

from ._builder import build
from ._config import EncodeConfig
from ._config import ParseConfig
from ._errors import JSONParseError
from ._errors import ParseError
from ._errors import ValueTypeError
from ._serializer import serialize
from ._source import FileSource
from ._tokenizer import ByteReader
from ._tokenizer import TokenStream
from ._tokenizer import tokenize
from ._tokenizer import tokenize_stream
from ._validator import validate
from ._value import Kind
from ._value import Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of a non-raising parse.

    document is None exactly when error describes a failure; on success
    error is ParseError.ok().
    """

    document: "Json | None"
    error: ParseError

    @property
    def ok(self) -> bool:
        return self.error.is_ok

    def unwrap(self) -> "Json":
        """Returns the document or raises JSONParseError."""
        if self.document is None:
            raise JSONParseError(self.error)
        return self.document


def _finish_parse(
    stream: TokenStream, config: ParseConfig | None
) -> ParseResult:
    """Validates tokens and builds the tree only if they are well-formed."""
    if stream.error:
        logger.debug("Tokenizing failed: %s", stream.error)
        return ParseResult(None, stream.error)

    config = config or ParseConfig()
    error = validate(stream.tokens, config.max_depth)
    if error:
        logger.debug("Validation failed (%s): %s", error.kind.value, error)
        return ParseResult(None, error)

    return ParseResult(Json._owning(build(stream.tokens)), error)


class Json:
    """
    Owning handle for a parsed or constructed JSON document.

    Json() is an empty object. Json(value) holds a copy of an object or
    array value, so the document never shares nodes with the caller's tree.
    Scalars are rejected because a document root must be a container.
    """

    __slots__ = ("_root",)

    def __init__(self, root: Value | None = None) -> None:
        if root is None:
            root = Value.object()
        if not isinstance(root, Value):
            raise TypeError(f"expected a Value, not {type(root).__name__}")
        if not root.is_container():
            raise ValueTypeError(
                "a JSON document root must be an object or an array, "
                f"not {root.kind.value}"
            )
        self._root = root.clone()

    @classmethod
    def _owning(cls, root: Value) -> "Json":
        """Wraps a container nothing else refers to, without copying it."""
        document = cls.__new__(cls)
        document._root = root
        return document

    @classmethod
    def try_parse(
        cls, text: str | bytes, config: ParseConfig | None = None
    ) -> ParseResult:
        """Parses in-memory text, reporting failure through the result."""
        return _finish_parse(tokenize(text, config), config)

    @classmethod
    def parse(
        cls, text: str | bytes, config: ParseConfig | None = None
    ) -> "Json":
        """Parses in-memory text, raising JSONParseError on failure."""
        return cls.try_parse(text, config).unwrap()

    @classmethod
    def try_parse_stream(
        cls, stream: IO[bytes] | ByteReader, config: ParseConfig | None = None
    ) -> ParseResult:
        """Parses a binary stream byte by byte, reporting failure."""
        return _finish_parse(tokenize_stream(stream, config), config)

    @classmethod
    def from_stream(
        cls, stream: IO[bytes] | ByteReader, config: ParseConfig | None = None
    ) -> "Json":
        return cls.try_parse_stream(stream, config).unwrap()

    @classmethod
    def try_from_file(
        cls,
        path: str | os.PathLike[str],
        config: ParseConfig | None = None,
        streaming: bool = True,
    ) -> ParseResult:
        """
        Parses a file, either streamed or read in one go.

        SourceOpenError is raised (not reported) when the file cannot be
        opened, before any tokenizing happens.
        """
        source = FileSource(path)
        if not streaming:
            return cls.try_parse(source.read_all(), config)

        with source.open_for_read() as stream:
            tokens = tokenize_stream(stream, config)
        return _finish_parse(tokens, config)

    @classmethod
    def from_file(
        cls,
        path: str | os.PathLike[str],
        config: ParseConfig | None = None,
        streaming: bool = True,
    ) -> "Json":
        return cls.try_from_file(path, config, streaming).unwrap()

    @property
    def root(self) -> Value:
        return self._root

    @property
    def kind(self) -> Kind:
        return self._root.kind

    def clone(self) -> "Json":
        """Returns an independent deep copy."""
        return Json._owning(self._root.clone())

    def __copy__(self) -> "Json":
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Json":
        return self.clone()

    def take(self) -> "Json":
        """Moves the tree to a new handle, leaving an empty object here."""
        moved = Json._owning(self._root)
        self._root = Value.object()
        return moved

    def __getitem__(self, key: str | int) -> Value:
        return self._root[key]

    def __setitem__(self, key: str | int, value: Value) -> None:
        self._root[key] = value

    def __contains__(self, key: Any) -> bool:
        return key in self._root

    def __len__(self) -> int:
        return len(self._root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Json):
            return NotImplemented
        return self._root == other._root

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Json({self._root!r})"

    def __str__(self) -> str:
        return self.dumps()

    def dumps(self, config: EncodeConfig | None = None) -> str:
        return serialize(self._root, config)

    def write_to_file(
        self, path: str | os.PathLike[str], config: EncodeConfig | None = None
    ) -> None:
        """Serializes the document and writes it as UTF-8."""
        FileSource(path).write_all(self.dumps(config).encode("utf-8"))
