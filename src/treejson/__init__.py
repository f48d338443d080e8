"""
JSON text to value tree and back, with precise first-error locations.

Parsing runs in three stages: a tokenizer (in-memory or streaming from a
byte source), a recursive-descent grammar validator that reports the first
error with its line and column, and a tree builder that only runs on
validated input. The serializer renders trees in one canonical
pretty-printed format.
"""

import io
import os
from typing import IO
from typing import Any

from ._builder import build
from ._config import DEFAULT_MAX_DEPTH
from ._config import EncodeConfig
from ._config import ParseConfig
from ._document import Json
from ._document import ParseResult
from ._errors import ErrorKind
from ._errors import InternalParserError
from ._errors import JSONParseError
from ._errors import ParseError
from ._errors import SourceOpenError
from ._errors import ValueTypeError
from ._profiling import StageStats
from ._profiling import clear_stage_stats
from ._profiling import get_stage_stats
from ._serializer import serialize
from ._source import FileSource
from ._tokenizer import ByteReader
from ._tokenizer import Token
from ._tokenizer import TokenKind
from ._tokenizer import TokenStream
from ._tokenizer import tokenize
from ._tokenizer import tokenize_stream
from ._validator import validate
from ._value import Kind
from ._value import Value

__version__ = "0.1.0"


def loads(s: str | bytes, **kwargs: Any) -> Json:
    """
    Parses an in-memory JSON document.

    Keyword arguments build a ParseConfig. Raises JSONParseError carrying
    the error kind and position when the document is rejected.
    """
    if not isinstance(s, str | bytes | bytearray):
        raise TypeError(
            f"the JSON object must be str or bytes, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    return Json.parse(s, config)


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> Json:
    """
    Parses JSON from a file-like object.

    Binary streams are tokenized byte by byte without reading them into
    memory; text streams are read in full.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    if isinstance(fp, io.TextIOBase):
        return loads(fp.read(), **kwargs)

    config = ParseConfig(**kwargs)
    return Json.from_stream(fp, config)  # type: ignore[arg-type]


def load_path(
    path: str | os.PathLike[str], streaming: bool = True, **kwargs: Any
) -> Json:
    """Parses the JSON file at path; SourceOpenError if it cannot be opened."""
    config = ParseConfig(**kwargs)
    return Json.from_file(path, config, streaming=streaming)


def _root_of(obj: Json | Value) -> Value:
    if isinstance(obj, Json):
        return obj.root
    if isinstance(obj, Value):
        return obj
    msg = f"Object of type {type(obj).__name__} is not a Json or Value"
    raise TypeError(msg)


def dumps(obj: Json | Value, **kwargs: Any) -> str:
    """
    Serializes a document or value tree to canonical text.

    Keyword arguments build an EncodeConfig.
    """
    config = EncodeConfig(**kwargs)
    return serialize(_root_of(obj), config)


def dump(obj: Json | Value, fp: IO[str] | IO[bytes], **kwargs: Any) -> None:
    """Serializes to a file-like object; binary streams receive UTF-8."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    text = dumps(obj, **kwargs)
    if isinstance(fp, io.TextIOBase):
        fp.write(text)
    else:
        fp.write(text.encode("utf-8"))  # type: ignore[arg-type]


def dump_path(
    obj: Json | Value, path: str | os.PathLike[str], **kwargs: Any
) -> None:
    """Serializes to the file at path as UTF-8, replacing its contents."""
    FileSource(path).write_all(dumps(obj, **kwargs).encode("utf-8"))


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ByteReader",
    "EncodeConfig",
    "ErrorKind",
    "FileSource",
    "InternalParserError",
    "JSONParseError",
    "Json",
    "Kind",
    "ParseConfig",
    "ParseError",
    "ParseResult",
    "SourceOpenError",
    "StageStats",
    "Token",
    "TokenKind",
    "TokenStream",
    "Value",
    "ValueTypeError",
    "build",
    "clear_stage_stats",
    "dump",
    "dump_path",
    "dumps",
    "get_stage_stats",
    "load",
    "load_path",
    "loads",
    "serialize",
    "tokenize",
    "tokenize_stream",
    "validate",
]
