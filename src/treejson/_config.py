"""Immutable parse and encode settings."""

import codecs
from dataclasses import dataclass

# Comfortably inside the default interpreter recursion limit
DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    The encoding applies to bytes input and to binary streams; str input is
    tokenized as-is. max_depth bounds how deeply objects and arrays may
    nest; deeper documents are rejected with NESTING_TOO_DEEP.
    """

    encoding: str = "utf-8"
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.encoding, str):
            raise TypeError("encoding must be a string")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {self.encoding}") from e
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures serialization with immutable settings.

    The defaults produce the canonical format: four spaces per nesting
    level and an escaped forward slash.
    """

    indent: int = 4
    escape_slash: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise TypeError("indent must be an integer")
        if self.indent < 0:
            raise ValueError("indent must be non-negative")
        if not isinstance(self.escape_slash, bool):
            raise TypeError("escape_slash must be a boolean")
