"""Canonical pretty-printing of a value tree."""

import math

from ._config import EncodeConfig
from ._profiling import ProfileContext
from ._value import Kind
from ._value import Value

_STRING_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _encode_string(s: str, config: EncodeConfig) -> str:
    """Encode string with proper escape sequences."""
    result = ['"']
    for char in s:
        if char in _STRING_ESCAPES:
            result.append(_STRING_ESCAPES[char])
        elif char == "/" and config.escape_slash:
            result.append("\\/")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _encode_number(n: float) -> str:
    """
    Encode a number in its shortest form.

    Trailing fractional zeros and a bare trailing decimal point are removed,
    so 3.0 becomes 3. Exponent forms are left alone.
    """
    if math.isnan(n) or math.isinf(n):
        msg = "Out of range float values are not JSON compliant"
        raise ValueError(msg)

    text = repr(n)
    if "." in text and "e" not in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _encode_array(items: list[Value], config: EncodeConfig, level: int) -> str:
    """Arrays of scalars stay on one line; any container breaks them up."""
    if not items:
        return "[]"

    if not any(item.is_container() for item in items):
        encoded = [_encode_value(item, config, level + 1) for item in items]
        return "[ " + ", ".join(encoded) + " ]"

    inner_indent = " " * (config.indent * (level + 1))
    outer_indent = " " * (config.indent * level)
    lines = [
        inner_indent + _encode_value(item, config, level + 1) for item in items
    ]
    return "[\n" + ",\n".join(lines) + "\n" + outer_indent + "]"


def _encode_object(
    members: dict[str, Value], config: EncodeConfig, level: int
) -> str:
    if not members:
        return "{}"

    inner_indent = " " * (config.indent * (level + 1))
    outer_indent = " " * (config.indent * level)
    lines = [
        f"{inner_indent}{_encode_string(key, config)} : "
        f"{_encode_value(member, config, level + 1)}"
        for key, member in members.items()
    ]
    return "{\n" + ",\n".join(lines) + "\n" + outer_indent + "}"


def _encode_value(value: Value, config: EncodeConfig, level: int) -> str:
    match value.kind:
        case Kind.NULL:
            return "null"
        case Kind.BOOL:
            return "true" if value.data else "false"
        case Kind.NUMBER:
            return _encode_number(value.data)
        case Kind.STRING:
            return _encode_string(value.data, config)
        case Kind.ARRAY:
            return _encode_array(value.data, config, level)
        case Kind.OBJECT:
            return _encode_object(value.data, config, level)
    raise TypeError(f"unknown value kind: {value.kind!r}")


def serialize(value: Value, config: EncodeConfig | None = None) -> str:
    """
    Renders a value tree as canonical text.

    Objects put one member per line, indented per nesting level, with
    members in insertion order. Raises ValueError for NaN and infinities.
    """
    config = config or EncodeConfig()
    with ProfileContext("serialize") as profile:
        text = _encode_value(value, config, 0)
        profile.record(len(text))
    return text
