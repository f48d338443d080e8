"""
JSON encoding functionality tests.

Validates the canonical output format, number and string rendering,
encode configuration and writing to file-like objects.
"""

from io import BytesIO
from io import StringIO

import pytest

import treejson
from treejson import Json
from treejson import Value

NESTED_CANONICAL = """{
    "name" : "widget",
    "tags" : [ "a", "b" ],
    "size" : 3.5,
    "stock" : {
        "count" : 12,
        "levels" : [
            [ 1, 2 ],
            [
                3,
                [ 4, 5 ]
            ]
        ]
    },
    "active" : true,
    "owner" : null
}"""


def test_dump() -> None:
    """
    Validates dump to file-like object.
    """
    sio = StringIO()
    treejson.dump(Json(), sio)
    assert sio.getvalue() == "{}"


def test_dump_binary_stream_receives_utf8() -> None:
    """
    Validates dump to a binary file-like object.
    """
    bio = BytesIO()
    treejson.dump(Json(Value.array([Value.string("héllo")])), bio)
    assert bio.getvalue() == '[ "héllo" ]'.encode()


def test_dump_requires_writable() -> None:
    with pytest.raises(TypeError):
        treejson.dump(Json(), object())  # type: ignore[arg-type]


def test_dumps() -> None:
    """
    Validates dumps to string.
    """
    assert treejson.dumps(Json()) == "{}"
    assert treejson.dumps(Json(Value.array())) == "[]"


def test_dumps_rejects_foreign_objects() -> None:
    with pytest.raises(TypeError):
        treejson.dumps({})  # type: ignore[arg-type]


def test_canonical_layout(nested_document: Json) -> None:
    """
    Validates member-per-line objects and inline scalar arrays.
    """
    assert treejson.dumps(nested_document) == NESTED_CANONICAL
    assert str(nested_document) == NESTED_CANONICAL
    assert nested_document.dumps() == NESTED_CANONICAL


def test_empty_containers_inside_containers() -> None:
    doc = treejson.loads('{"a": [], "b": {}, "c": [[]]}')

    assert treejson.dumps(doc) == (
        '{\n    "a" : [],\n    "b" : {},\n    "c" : [\n        []\n    ]\n}'
    )


def test_serialize_accepts_scalars() -> None:
    assert treejson.serialize(Value.null()) == "null"
    assert treejson.serialize(Value.boolean(False)) == "false"
    assert treejson.serialize(Value.string("x")) == '"x"'


@pytest.mark.parametrize(
    "number,expected",
    [
        (3.0, "3"),
        (0.0, "0"),
        (100, "100"),
        (-42, "-42"),
        (3.14, "3.14"),
        (0.5, "0.5"),
        (1e20, "1e+20"),
        (1.5e-07, "1.5e-07"),
        (123456789, "123456789"),
    ],
)
def test_number_formatting(number: float, expected: str) -> None:
    """
    Validates shortest round-trip number rendering.
    """
    assert treejson.serialize(Value.number(number)) == expected


@pytest.mark.parametrize("number", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_numbers_rejected(number: float) -> None:
    """
    Validates that NaN and infinities cannot be serialized.
    """
    doc = Json(Value.array([Value.number(number)]))
    with pytest.raises(ValueError):
        treejson.dumps(doc)


def test_overflowing_literal_parses_but_cannot_be_dumped() -> None:
    doc = treejson.loads("[1e400]")

    assert doc[0].as_number() == float("inf")
    with pytest.raises(ValueError):
        treejson.dumps(doc)


def test_string_escapes() -> None:
    """
    Validates escaping of quotes, backslashes, slashes and controls.
    """
    value = Value.string('a"b\\c/d\n\t\b\f\r')
    assert treejson.serialize(value) == r'"a\"b\\c\/d\n\t\b\f\r"'


def test_keys_are_escaped_too() -> None:
    doc = Json(Value.object({'a/"b"': Value.null()}))
    assert treejson.dumps(doc) == '{\n    "a\\/\\"b\\"" : null\n}'


def test_non_ascii_is_written_raw() -> None:
    assert treejson.serialize(Value.string("日本 ✓")) == '"日本 ✓"'


def test_escape_slash_can_be_disabled() -> None:
    doc = treejson.loads('["https:\\/\\/example.com/x"]')

    assert treejson.dumps(doc) == '[ "https:\\/\\/example.com\\/x" ]'
    assert (
        treejson.dumps(doc, escape_slash=False)
        == '[ "https://example.com/x" ]'
    )


def test_indent_config() -> None:
    doc = treejson.loads('{"a": {"b": [1, [2]]}}')
    config = treejson.EncodeConfig(indent=2)

    assert doc.dumps(config) == treejson.dumps(doc, indent=2)
    assert treejson.dumps(doc, indent=2) == (
        '{\n  "a" : {\n    "b" : [\n      1,\n      [ 2 ]\n    ]\n  }\n}'
    )
    assert treejson.dumps(doc, indent=0) == (
        '{\n"a" : {\n"b" : [\n1,\n[ 2 ]\n]\n}\n}'
    )


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"indent": -1}, ValueError),
        ({"indent": True}, TypeError),
        ({"indent": "4"}, TypeError),
        ({"escape_slash": 1}, TypeError),
        ({"sort_keys": True}, TypeError),
    ],
)
def test_encode_config_validation(
    kwargs: dict[str, object], error: type[Exception]
) -> None:
    """
    Validates EncodeConfig rejects invalid settings.
    """
    with pytest.raises(error):
        treejson.dumps(Json(), **kwargs)


def test_members_keep_insertion_order() -> None:
    doc = Json()
    doc["zeta"] = Value.number(1)
    doc["alpha"] = Value.number(2)

    assert treejson.dumps(doc) == '{\n    "zeta" : 1,\n    "alpha" : 2\n}'


def test_output_reparses_to_equal_tree(nested_document: Json) -> None:
    """
    Validates that canonical output passes validation and round-trips.
    """
    out = treejson.dumps(nested_document)

    assert treejson.validate(treejson.tokenize(out).tokens).is_ok
    assert treejson.loads(out) == nested_document
    assert treejson.dumps(treejson.loads(out)) == out
