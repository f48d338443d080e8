"""
Pytest configuration and shared fixtures for treejson tests.

Provides immutable test data fixtures built from the json.org JSON_checker
suite, adjusted to the documented restrictions (no \\u escapes, raw tabs
allowed inside strings).
"""

from dataclasses import dataclass
from pathlib import Path

import pytest

import treejson


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    skip_reason: str = ""


_FAIL_DOCS = [
    # https://json.org/JSON_checker/test/fail1.json
    '"A JSON payload should be an object or array, not a string."',
    # https://json.org/JSON_checker/test/fail2.json
    '["Unclosed array"',
    # https://json.org/JSON_checker/test/fail3.json
    '{unquoted_key: "keys must be quoted"}',
    # https://json.org/JSON_checker/test/fail4.json
    '["extra comma",]',
    # https://json.org/JSON_checker/test/fail5.json
    '["double extra comma",,]',
    # https://json.org/JSON_checker/test/fail6.json
    '[   , "<-- missing value"]',
    # https://json.org/JSON_checker/test/fail7.json
    '["Comma after the close"],',
    # https://json.org/JSON_checker/test/fail8.json
    '["Extra close"]]',
    # https://json.org/JSON_checker/test/fail9.json
    '{"Extra comma": true,}',
    # https://json.org/JSON_checker/test/fail10.json
    '{"Extra value after close": true} "misplaced quoted value"',
    # https://json.org/JSON_checker/test/fail11.json
    '{"Illegal expression": 1 + 2}',
    # https://json.org/JSON_checker/test/fail12.json
    '{"Illegal invocation": alert()}',
    # https://json.org/JSON_checker/test/fail13.json
    '{"Numbers cannot have leading zeroes": 013}',
    # https://json.org/JSON_checker/test/fail14.json
    '{"Numbers cannot be hex": 0x14}',
    # https://json.org/JSON_checker/test/fail15.json
    '["Illegal backslash escape: \\x15"]',
    # https://json.org/JSON_checker/test/fail16.json
    "[\\naked]",
    # https://json.org/JSON_checker/test/fail17.json
    '["Illegal backslash escape: \\017"]',
    # https://json.org/JSON_checker/test/fail18.json
    '[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]',
    # https://json.org/JSON_checker/test/fail19.json
    '{"Missing colon" null}',
    # https://json.org/JSON_checker/test/fail20.json
    '{"Double colon":: null}',
    # https://json.org/JSON_checker/test/fail21.json
    '{"Comma instead of colon", null}',
    # https://json.org/JSON_checker/test/fail22.json
    '["Colon instead of comma": false]',
    # https://json.org/JSON_checker/test/fail23.json
    '["Bad value", truth]',
    # https://json.org/JSON_checker/test/fail24.json
    "['single quote']",
    # https://json.org/JSON_checker/test/fail25.json
    '["\ttab\tcharacter\tin\tstring\t"]',
    # https://json.org/JSON_checker/test/fail26.json
    '["tab\\   character\\   in\\  string\\  "]',
    # https://json.org/JSON_checker/test/fail27.json
    '["line\nbreak"]',
    # https://json.org/JSON_checker/test/fail28.json
    '["line\\\nbreak"]',
    # https://json.org/JSON_checker/test/fail29.json
    "[0e]",
    # https://json.org/JSON_checker/test/fail30.json
    "[0e+]",
    # https://json.org/JSON_checker/test/fail31.json
    "[0e+-1]",
    # https://json.org/JSON_checker/test/fail32.json
    '{"Comma instead if closing brace": true,',
    # https://json.org/JSON_checker/test/fail33.json
    '["mismatch"}',
]

# Cases that are skipped with reasons
_FAIL_SKIPS = {
    18: "the default nesting limit is deeper than JSON_checker's 19 levels",
    25: "only raw line breaks are rejected inside strings",
}

JSON_FAIL_CASES = [
    JsonTestCase(
        description=f"fail{idx + 1}.json",
        input_data=doc,
        should_fail=True,
        skip_reason=_FAIL_SKIPS.get(idx + 1, ""),
    )
    for idx, doc in enumerate(_FAIL_DOCS)
]

# https://json.org/JSON_checker/test/pass1.json without the "hex" member,
# since \u escapes are rejected.
PASS1 = """[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}",
        "quotes": "&#34; \\" %22 0x22 034 &#x22;",
        "\\/\\\\\\"\\b\\f\\n\\r\\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]"""

JSON_PASS_CASES = [
    JsonTestCase("pass1.json - complex nested structure", PASS1),
    JsonTestCase(
        "pass2.json - deep nesting",
        '[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
    ),
    JsonTestCase(
        "pass3.json - simple object",
        '{"JSON Test Pattern pass3": {"The outermost value": "must be an '
        'object or array.", "In this test": "It is an object."}}',
    ),
]


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """JSON strings that must be rejected."""
    return JSON_FAIL_CASES


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """JSON strings that must parse successfully."""
    return JSON_PASS_CASES


@pytest.fixture
def nested_document() -> treejson.Json:
    """A small document mixing every value kind."""
    return treejson.loads(
        '{"name": "widget", "tags": ["a", "b"], "size": 3.5,'
        ' "stock": {"count": 12, "levels": [[1, 2], [3, [4, 5]]]},'
        ' "active": true, "owner": null}'
    )


@pytest.fixture
def json_file(tmp_path: Path) -> Path:
    """A JSON document on disk spanning several lines."""
    path = tmp_path / "document.json"
    path.write_text(
        '{\n    "greeting" : "héllo",\n    "n" : [ 1, 2 ]\n}\n',
        encoding="utf-8",
    )
    return path
