"""
Test documents for the parsing benchmarks.

Every generator returns the text of an object or array, since treejson only
accepts a container at the root. Strings stay within the escapes treejson
decodes, so no generator ever emits a \\u sequence.
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

import treejson

# Fixed seed so every parser sees the same documents
_SEED = 20240115
_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]
_ESCAPE_PROBABILITY = 0.3

DATA_TYPES = (
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
    "canonical",
)


def generate_test_data(data_type: str) -> str:
    """Generates benchmark JSON text of the named type."""
    generators: dict[str, Callable[[random.Random], str]] = {
        "small_object": _small_object,
        "large_object": _large_object,
        "mixed_array": _mixed_array,
        "nested_structure": _nested_structure,
        "string_heavy": _string_heavy,
        "canonical": _canonical,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED))


def _word(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))


def _small_object(rng: random.Random) -> str:
    """A configuration-sized object under 1KB."""
    return json.dumps(
        {
            "id": 12345,
            "name": "Alice Johnson",
            "email": "alice@example.com",
            "active": True,
            "balance": 1234.56,
            "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
        }
    )


def _timestamp(rng: random.Random) -> str:
    return (
        f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
        f"T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00Z"
    )


def _large_object(rng: random.Random) -> str:
    """A profile with transaction history, well over 10KB."""
    data = {
        "user_id": rng.randint(1000000, 9999999),
        "profile": {
            "first_name": _word(rng, 10),
            "last_name": _word(rng, 12),
            "email": f"{_word(rng, 8)}@{_word(rng, 6)}.com",
            "address": {
                "street": f"{rng.randint(1, 9999)} {_word(rng, 8)} St",
                "zip": f"{rng.randint(10000, 99999)}",
                "country": "US",
            },
            "notifications": {
                "email": rng.choice([True, False]),
                "push": rng.choice([True, False]),
            },
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "timestamp": _timestamp(rng),
                "status": rng.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        "activity_log": [
            {
                "timestamp": _timestamp(rng),
                "action": rng.choice(["login", "logout", "purchase", "view"]),
                "user_agent": f"Mozilla/5.0 ({_word(rng, 20)})",
            }
            for _ in range(30)
        ],
    }
    return json.dumps(data)


def _mixed_array(rng: random.Random) -> str:
    """Two hundred values of every kind, with a few small objects."""
    makers: list[Callable[[int], Any]] = [
        lambda i: rng.randint(-1000, 1000),
        lambda i: round(rng.uniform(-100.0, 100.0), 3),
        lambda i: _word(rng, rng.randint(5, 30)),
        lambda i: rng.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "value": _word(rng, 10)},
    ]
    return json.dumps([rng.choice(makers)(i) for i in range(200)])


def _nested_structure(rng: random.Random) -> str:
    """Objects and arrays interleaved eight levels deep."""

    def level(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _word(rng, 10)}
        return {
            "level": depth,
            "items": [level(depth - 1) for _ in range(3)],
            "nested": level(depth - 1),
        }

    return json.dumps(level(7))


def _escaped_text(rng: random.Random) -> str:
    pieces = []
    for _ in range(50):
        if rng.random() < _ESCAPE_PROBABILITY:
            pieces.append(rng.choice(_ESCAPES))
        else:
            pieces.append(rng.choice(string.ascii_letters + " "))
    return '"' + "".join(pieces) + '"'


def _string_heavy(rng: random.Random) -> str:
    """
    Strings dense with escape sequences.

    Built by hand rather than with json.dumps so that the escapes appear in
    the document text itself instead of being escaped a second time.
    """
    strings = ", ".join(_escaped_text(rng) for _ in range(100))
    members = ", ".join(
        f'"key_{i}": {_escaped_text(rng)}' for i in range(20)
    )
    return f'{{"strings": [{strings}], "members": {{{members}}}}}'


def _canonical(rng: random.Random) -> str:
    """The large object rendered in treejson's own output layout."""
    return treejson.dumps(treejson.loads(_large_object(rng)))
