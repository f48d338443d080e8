"""
The value tree: one tagged type for every JSON kind.

Each container owns its children outright, so a tree never shares nodes
and never contains cycles. Every way of putting a value into a container
stores a deep copy of it, which keeps that true even when a caller inserts
a node from elsewhere in the same tree, or the container itself.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._errors import ValueTypeError


class Kind(Enum):
    """The JSON kind a Value holds."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


_PAYLOAD_TYPES: dict[Kind, type | tuple[type, ...]] = {
    Kind.NULL: type(None),
    Kind.BOOL: bool,
    Kind.NUMBER: float,
    Kind.STRING: str,
    Kind.ARRAY: list,
    Kind.OBJECT: dict,
}


@dataclass(slots=True)
class Value:
    """
    A JSON value tagged with its kind.

    The payload type follows the kind: None, bool, float, str,
    list[Value] or dict[str, Value]. Equality is structural, and a boolean
    never equals a number.
    """

    kind: Kind
    data: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, Kind):
            raise TypeError("kind must be a Kind")
        if not isinstance(self.data, _PAYLOAD_TYPES[self.kind]):
            raise TypeError(
                f"{self.kind.value} value cannot hold "
                f"{type(self.data).__name__}"
            )

    @classmethod
    def null(cls) -> "Value":
        return cls(Kind.NULL, None)

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(Kind.BOOL, flag)

    @classmethod
    def number(cls, number: int | float) -> "Value":
        if isinstance(number, bool) or not isinstance(number, int | float):
            raise TypeError("number must be an int or a float")
        return cls(Kind.NUMBER, float(number))

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(Kind.STRING, text)

    @classmethod
    def array(cls, items: list["Value"] | None = None) -> "Value":
        """Creates an array holding copies of items."""
        items = [] if items is None else items
        return cls(Kind.ARRAY, [_adopt(item) for item in items])

    @classmethod
    def object(cls, members: dict[str, "Value"] | None = None) -> "Value":
        """Creates an object holding copies of members."""
        members = {} if members is None else members
        for key in members:
            _require_key(key)
        return cls(
            Kind.OBJECT,
            {key: _adopt(member) for key, member in members.items()},
        )

    def is_null(self) -> bool:
        return self.kind is Kind.NULL

    def is_container(self) -> bool:
        return self.kind is Kind.ARRAY or self.kind is Kind.OBJECT

    def _expect(self, kind: Kind) -> Any:
        if self.kind is not kind:
            raise ValueTypeError(
                f"expected a {kind.value} value, found {self.kind.value}"
            )
        return self.data

    def as_bool(self) -> bool:
        return self._expect(Kind.BOOL)

    def as_number(self) -> float:
        return self._expect(Kind.NUMBER)

    def as_string(self) -> str:
        return self._expect(Kind.STRING)

    def as_array(self) -> list["Value"]:
        """
        Returns the live element list; changes to it change the tree.

        Values added through the list directly are not copied.
        """
        return self._expect(Kind.ARRAY)

    def as_object(self) -> dict[str, "Value"]:
        """Returns the live member dict; changes to it change the tree."""
        return self._expect(Kind.OBJECT)

    def __getitem__(self, key: str | int) -> "Value":
        if isinstance(key, str):
            members = self.as_object()
            if key not in members:
                raise KeyError(key)
            return members[key]

        items = self.as_array()
        return items[_checked_index(key, len(items))]

    def __setitem__(self, key: str | int, value: "Value") -> None:
        """Stores a copy of value under key or at index."""
        value = _adopt(value)
        if isinstance(key, str):
            self.as_object()[key] = value
            return

        items = self.as_array()
        items[_checked_index(key, len(items))] = value

    def __contains__(self, key: Any) -> bool:
        return key in self.as_object()

    def __len__(self) -> int:
        if not self.is_container():
            raise ValueTypeError(f"{self.kind.value} value has no length")
        return len(self.data)

    def append(self, value: "Value") -> None:
        """Appends a copy of value to an array."""
        items = self.as_array()
        items.append(_adopt(value))

    def clone(self) -> "Value":
        """Returns a deep copy that shares no nodes with this tree."""
        match self.kind:
            case Kind.ARRAY:
                return Value(Kind.ARRAY, [item.clone() for item in self.data])
            case Kind.OBJECT:
                return Value(
                    Kind.OBJECT,
                    {key: member.clone() for key, member in self.data.items()},
                )
            case _:
                return Value(self.kind, self.data)

    def __copy__(self) -> "Value":
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Value":
        return self.clone()


def _adopt(value: object) -> Value:
    """Returns the copy of value that a container will own."""
    if not isinstance(value, Value):
        raise TypeError(f"expected a Value, not {type(value).__name__}")
    return value.clone()


def _require_key(key: object) -> None:
    if not isinstance(key, str):
        raise TypeError(f"keys must be str, not {type(key).__name__}")


def _checked_index(index: object, length: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(
            f"indices must be int or str, not {type(index).__name__}"
        )
    if not 0 <= index < length:
        raise IndexError(f"index {index} out of range for {length} elements")
    return index
