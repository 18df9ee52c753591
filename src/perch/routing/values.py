"""Typed default values.

Route defaults and options are stored as a small tagged union rather than
as loose Python objects, so a ``<default>`` holding ``<int>1</int>`` and one
holding the text ``1`` stay distinguishable::

    IntValue(1)          # <default key="page"><int>1</int></default>
    StringValue("1")     # <default key="page">1</default>

``unwrap()`` turns any value back into plain Python data, ``wrap()`` goes
the other way.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class NullValue:
    """An explicit null, written with ``xsi:nil="true"``."""

    def unwrap(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class BoolValue:
    value: bool

    def unwrap(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class IntValue:
    value: int

    def unwrap(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class FloatValue:
    value: float

    def unwrap(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class StringValue:
    value: str

    def unwrap(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ListValue:
    """An ordered sequence of typed values."""

    items: tuple[TypedValue, ...] = ()

    def unwrap(self) -> list[Any]:
        return [item.unwrap() for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> TypedValue:
        return self.items[index]


@dataclass(frozen=True, slots=True)
class MapValue:
    """A string-keyed mapping of typed values.

    Built from ``<map>`` entries in document order; a repeated key keeps its
    first position and its last value.
    """

    entries: dict[str, TypedValue] = field(default_factory=dict, hash=False)

    def unwrap(self) -> dict[str, Any]:
        return {key: value.unwrap() for key, value in self.entries.items()}

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, key: str) -> TypedValue:
        return self.entries[key]


TypedValue = NullValue | BoolValue | IntValue | FloatValue | StringValue | ListValue | MapValue

NULL = NullValue()


def wrap(data: Any) -> TypedValue:
    """Convert plain Python data into a typed value.

    Raises ``TypeError`` for anything outside the JSON-like value space.
    """
    if data is None:
        return NULL
    if isinstance(data, NullValue | BoolValue | IntValue | FloatValue | StringValue):
        return data
    if isinstance(data, ListValue | MapValue):
        return data
    # bool before int: bool is an int subclass
    if isinstance(data, bool):
        return BoolValue(data)
    if isinstance(data, int):
        return IntValue(data)
    if isinstance(data, float):
        return FloatValue(data)
    if isinstance(data, str):
        return StringValue(data)
    if isinstance(data, list | tuple):
        return ListValue(tuple(wrap(item) for item in data))
    if isinstance(data, dict):
        return MapValue({str(key): wrap(value) for key, value in data.items()})
    msg = f"Cannot convert {type(data).__name__} to a typed value"
    raise TypeError(msg)


INT_PATTERN = re.compile(r"[+-]?\d+")
FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")

_TRUE_WORDS = frozenset({"true", "1"})
_FALSE_WORDS = frozenset({"false", "0"})


def coerce_scalar(text: str) -> TypedValue:
    """Auto-type an attribute or ``<option>`` string.

    ``"true"``/``"1"`` become True, ``"false"``/``"0"`` become False,
    integer- and float-looking strings become numbers, anything else stays
    a string.  Used for ``<option>`` values and for the ``utf8``,
    ``stateless`` and ``trailing-slash-on-root`` attributes alike.
    """
    lowered = text.lower()
    if lowered in _TRUE_WORDS:
        return BoolValue(True)
    if lowered in _FALSE_WORDS:
        return BoolValue(False)
    if INT_PATTERN.fullmatch(text):
        return IntValue(int(text))
    if FLOAT_PATTERN.fullmatch(text):
        return FloatValue(float(text))
    return StringValue(text)


def is_truthy(value: TypedValue) -> bool:
    """Truthiness of a coerced flag value (``NULL`` and empty strings are false)."""
    return bool(value.unwrap())
