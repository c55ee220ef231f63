"""Type definitions and helpers for Bisaya++.

This module defines the runtime value model used by the Bisaya++
interpreter. Numbers are Python floats, text is a Python string,
characters are wrapped in `CharVal` so that a one-letter string and a
character stay distinguishable, and `NoneVal` marks the absence of a
value. Booleans are not a separate variant: the language encodes them as
the two reserved text values `OO` and `DILI`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional


TRUE_LITERAL = 'OO'
FALSE_LITERAL = 'DILI'


@dataclass(frozen=True)
class TypeSpec:
    """Represents a declared Bisaya++ variable type.

    `kind` is one of 'Number', 'Float', 'Boolean' or 'Character'. Untyped
    variables have no TypeSpec at all (None). The declared type is only
    metadata: it picks a default value for a bare declaration and tells
    the input statement how to read a field.
    """
    kind: str

    def __repr__(self) -> str:
        return self.kind

    # Convenience constructors
    @staticmethod
    def number() -> 'TypeSpec':
        return TypeSpec('Number')

    @staticmethod
    def floating() -> 'TypeSpec':
        return TypeSpec('Float')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('Boolean')

    @staticmethod
    def character() -> 'TypeSpec':
        return TypeSpec('Character')

    @property
    def is_numeric(self) -> bool:
        return self.kind in ('Number', 'Float')


class NoneVal:
    """Marker object for the absent Bisaya++ value, printed as `nil`."""
    def __repr__(self) -> str:
        return 'nil'


@dataclass(frozen=True)
class CharVal:
    """A single character value (LETRA)."""
    value: str

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Char({self.value!r})"


def from_bool(flag: bool) -> str:
    """Map a Python bool to the reserved boolean literal."""
    return TRUE_LITERAL if flag else FALSE_LITERAL


def is_truthy(value: Any) -> bool:
    """Convert any runtime value to a branch condition.

    Only `nil`, the number zero and the text `DILI` are false.
    """
    if isinstance(value, NoneVal) or value is None:
        return False
    if isinstance(value, str):
        return value != FALSE_LITERAL
    if isinstance(value, float):
        return value != 0.0
    if isinstance(value, CharVal):
        return True
    return True


def values_equal(a: Any, b: Any) -> bool:
    """General equality used by `==` and `<>`.

    Values of different variants are never equal; `nil` equals only
    `nil`.
    """
    if isinstance(a, NoneVal) and isinstance(b, NoneVal):
        return True
    if isinstance(a, NoneVal) or isinstance(b, NoneVal):
        return False
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, float) and isinstance(b, float):
        return a == b
    if isinstance(a, CharVal) and isinstance(b, CharVal):
        return a.value == b.value
    if type(a) is not type(b):
        return False
    return a == b


def format_number(value: float) -> str:
    """Shortest round-trip decimal form with a trailing '.0' removed."""
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    text = repr(value)
    if text.endswith('.0'):
        text = text[:-2]
    return text


def type_name(value: Any) -> str:
    """Return the Bisaya++ variant name of a runtime value."""
    if isinstance(value, NoneVal) or value is None:
        return 'Empty'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'Text'
    if isinstance(value, CharVal):
        return 'Character'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert a Bisaya++ value to its printed representation."""
    if isinstance(value, NoneVal) or value is None:
        return 'nil'
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def default_value(type_spec: Optional[TypeSpec]) -> Any:
    """Value bound by a declaration that has no initializer."""
    if type_spec is None:
        return NoneVal()
    if type_spec.is_numeric:
        return 0.0
    if type_spec.kind == 'Boolean':
        return FALSE_LITERAL
    if type_spec.kind == 'Character':
        return ''
    return NoneVal()
