"""
Runtime literal values.

A literal is one of four variants (identifier, string, number, boolean).
The absence of a value ("nil") is represented by ``None``, so every slot that
can hold a literal is typed ``Optional[Literal]``.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, eq=False)
class Literal:
    """Base class for literal values."""
    value: Any

    def __eq__(self, other) -> bool:
        # Variants never compare equal to each other
        if type(self) is not type(other):
            return NotImplemented
        return self.value == other.value

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value!r})"


@dataclass(frozen=True, eq=False, repr=False)
class IdentifierLiteral(Literal):
    """Identifier text carried by IDENTIFIER tokens."""
    value: str


@dataclass(frozen=True, eq=False, repr=False)
class StringLiteral(Literal):
    """String value, without the surrounding quotes."""
    value: str


@dataclass(frozen=True, eq=False, repr=False)
class NumberLiteral(Literal):
    """Double precision number."""
    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True, eq=False, repr=False)
class BooleanLiteral(Literal):
    """Boolean value."""
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


def format_number(value: float) -> str:
    """Render a number the way the language displays it (``3`` not ``3.0``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


def stringify(value: Optional[Literal]) -> str:
    """Display text of a value, ``nil`` for absence."""
    if value is None:
        return "nil"
    return str(value)


def is_truthy(value: Optional[Literal]) -> bool:
    """
    Map a value to a boolean for conditional use.

    Only ``false`` and ``nil`` are falsy; ``0`` and ``""`` are truthy.
    """
    if value is None:
        return False
    if isinstance(value, BooleanLiteral):
        return value.value
    return True


def values_equal(left: Optional[Literal], right: Optional[Literal]) -> bool:
    """Variant-aware equality; two absences are equal."""
    if left is None or right is None:
        return left is None and right is None
    return left == right
