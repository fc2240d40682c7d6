"""Runtime values for the Noema evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

__all__ = ["ValueKind", "Value", "NULL", "TRUE", "FALSE", "render"]


class ValueKind(str, Enum):
    INT = "int"
    BOOL = "bool"
    STRING = "string"
    NULL = "null"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Value:
    """Tagged runtime value.

    The tag is kept explicitly so that ``verum`` and ``1`` stay distinct
    even though Python treats ``True == 1``.
    """

    kind: ValueKind
    payload: Optional[Union[int, bool, str]] = None

    @classmethod
    def integer(cls, value: int) -> "Value":
        return cls(ValueKind.INT, int(value))

    @classmethod
    def boolean(cls, value: bool) -> "Value":
        return TRUE if value else FALSE

    @classmethod
    def string(cls, value: str) -> "Value":
        return cls(ValueKind.STRING, value)

    @property
    def is_int(self) -> bool:
        return self.kind is ValueKind.INT

    @property
    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def truthy(self) -> bool:
        """null is false, bool is itself, int is nonzero, string is non-empty."""
        if self.kind is ValueKind.NULL:
            return False
        return bool(self.payload)

    def equals(self, other: "Value") -> bool:
        if self.kind is not other.kind:
            return False
        return self.payload == other.payload


NULL = Value(ValueKind.NULL)
TRUE = Value(ValueKind.BOOL, True)
FALSE = Value(ValueKind.BOOL, False)


def render(value: Value) -> str:
    """Text written by the print primitive (without line terminator)."""
    if value.kind is ValueKind.STRING:
        return value.payload
    if value.kind is ValueKind.INT:
        return str(value.payload)
    if value.kind is ValueKind.BOOL:
        return "verum" if value.payload else "falsum"
    return "nulla"
