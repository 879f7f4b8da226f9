"""Enumerations for elementwise operations and literal leaves."""

from enum import IntEnum


class OperationType(IntEnum):
    """Operators understood by the elementwise engine."""

    ADD = 0  # Addition (concatenation for text)
    SUBTRACT = 1
    MULTIPLY = 2
    DIVIDE = 3  # Truncating for integral dtypes
    MODULO = 4  # Remainder of truncating division
    BITWISE_AND = 5
    BITWISE_OR = 6
    BITWISE_XOR = 7
    INVERT = 8  # Unary

    @property
    def is_bitwise(self) -> bool:
        return self in (
            OperationType.BITWISE_AND,
            OperationType.BITWISE_OR,
            OperationType.BITWISE_XOR,
            OperationType.INVERT,
        )

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    OperationType.ADD: "+",
    OperationType.SUBTRACT: "-",
    OperationType.MULTIPLY: "*",
    OperationType.DIVIDE: "/",
    OperationType.MODULO: "%",
    OperationType.BITWISE_AND: "&",
    OperationType.BITWISE_OR: "|",
    OperationType.BITWISE_XOR: "^",
    OperationType.INVERT: "~",
}


class LeafKind(IntEnum):
    """Classification of a scalar leaf in a nested literal."""

    INTEGRAL = 0
    FLOATING = 1
    TEXT = 2
