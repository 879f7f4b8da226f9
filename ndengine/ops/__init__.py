"""Elementwise arithmetic, type promotion and array creation."""

from ndengine.ops.promotion import dominating_dtype, result_dtype, unary_result_dtype
from ndengine.ops.elementwise import (
    operate,
    add,
    subtract,
    multiply,
    divide,
    modulo,
    bitwise_and,
    bitwise_or,
    bitwise_xor,
    invert,
)
from ndengine.ops.creation import zeros, ones, empty, eye, arange

__all__ = [
    "dominating_dtype",
    "result_dtype",
    "unary_result_dtype",
    "operate",
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulo",
    "bitwise_and",
    "bitwise_or",
    "bitwise_xor",
    "invert",
    "zeros",
    "ones",
    "empty",
    "eye",
    "arange",
]
