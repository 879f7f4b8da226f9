"""
Numeric type promotion for elementwise operations.

Rules:
- The operand with the larger itemsize dominates. On equal itemsize the
  second operand dominates; this tie-break is order dependent on purpose.
- If either operand is floating, the operation runs in floating point. It
  stays at the shared width only when both itemsizes are equal and the
  first operand is floating; every other mix runs at float64.
- Otherwise the operation runs at the dominating integral dtype.
- Bitwise operators and modulo are integral only.
- Text supports addition (concatenation) with text only.
"""

import logging

from ndengine.core.dtype import DType, FLOATING_BY_SIZE
from ndengine.core.enums import OperationType
from ndengine.errors import UnsupportedOperationError


logger = logging.getLogger(__name__)


def dominating_dtype(first: DType, second: DType) -> DType:
    """
    Operand dtype that dominates a binary operation.

    Examples
    --------
    >>> dominating_dtype(DType.INT32, DType.INT8)
    <DType.INT32: 'int32'>
    >>> dominating_dtype(DType.FLOAT32, DType.INT32)
    <DType.INT32: 'int32'>
    """
    if first.itemsize > second.itemsize:
        return first
    return second


def result_dtype(first: DType, second: DType, op: OperationType) -> DType:
    """
    Computation (and result) dtype of ``first <op> second``.

    Parameters
    ----------
    first, second : DType
        Operand dtypes in call order
    op : OperationType
        Binary operator

    Returns
    -------
    DType

    Raises
    ------
    UnsupportedOperationError
        For bitwise operators or modulo on floats, any operator mixing
        text with numbers, any non-addition operator on text, and unary
        operators

    Examples
    --------
    >>> result_dtype(DType.INT32, DType.INT8, OperationType.ADD)
    <DType.INT32: 'int32'>
    >>> result_dtype(DType.FLOAT32, DType.INT32, OperationType.ADD)
    <DType.FLOAT32: 'float32'>
    >>> result_dtype(DType.INT32, DType.FLOAT32, OperationType.ADD)
    <DType.FLOAT64: 'float64'>
    >>> result_dtype(DType.FLOAT32, DType.INT64, OperationType.ADD)
    <DType.FLOAT64: 'float64'>
    """
    if op is OperationType.INVERT:
        raise UnsupportedOperationError(
            f"Operation '{op.symbol}' is unary and takes a single operand"
        )

    if first.is_text or second.is_text:
        if not (first.is_text and second.is_text):
            raise UnsupportedOperationError(
                f"Cannot apply '{op.symbol}' to {first} and {second}: "
                f"text and numbers do not mix"
            )
        if op is not OperationType.ADD:
            raise UnsupportedOperationError(
                f"Operation '{op.symbol}' is not supported on text"
            )
        return DType.OBJECT

    floating = first.is_floating or second.is_floating
    if floating and (op.is_bitwise or op is OperationType.MODULO):
        raise UnsupportedOperationError(
            f"Operation '{op.symbol}' is not supported on {first} and {second}"
        )

    dominating = dominating_dtype(first, second)
    if floating:
        # Single precision only when the first operand already is one
        if first.is_floating and first.itemsize == second.itemsize:
            dtype = FLOATING_BY_SIZE[dominating.itemsize]
        else:
            dtype = DType.FLOAT64
    else:
        dtype = dominating

    logger.debug(f"{first} {op.symbol} {second} -> {dtype}")
    return dtype


def unary_result_dtype(dtype: DType, op: OperationType) -> DType:
    """Result dtype of a unary operator (only INVERT, integral only)."""
    if not dtype.is_integral:
        raise UnsupportedOperationError(
            f"Operation '{op.symbol}' is not supported on {dtype}"
        )
    return dtype
