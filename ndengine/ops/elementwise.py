"""
Broadcasting elementwise operations.

Every operation follows the same pipeline:

1. Broadcast the operand shapes and resolve the computation dtype.
2. Map each flat output index onto each operand's flat buffer (numba
   offset kernel), pinning length-1 axes to coordinate 0.
3. Gather the operand values, cast them to the computation dtype and run
   the arithmetic kernel into a preallocated output buffer.
4. Wrap the buffer as a new NDArray with the broadcast shape.
"""

import logging
from typing import Any

import numpy as np

from ndengine.base.reshape_fns import broadcast_offsets, broadcast_shapes, shape_size
from ndengine.core.enums import OperationType
from ndengine.core.ndarray import NDArray, as_ndarray
from ndengine.errors import DivisionByZeroError
from ndengine.ops.kernels import _floating_binary_nb, _integral_binary_nb, _invert_nb
from ndengine.ops.promotion import result_dtype, unary_result_dtype


logger = logging.getLogger(__name__)


def _gather(arr: NDArray, out_shape) -> np.ndarray:
    """Operand values laid out over the broadcast index space."""
    offsets = broadcast_offsets(out_shape, arr.shape, arr.element_strides())
    return arr.buffer[offsets]


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def operate(arr1: Any, arr2: Any, op: OperationType) -> NDArray:
    """
    Apply a binary operator elementwise with broadcasting.

    Parameters
    ----------
    arr1, arr2 : NDArray or literal
        Operands (literals go through ``array()``)
    op : OperationType
        Operator

    Returns
    -------
    NDArray
        Result with the broadcast shape and the promoted dtype

    Raises
    ------
    ShapeError
        If the shapes cannot be broadcast together
    UnsupportedOperationError
        If the operator is unary or undefined for the dtype combination
    DivisionByZeroError
        On integral division or modulo by zero
    """
    op = OperationType(op)
    a = as_ndarray(arr1)
    b = as_ndarray(arr2)

    dtype = result_dtype(a.dtype, b.dtype, op)
    out_shape = broadcast_shapes(a.shape, b.shape)
    total = shape_size(out_shape)

    logger.debug(f"{op.name}: {a.shape} x {b.shape} -> {out_shape} as {dtype}")

    x = _gather(a, out_shape)
    y = _gather(b, out_shape)

    if dtype.is_text:
        out = np.fromiter(
            (_as_text(left) + _as_text(right) for left, right in zip(x, y)),
            dtype=object,
            count=total,
        )
        return NDArray(out, out_shape, dtype, copy=False)

    x = x.astype(dtype.numpy_dtype, copy=False)
    y = y.astype(dtype.numpy_dtype, copy=False)

    if dtype.is_integral and op in (OperationType.DIVIDE, OperationType.MODULO):
        if total and not np.all(y):
            raise DivisionByZeroError(f"Integer {op.name.lower()} by zero")

    out = np.empty(total, dtype=dtype.numpy_dtype)
    if dtype.is_integral:
        _integral_binary_nb(x, y, int(op), out)
    else:
        _floating_binary_nb(x, y, int(op), out)

    return NDArray(out, out_shape, dtype, copy=False)


def invert(arr: Any) -> NDArray:
    """
    Bitwise NOT of an integral array.

    Raises
    ------
    UnsupportedOperationError
        For floating or text arrays

    Examples
    --------
    >>> invert(array([0, 5, -1])).tolist()
    [-1, -6, 0]
    """
    a = as_ndarray(arr)
    dtype = unary_result_dtype(a.dtype, OperationType.INVERT)

    x = _gather(a, a.shape)
    out = np.empty(a.size, dtype=dtype.numpy_dtype)
    _invert_nb(x, out)
    return NDArray(out, a.shape, dtype, copy=False)


def add(arr1: Any, arr2: Any) -> NDArray:
    """
    Elementwise sum (string concatenation for text arrays).

    Examples
    --------
    >>> add([[1, 2], [3, 4]], [10, 20]).tolist()
    [[11, 22], [13, 24]]
    """
    return operate(arr1, arr2, OperationType.ADD)


def subtract(arr1: Any, arr2: Any) -> NDArray:
    return operate(arr1, arr2, OperationType.SUBTRACT)


def multiply(arr1: Any, arr2: Any) -> NDArray:
    return operate(arr1, arr2, OperationType.MULTIPLY)


def divide(arr1: Any, arr2: Any) -> NDArray:
    """
    Elementwise quotient.

    Integral operands use truncating division at the promoted width;
    floating operands follow IEEE-754.
    """
    return operate(arr1, arr2, OperationType.DIVIDE)


def modulo(arr1: Any, arr2: Any) -> NDArray:
    """Remainder of truncating division (sign follows the dividend); integral only."""
    return operate(arr1, arr2, OperationType.MODULO)


def bitwise_and(arr1: Any, arr2: Any) -> NDArray:
    return operate(arr1, arr2, OperationType.BITWISE_AND)


def bitwise_or(arr1: Any, arr2: Any) -> NDArray:
    return operate(arr1, arr2, OperationType.BITWISE_OR)


def bitwise_xor(arr1: Any, arr2: Any) -> NDArray:
    return operate(arr1, arr2, OperationType.BITWISE_XOR)
