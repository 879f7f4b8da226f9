"""
Numba loop kernels for elementwise arithmetic and array creation.

Operands arrive already gathered into the broadcast index space and cast to
the computation dtype, so every kernel is a flat loop writing one output
slot per iteration.
"""

import numba
import numpy as np

from ndengine.core.enums import OperationType
from ndengine.utils.jit import kernel


_ADD = int(OperationType.ADD)
_SUBTRACT = int(OperationType.SUBTRACT)
_MULTIPLY = int(OperationType.MULTIPLY)
_DIVIDE = int(OperationType.DIVIDE)
_MODULO = int(OperationType.MODULO)
_BITWISE_AND = int(OperationType.BITWISE_AND)
_BITWISE_OR = int(OperationType.BITWISE_OR)
_BITWISE_XOR = int(OperationType.BITWISE_XOR)


@kernel(error_model="numpy")
def _integral_binary_nb(x, y, op, out):
    """
    Integral binary operation at the width of ``out``.

    Division truncates toward zero and modulo keeps the sign of the
    dividend. Results wrap when stored into a narrower ``out``. Zero
    divisors and non-binary codes must be rejected by the caller.

    Parameters
    ----------
    x, y : np.ndarray
        Operands, same length and integral dtype as ``out``
    op : int
        OperationType code
    out : np.ndarray
        Output buffer
    """
    for i in numba.prange(out.shape[0]):
        a = np.int64(x[i])
        b = np.int64(y[i])
        if op == _ADD:
            out[i] = a + b
        elif op == _SUBTRACT:
            out[i] = a - b
        elif op == _MULTIPLY:
            out[i] = a * b
        elif op == _DIVIDE or op == _MODULO:
            q = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                q = -q
            if op == _DIVIDE:
                out[i] = q
            else:
                out[i] = a - q * b
        elif op == _BITWISE_AND:
            out[i] = a & b
        elif op == _BITWISE_OR:
            out[i] = a | b
        elif op == _BITWISE_XOR:
            out[i] = a ^ b


@kernel(error_model="numpy")
def _floating_binary_nb(x, y, op, out):
    """
    Floating binary operation at the width of ``out``.

    Only + - * / are defined; division by zero yields inf/nan.
    """
    for i in numba.prange(out.shape[0]):
        a = x[i]
        b = y[i]
        if op == _ADD:
            out[i] = a + b
        elif op == _SUBTRACT:
            out[i] = a - b
        elif op == _MULTIPLY:
            out[i] = a * b
        elif op == _DIVIDE:
            out[i] = a / b


@kernel()
def _invert_nb(x, out):
    """Bitwise NOT of an integral buffer."""
    for i in numba.prange(out.shape[0]):
        out[i] = ~x[i]


@kernel()
def _eye_fill_nb(rows, cols, k, one, out):
    """Write ``one`` at every (i, i + k) of a zero-filled rows x cols buffer."""
    for i in numba.prange(rows):
        row = np.int64(i)
        j = row + k
        if 0 <= j < cols:
            out[row * cols + j] = one


@kernel()
def _arange_fill_nb(start, step, out):
    """Fill ``out`` with start, start + step, start + 2 * step, ..."""
    for i in numba.prange(out.shape[0]):
        out[i] = start + np.int64(i) * step
