"""
Array creation helpers.

All helpers validate their arguments before allocating and fall back to the
configured default dtype (``defaults.dtype``) when none is given.
"""

import logging
import math
import numbers
import operator
from typing import Any, Optional, Sequence, Union

import numpy as np

from ndengine.base.reshape_fns import normalize_shape, shape_size
from ndengine.core.dtype import DType, is_integral_value, is_text_value
from ndengine.core.ndarray import NDArray
from ndengine.errors import (
    InvalidArgumentError,
    NegativeSizeError,
    NegativeStepError,
    ShapeMismatchError,
    UnsupportedDataTypeError,
    UnsupportedOperationError,
)
from ndengine.ops.kernels import _arange_fill_nb, _eye_fill_nb
from ndengine.utils.config import Config


logger = logging.getLogger(__name__)

ShapeLike = Union[int, Sequence[int]]
DTypeLike = Optional[Union[DType, str]]


def _resolve_dtype(dtype: DTypeLike) -> DType:
    if dtype is None:
        dtype = Config.get("defaults.dtype", "int32")
    return DType.parse(dtype)


def _require_numeric(dtype: DType, name: str) -> None:
    if dtype.is_text:
        raise UnsupportedOperationError(f"{name}() is not defined for {dtype} arrays")


def _filled(shape: ShapeLike, dtype: DTypeLike, name: str, value_of) -> NDArray:
    shape = normalize_shape(shape)
    dtype = _resolve_dtype(dtype)
    _require_numeric(dtype, name)

    logger.debug(f"{name}: shape={shape}, dtype={dtype}")
    buffer = dtype.allocate(shape_size(shape), value_of(dtype))
    return NDArray(buffer, shape, dtype, copy=False)


def zeros(shape: ShapeLike, dtype: DTypeLike = None) -> NDArray:
    """
    Array of zeros.

    Parameters
    ----------
    shape : int or sequence of int
        Output shape
    dtype : DType or str, optional
        Element type (default: ``defaults.dtype``)

    Returns
    -------
    NDArray

    Examples
    --------
    >>> zeros((3, 6)).reshape(2, 9).shape
    (2, 9)
    """
    return _filled(shape, dtype, "zeros", lambda d: d.zero)


def ones(shape: ShapeLike, dtype: DTypeLike = None) -> NDArray:
    """Array of ones."""
    return _filled(shape, dtype, "ones", lambda d: d.one)


def empty(shape: ShapeLike, dtype: DTypeLike = None) -> NDArray:
    """Array holding the dtype's default value (empty string for object)."""
    shape = normalize_shape(shape)
    dtype = _resolve_dtype(dtype)
    return NDArray(dtype.allocate(shape_size(shape)), shape, dtype, copy=False)


def eye(
    rows: int,
    cols: Optional[int] = None,
    k: int = 0,
    dtype: DTypeLike = None,
) -> NDArray:
    """
    2-D array with ones on the k-th diagonal and zeros elsewhere.

    Parameters
    ----------
    rows : int
        Number of rows
    cols : int, optional
        Number of columns (default: ``rows``)
    k : int
        Diagonal offset; positive is above the main diagonal
    dtype : DType or str, optional
        Element type (default: ``defaults.dtype``)

    Returns
    -------
    NDArray

    Raises
    ------
    InvalidArgumentError
        If ``k >= cols`` or ``|k| >= rows``

    Examples
    --------
    >>> eye(3, 3, 1).tolist()
    [[0, 1, 0], [0, 0, 1], [0, 0, 0]]
    """
    rows = operator.index(rows)
    cols = rows if cols is None else operator.index(cols)
    k = operator.index(k)
    dtype = _resolve_dtype(dtype)
    _require_numeric(dtype, "eye")

    for n in (rows, cols):
        if n < 0:
            raise NegativeSizeError(n)
    if k >= cols:
        raise InvalidArgumentError(
            f"Diagonal offset k={k} must be less than the number of columns ({cols})"
        )
    if abs(k) >= rows:
        raise InvalidArgumentError(
            f"Diagonal offset |k|={abs(k)} must be less than the number of rows ({rows})"
        )

    logger.debug(f"eye: rows={rows}, cols={cols}, k={k}, dtype={dtype}")
    buffer = dtype.allocate(rows * cols, dtype.zero)
    _eye_fill_nb(rows, cols, k, dtype.one, buffer)
    return NDArray(buffer, (rows, cols), dtype, copy=False)


def _check_real(name: str, value: Any) -> None:
    if is_text_value(value) or not isinstance(value, (numbers.Real, np.bool_)):
        raise UnsupportedDataTypeError(f"arange {name} must be a real number, got {value!r}")


def arange(
    start: Union[int, float],
    end: Optional[Union[int, float]] = None,
    step: Union[int, float] = 1,
    dtype: DTypeLike = None,
    shape: Optional[ShapeLike] = None,
) -> NDArray:
    """
    Evenly spaced values in ``[start, end)``.

    ``arange(n)`` is ``arange(0, n)``. A step of 0 counts as 1.

    Parameters
    ----------
    start : int or float
        First value (or the end, when ``end`` is omitted)
    end : int or float, optional
        Exclusive upper bound
    step : int or float
        Spacing between values; must not be negative
    dtype : DType or str, optional
        Element type (default: float64 if any argument is a float, else
        ``defaults.dtype``)
    shape : int or sequence of int, optional
        Output shape; its product must equal the number of values

    Returns
    -------
    NDArray

    Raises
    ------
    NegativeStepError
        If ``step < 0``
    NegativeSizeError
        If ``end < start``
    ShapeMismatchError
        If ``shape`` does not hold exactly the number of values
    UnsupportedDataTypeError
        If the values cannot be stored exactly in ``dtype``

    Examples
    --------
    >>> arange(0, 6, 2).tolist()
    [0, 2, 4]
    >>> arange(6, shape=(2, 3)).tolist()
    [[0, 1, 2], [3, 4, 5]]
    """
    if end is None:
        start, end = 0, start

    for name, value in (("start", start), ("end", end), ("step", step)):
        _check_real(name, value)

    if step < 0:
        raise NegativeStepError(step)
    step = step if step > 0 else 1

    integral_args = all(is_integral_value(v) for v in (start, end, step))
    if dtype is None:
        dtype = _resolve_dtype(None) if integral_args else DType.FLOAT64
    else:
        dtype = DType.parse(dtype)
    _require_numeric(dtype, "arange")

    if integral_args:
        count = -(-(int(end) - int(start)) // int(step))
    else:
        count = math.ceil((end - start) / step)
    if count < 0:
        raise NegativeSizeError(count)

    if shape is None:
        shape = (count,)
    else:
        shape = normalize_shape(shape)
        if shape_size(shape) != count:
            raise ShapeMismatchError(
                count,
                shape,
                message=f"The provided shape {shape} does not match the range size {count}",
            )

    logger.debug(f"arange: start={start}, end={end}, step={step}, count={count}, dtype={dtype}")
    if dtype.is_integral:
        if not integral_args:
            raise UnsupportedDataTypeError(
                f"arange with non-integral arguments cannot produce {dtype} values"
            )
        start, step = int(start), int(step)
        if count:
            for value in (start, start + (count - 1) * step):
                if not dtype.min <= value <= dtype.max:
                    raise UnsupportedDataTypeError(f"Value {value} is out of range for {dtype}")
        buffer = np.empty(count, dtype=dtype.numpy_dtype)
        _arange_fill_nb(np.int64(start), np.int64(step), buffer)
    else:
        buffer = np.empty(count, dtype=dtype.numpy_dtype)
        _arange_fill_nb(np.float64(start), np.float64(step), buffer)

    return NDArray(buffer, shape, dtype, copy=False)
