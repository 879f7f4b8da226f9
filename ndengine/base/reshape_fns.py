"""
Shape, stride and broadcasting utilities.

Pure-Python helpers work on shape tuples. The numba kernels turn a logical
output index space into offsets into a flat, row-major source buffer, so
every transform and broadcast becomes a single gather ``buffer[offsets]``
that works for numeric and object buffers alike.
"""

import operator
from functools import reduce
from typing import Iterable, Sequence, Tuple, Union

import numba
import numpy as np

from ndengine.errors import NegativeSizeError, ShapeError
from ndengine.utils.jit import kernel


# Element size assumed by strides() when an explicit shape is given
DEFAULT_ITEMSIZE = 8


def normalize_shape(shape: Union[int, Iterable[int]]) -> Tuple[int, ...]:
    """
    Convert an int or a sequence of ints into a validated shape tuple.

    Parameters
    ----------
    shape : int or sequence of int
        Requested shape

    Returns
    -------
    tuple of int

    Raises
    ------
    NegativeSizeError
        If any length is negative
    TypeError
        If a length is not an integer

    Examples
    --------
    >>> normalize_shape(3)
    (3,)
    >>> normalize_shape([2, 9])
    (2, 9)
    """
    if isinstance(shape, (int, np.integer)):
        shape = (shape,)
    result = tuple(operator.index(n) for n in shape)
    for n in result:
        if n < 0:
            raise NegativeSizeError(n)
    return result


def shape_size(shape: Sequence[int]) -> int:
    """Number of elements in a shape (1 for the scalar shape ``()``)."""
    size = 1
    for n in shape:
        size *= n
    return size


def row_major_strides(shape: Sequence[int], itemsize: int) -> Tuple[int, ...]:
    """
    Byte strides of a C-contiguous array.

    Examples
    --------
    >>> row_major_strides((3, 2), 4)
    (8, 4)
    >>> row_major_strides((), 8)
    ()
    """
    strides = [0] * len(shape)
    stride = itemsize
    for i in range(len(shape) - 1, -1, -1):
        strides[i] = stride
        stride *= shape[i]
    return tuple(strides)


def broadcast_shapes(shape1: Sequence[int], shape2: Sequence[int]) -> Tuple[int, ...]:
    """
    Common shape of two shapes under right-aligned broadcasting.

    Parameters
    ----------
    shape1, shape2 : sequence of int
        Operand shapes

    Returns
    -------
    tuple of int

    Raises
    ------
    ShapeError
        If an aligned pair differs and neither length is 1

    Examples
    --------
    >>> broadcast_shapes((2, 2), (2,))
    (2, 2)
    >>> broadcast_shapes((3, 1), (1, 4))
    (3, 4)
    """
    len1, len2 = len(shape1), len(shape2)
    max_len = max(len1, len2)

    result = [0] * max_len
    for i in range(max_len):
        dim1 = shape1[len1 - i - 1] if i < len1 else 1
        dim2 = shape2[len2 - i - 1] if i < len2 else 1

        if dim1 == dim2 or dim2 == 1:
            result[max_len - i - 1] = dim1
        elif dim1 == 1:
            # A length-1 axis stretches to any length, including 0
            result[max_len - i - 1] = dim2
        else:
            raise ShapeError.incompatible(shape1, shape2)

    return tuple(result)


def broadcast(*shapes: Sequence[int]) -> Tuple[int, ...]:
    """
    Broadcast any number of shapes together.

    Examples
    --------
    >>> broadcast((5, 1, 3), (4, 1), (3,))
    (5, 4, 3)
    """
    return reduce(broadcast_shapes, shapes, ())


def as_index_array(values: Sequence[int]) -> np.ndarray:
    """Shape or stride tuple as the int64 vector the kernels expect."""
    return np.asarray(values, dtype=np.int64).reshape(-1)


@kernel()
def _broadcast_offsets_nb(out_shape, src_shape, src_strides, offsets):
    """
    Offsets into a flat source buffer for every index of a broadcast output.

    Parameters
    ----------
    out_shape : np.ndarray
        Broadcast shape (int64)
    src_shape : np.ndarray
        Operand shape, right-aligned against ``out_shape``
    src_strides : np.ndarray
        Operand strides in elements
    offsets : np.ndarray
        Output, one int64 offset per broadcast index
    """
    nd = out_shape.shape[0]
    src_nd = src_shape.shape[0]
    lead = nd - src_nd

    out_strides = np.empty(nd, dtype=np.int64)
    acc = 1
    for d in range(nd - 1, -1, -1):
        out_strides[d] = acc
        acc *= out_shape[d]

    for i in numba.prange(offsets.shape[0]):
        flat_index = np.int64(i)
        offset = 0
        for j in range(src_nd):
            # Length-1 source axes stay pinned at coordinate 0
            if src_shape[j] != 1:
                d = lead + j
                coord = (flat_index // out_strides[d]) % out_shape[d]
                offset += coord * src_strides[j]
        offsets[i] = offset


@kernel()
def _transpose_offsets_nb(shape, strides, offsets):
    """
    Offsets into a flat source buffer for every index of its axis reversal.

    Output axis ``d`` walks source axis ``nd - 1 - d``.
    """
    nd = shape.shape[0]

    out_strides = np.empty(nd, dtype=np.int64)
    acc = 1
    for d in range(nd - 1, -1, -1):
        out_strides[d] = acc
        acc *= shape[nd - 1 - d]

    for i in numba.prange(offsets.shape[0]):
        flat_index = np.int64(i)
        offset = 0
        for d in range(nd):
            axis = nd - 1 - d
            coord = (flat_index // out_strides[d]) % shape[axis]
            offset += coord * strides[axis]
        offsets[i] = offset


def broadcast_offsets(
    out_shape: Sequence[int],
    src_shape: Sequence[int],
    src_strides: Sequence[int],
) -> np.ndarray:
    """
    Gather offsets mapping a broadcast index space onto one operand.

    Parameters
    ----------
    out_shape : sequence of int
        Broadcast shape
    src_shape : sequence of int
        Operand shape (broadcast-compatible with ``out_shape``)
    src_strides : sequence of int
        Operand strides in elements (byte strides divided by itemsize)

    Returns
    -------
    np.ndarray
        int64 offsets of length ``product(out_shape)``

    Examples
    --------
    >>> broadcast_offsets((2, 2), (2,), (1,))
    array([0, 1, 0, 1])
    """
    offsets = np.empty(shape_size(out_shape), dtype=np.int64)
    _broadcast_offsets_nb(
        as_index_array(out_shape),
        as_index_array(src_shape),
        as_index_array(src_strides),
        offsets,
    )
    return offsets


def transpose_offsets(shape: Sequence[int], strides: Sequence[int]) -> np.ndarray:
    """
    Gather offsets reading a row-major buffer in reversed-axes order.

    Parameters
    ----------
    shape : sequence of int
        Source shape
    strides : sequence of int
        Source strides in elements

    Returns
    -------
    np.ndarray
        int64 offsets; ``buffer[offsets]`` is the transposed buffer

    Examples
    --------
    >>> transpose_offsets((2, 3), (3, 1))
    array([0, 3, 1, 4, 2, 5])
    """
    offsets = np.empty(shape_size(shape), dtype=np.int64)
    _transpose_offsets_nb(as_index_array(shape), as_index_array(strides), offsets)
    return offsets
