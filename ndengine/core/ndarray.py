"""
N-dimensional array core.

An NDArray owns one flat, row-major, read-only numpy buffer plus its shape
and dtype. It is immutable: reshape, flatten, transpose and every
arithmetic operation return a new instance with a fresh buffer.
"""

import logging
import operator
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from ndengine.base.reshape_fns import (
    DEFAULT_ITEMSIZE,
    normalize_shape,
    row_major_strides,
    shape_size,
    transpose_offsets,
)
from ndengine.core.dtype import DType
from ndengine.core.enums import OperationType
from ndengine.core.shape_inference import infer_shape, iter_leaves
from ndengine.errors import ShapeMismatchError


logger = logging.getLogger(__name__)


class NDArray:
    """
    Immutable N-dimensional array over a flat row-major buffer.

    Invariants: ``size == product(shape)``, ``len(strides()) == ndim ==
    len(shape)`` and ``len(buffer) == size``.

    Examples
    --------
    >>> a = NDArray([1, 2, 3, 4, 5, 6], (2, 3), DType.INT32)
    >>> a.shape, a.ndim, a.size
    ((2, 3), 2, 6)
    >>> a.transpose().tolist()
    [[1, 4], [2, 5], [3, 6]]
    """

    def __init__(
        self,
        buffer: Any,
        shape: Union[int, Sequence[int]],
        dtype: Union[DType, str],
        copy: bool = True,
    ):
        """
        Parameters
        ----------
        buffer : array-like
            Elements in row-major order (flattened if multi-dimensional)
        shape : int or sequence of int
            Array shape
        dtype : DType or str
            Element type
        copy : bool
            Copy the buffer (False only for buffers nobody else holds)

        Raises
        ------
        ShapeMismatchError
            If the buffer length differs from ``product(shape)``
        """
        dtype = DType.parse(dtype)
        shape = normalize_shape(shape)

        if copy:
            data = np.array(buffer, dtype=dtype.numpy_dtype)
        else:
            data = np.asarray(buffer, dtype=dtype.numpy_dtype)
        data = data.reshape(-1)

        size = shape_size(shape)
        if data.shape[0] != size:
            raise ShapeMismatchError(
                data.shape[0],
                shape,
                message=f"Buffer of {data.shape[0]} elements does not match shape {shape}",
            )

        data.flags.writeable = False
        self._buffer = data
        self._shape = shape
        self._dtype = dtype

    # Introspection

    @property
    def buffer(self) -> np.ndarray:
        """Read-only flat buffer."""
        return self._buffer

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        return self._buffer.shape[0]

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def itemsize(self) -> int:
        return self._dtype.itemsize

    @property
    def nbytes(self) -> int:
        return self.size * self.itemsize

    def strides(self, shape: Optional[Sequence[int]] = None) -> Tuple[int, ...]:
        """
        Row-major byte strides.

        Parameters
        ----------
        shape : sequence of int, optional
            Compute strides for this shape instead, assuming 8-byte
            elements regardless of this array's dtype

        Returns
        -------
        tuple of int

        Examples
        --------
        >>> a = array([[1, 2], [3, 4], [5, 6]])
        >>> a.strides()
        (8, 4)
        >>> a.strides((3, 2))
        (16, 8)
        """
        if shape is None:
            return row_major_strides(self._shape, self.itemsize)
        return row_major_strides(normalize_shape(shape), DEFAULT_ITEMSIZE)

    def element_strides(self) -> Tuple[int, ...]:
        """Strides in elements rather than bytes."""
        return tuple(stride // self.itemsize for stride in self.strides())

    # Layout transforms

    def flatten(self) -> "NDArray":
        """Rank-1 copy in row-major order."""
        return NDArray(self._buffer.copy(), (self.size,), self._dtype, copy=False)

    def reshape(self, *shape: Union[int, Sequence[int]]) -> "NDArray":
        """
        Same elements, new shape.

        Accepts ``reshape(2, 9)`` as well as ``reshape((2, 9))``.

        Raises
        ------
        ShapeMismatchError
            If ``product(shape)`` differs from ``size``
        NegativeSizeError
            If a length is negative
        """
        if len(shape) == 1 and not isinstance(shape[0], (int, np.integer)):
            shape = shape[0]
        new_shape = normalize_shape(shape)

        if shape_size(new_shape) != self.size:
            raise ShapeMismatchError(self.size, new_shape)

        flat = self.flatten()
        return NDArray(flat.buffer, new_shape, self._dtype, copy=False)

    def transpose(self) -> "NDArray":
        """
        Reverse the order of all axes.

        Element ``new[c0, ..., cn]`` is ``old[cn, ..., c0]``. Arbitrary axis
        permutations are not supported.
        """
        offsets = transpose_offsets(self._shape, self.element_strides())
        return NDArray(self._buffer[offsets], self._shape[::-1], self._dtype, copy=False)

    @property
    def T(self) -> "NDArray":
        return self.transpose()

    # Element access

    def __getitem__(self, index) -> Any:
        """
        Integer indexing.

        A full coordinate returns the scalar; a leading partial coordinate
        returns a copied sub-array.
        """
        if not isinstance(index, tuple):
            index = (index,)
        if len(index) > self.ndim:
            raise IndexError(
                f"too many indices for array: array is {self.ndim}-dimensional, "
                f"but {len(index)} were indexed"
            )

        offset = 0
        for axis, (i, n, stride) in enumerate(zip(index, self._shape, self.element_strides())):
            if isinstance(i, slice) or i is Ellipsis or i is None:
                raise TypeError("only integer indices are supported")
            i = operator.index(i)
            position = i + n if i < 0 else i
            if not 0 <= position < n:
                raise IndexError(f"index {i} is out of bounds for axis {axis} with size {n}")
            offset += position * stride

        if len(index) == self.ndim:
            return self._buffer[offset]

        sub_shape = self._shape[len(index):]
        return NDArray(
            self._buffer[offset:offset + shape_size(sub_shape)],
            sub_shape,
            self._dtype,
        )

    def __len__(self) -> int:
        if self.ndim == 0:
            raise TypeError("len() of unsized object")
        return self._shape[0]

    def tolist(self) -> Any:
        """Nested Python lists (a bare scalar for 0-d arrays)."""
        return self._buffer.reshape(self._shape).tolist()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NDArray):
            return NotImplemented
        return (
            self._shape == other._shape
            and self._dtype is other._dtype
            and bool(np.array_equal(self._buffer, other._buffer))
        )

    __hash__ = None

    # Export

    def to_pandas(self, index=None, columns=None):
        """
        Convert to a pandas Series (1-D) or DataFrame (2-D).

        Parameters
        ----------
        index : pd.Index, optional
            Row labels (default: RangeIndex)
        columns : pd.Index, optional
            Column labels for 2-D arrays (default: RangeIndex)
        """
        from ndengine.base.array_wrapper import ArrayWrapper

        return ArrayWrapper.from_shape(self._shape, index=index, columns=columns).wrap(self)

    def __repr__(self) -> str:
        from ndengine.utils.formatting import format_array

        body = format_array(self, indent=len("NDArray("))
        return f"NDArray({body}, dtype={self._dtype})"

    def __str__(self) -> str:
        from ndengine.utils.formatting import format_array

        return format_array(self)

    # Arithmetic

    def _binary(self, other: Any, op: OperationType, reflected: bool = False) -> "NDArray":
        from ndengine.ops.elementwise import operate

        other = as_ndarray(other)
        if reflected:
            return operate(other, self, op)
        return operate(self, other, op)

    def __add__(self, other):
        return self._binary(other, OperationType.ADD)

    def __radd__(self, other):
        return self._binary(other, OperationType.ADD, reflected=True)

    def __sub__(self, other):
        return self._binary(other, OperationType.SUBTRACT)

    def __rsub__(self, other):
        return self._binary(other, OperationType.SUBTRACT, reflected=True)

    def __mul__(self, other):
        return self._binary(other, OperationType.MULTIPLY)

    def __rmul__(self, other):
        return self._binary(other, OperationType.MULTIPLY, reflected=True)

    def __truediv__(self, other):
        return self._binary(other, OperationType.DIVIDE)

    def __rtruediv__(self, other):
        return self._binary(other, OperationType.DIVIDE, reflected=True)

    def __mod__(self, other):
        return self._binary(other, OperationType.MODULO)

    def __rmod__(self, other):
        return self._binary(other, OperationType.MODULO, reflected=True)

    def __and__(self, other):
        return self._binary(other, OperationType.BITWISE_AND)

    def __rand__(self, other):
        return self._binary(other, OperationType.BITWISE_AND, reflected=True)

    def __or__(self, other):
        return self._binary(other, OperationType.BITWISE_OR)

    def __ror__(self, other):
        return self._binary(other, OperationType.BITWISE_OR, reflected=True)

    def __xor__(self, other):
        return self._binary(other, OperationType.BITWISE_XOR)

    def __rxor__(self, other):
        return self._binary(other, OperationType.BITWISE_XOR, reflected=True)

    def __invert__(self):
        from ndengine.ops.elementwise import invert

        return invert(self)


def array(source: Any, dtype: Optional[Union[DType, str]] = None) -> NDArray:
    """
    Build an NDArray from a nested literal.

    Shape and dtype are inferred in a first pass; leaves are copied into the
    buffer in a second one.

    Parameters
    ----------
    source : scalar, nested list/tuple, np.ndarray or NDArray
        Input data
    dtype : DType or str, optional
        Store elements as this dtype instead of the inferred one. Every
        leaf must be representable exactly.

    Returns
    -------
    NDArray

    Raises
    ------
    ShapeError
        If the literal is not rectangular
    UnsupportedDataTypeError
        If a leaf cannot be stored

    Examples
    --------
    >>> a = array([[2, 5], [4, 6], [3, 5]])
    >>> a.shape, a.ndim, a.size, a.dtype
    ((3, 2), 2, 6, <DType.INT32: 'int32'>)
    """
    if isinstance(source, NDArray):
        if dtype is None:
            return NDArray(source.buffer, source.shape, source.dtype)
        source = source.tolist()

    if isinstance(source, np.ndarray):
        if dtype is None:
            return NDArray(source, source.shape, DType.parse(source.dtype))
        source = source.tolist()

    info = infer_shape(source)
    if dtype is None:
        target = info.dtype
        leaves = iter_leaves(source)
    else:
        target = DType.parse(dtype)
        leaves = (target.coerce(leaf) for leaf in iter_leaves(source))

    buffer = np.fromiter(leaves, dtype=target.numpy_dtype, count=info.size)
    logger.debug(f"Built array: shape={info.shape}, dtype={target}")
    return NDArray(buffer, info.shape, target, copy=False)


def as_ndarray(value: Any) -> NDArray:
    """Return ``value`` unchanged if it is an NDArray, else build one."""
    if isinstance(value, NDArray):
        return value
    return array(value)


def transpose(value: Any) -> NDArray:
    """Axis-reversed copy of an array or literal."""
    return as_ndarray(value).transpose()
