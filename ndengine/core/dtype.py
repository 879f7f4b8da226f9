"""
Element types.

DType is a closed set of element kinds: fixed-width signed integers,
fixed-width floats and an opaque ``object`` kind used for text. Each member
knows its byte size, its default/zero/one values and the numpy dtype that
backs its buffers. Promotion relies on the reverse lookup tables keyed by
byte width.
"""

import numbers
from enum import Enum
from typing import Any, Optional, Union

import numpy as np

from ndengine.errors import UnsupportedDataTypeError


class DType(Enum):
    """Element type of an NDArray."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    OBJECT = "object"

    @property
    def itemsize(self) -> int:
        """Element size in bytes (a reference for object)."""
        return _ITEMSIZE[self]

    @property
    def numpy_dtype(self) -> np.dtype:
        return _NUMPY_DTYPE[self]

    @property
    def is_integral(self) -> bool:
        return self in INTEGRAL_BY_SIZE.values()

    @property
    def is_floating(self) -> bool:
        return self in FLOATING_BY_SIZE.values()

    @property
    def is_numeric(self) -> bool:
        return self is not DType.OBJECT

    @property
    def is_text(self) -> bool:
        return self is DType.OBJECT

    @property
    def default_value(self) -> Any:
        """Value held by freshly allocated (``empty``) buffers."""
        if self.is_text:
            return ""
        return self.numpy_dtype.type(0)

    @property
    def zero(self) -> Optional[Any]:
        """Additive identity, or None for text."""
        return None if self.is_text else self.numpy_dtype.type(0)

    @property
    def one(self) -> Optional[Any]:
        """Multiplicative identity, or None for text."""
        return None if self.is_text else self.numpy_dtype.type(1)

    @property
    def min(self) -> Any:
        if self.is_integral:
            return int(np.iinfo(self.numpy_dtype).min)
        if self.is_floating:
            return float(np.finfo(self.numpy_dtype).min)
        raise UnsupportedDataTypeError(f"{self.value} has no numeric range")

    @property
    def max(self) -> Any:
        if self.is_integral:
            return int(np.iinfo(self.numpy_dtype).max)
        if self.is_floating:
            return float(np.finfo(self.numpy_dtype).max)
        raise UnsupportedDataTypeError(f"{self.value} has no numeric range")

    @classmethod
    def from_size(cls, size: int, floating: bool = False) -> "DType":
        """
        Smallest dtype of the requested kind at least ``size`` bytes wide.

        Parameters
        ----------
        size : int
            Required byte width
        floating : bool
            Look up the floating table instead of the integral one

        Returns
        -------
        DType

        Examples
        --------
        >>> DType.from_size(2)
        <DType.INT16: 'int16'>
        >>> DType.from_size(2, floating=True)
        <DType.FLOAT32: 'float32'>
        """
        table = FLOATING_BY_SIZE if floating else INTEGRAL_BY_SIZE
        for width in sorted(table):
            if width >= size:
                return table[width]
        kind = "floating" if floating else "integral"
        raise UnsupportedDataTypeError(f"No {kind} dtype is {size} bytes wide")

    @classmethod
    def parse(cls, value: Union["DType", str, np.dtype, type]) -> "DType":
        """
        Resolve a DType from a member, its name, or a numpy dtype.

        Examples
        --------
        >>> DType.parse("float32")
        <DType.FLOAT32: 'float32'>
        >>> DType.parse(np.int16)
        <DType.INT16: 'int16'>
        """
        if isinstance(value, DType):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        try:
            np_dtype = np.dtype(value)
        except TypeError:
            raise UnsupportedDataTypeError(f"Data type not understood: {value!r}") from None

        if np_dtype.kind in "OUS":
            return DType.OBJECT
        if np_dtype.kind == "b":
            # Booleans are 1-byte integers, as for bool literals
            return DType.INT8
        for member, backing in _NUMPY_DTYPE.items():
            if backing == np_dtype:
                return member
        raise UnsupportedDataTypeError(f"Data type you have provided is not supported: {np_dtype}")

    def coerce(self, value: Any) -> Any:
        """
        Convert one scalar into this dtype without truncating.

        Integral dtypes accept integers (and booleans) inside their range.
        Floating dtypes accept any real number. Object accepts anything.

        Raises
        ------
        UnsupportedDataTypeError
            If the value cannot be held exactly by this dtype
        """
        if self.is_text:
            return value

        if is_text_value(value):
            raise UnsupportedDataTypeError(
                f"Cannot store text {value!r} in a {self.value} array"
            )

        if self.is_integral:
            if not is_integral_value(value):
                raise UnsupportedDataTypeError(
                    f"Cannot store {value!r} in a {self.value} array without truncation"
                )
            as_int = int(value)
            if not self.min <= as_int <= self.max:
                raise UnsupportedDataTypeError(
                    f"Value {as_int} is out of range for {self.value}"
                )
            return self.numpy_dtype.type(as_int)

        if not (is_integral_value(value) or isinstance(value, numbers.Real)):
            raise UnsupportedDataTypeError(
                f"Cannot store {value!r} in a {self.value} array"
            )
        return self.numpy_dtype.type(value)

    def allocate(self, size: int, fill: Any = None) -> np.ndarray:
        """
        Allocate a 1-D buffer of ``size`` elements.

        Parameters
        ----------
        size : int
            Number of elements
        fill : scalar, optional
            Fill value (default: the dtype's default value)

        Returns
        -------
        np.ndarray
        """
        if fill is None:
            fill = self.default_value
        return np.full(size, fill, dtype=self.numpy_dtype)

    def __str__(self) -> str:
        return self.value


def is_text_value(value: Any) -> bool:
    return isinstance(value, (str, bytes))


def is_integral_value(value: Any) -> bool:
    return isinstance(value, (numbers.Integral, np.bool_))


INTEGRAL_BY_SIZE = {
    1: DType.INT8,
    2: DType.INT16,
    4: DType.INT32,
    8: DType.INT64,
}

FLOATING_BY_SIZE = {
    4: DType.FLOAT32,
    8: DType.FLOAT64,
}

_ITEMSIZE = {
    DType.INT8: 1,
    DType.INT16: 2,
    DType.INT32: 4,
    DType.INT64: 8,
    DType.FLOAT32: 4,
    DType.FLOAT64: 8,
    DType.OBJECT: 8,
}

_NUMPY_DTYPE = {
    DType.INT8: np.dtype(np.int8),
    DType.INT16: np.dtype(np.int16),
    DType.INT32: np.dtype(np.int32),
    DType.INT64: np.dtype(np.int64),
    DType.FLOAT32: np.dtype(np.float32),
    DType.FLOAT64: np.dtype(np.float64),
    DType.OBJECT: np.dtype(object),
}
