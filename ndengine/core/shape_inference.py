"""
Shape and dtype inference for nested literals.

A nested literal (scalars inside lists/tuples of fixed depth) is described
by a single ShapeInfo computed in one depth-first pass. Copying the leaves
into a buffer is a separate second pass (see ``iter_leaves``), so the
descriptor is authoritative before any allocation happens.
"""

import numbers
from typing import Any, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from ndengine.core.dtype import DType, FLOATING_BY_SIZE, INTEGRAL_BY_SIZE, is_text_value
from ndengine.core.enums import LeafKind
from ndengine.errors import ShapeError, UnsupportedDataTypeError
from ndengine.utils.config import Config


# dtype of a literal with no leaves at all, e.g. [] or [[], []]
EMPTY_DTYPE = DType.FLOAT64


class ShapeInfo(NamedTuple):
    """Result of shape inference."""

    ndim: int
    shape: Tuple[int, ...]
    dtype: DType

    @property
    def size(self) -> int:
        size = 1
        for n in self.shape:
            size *= n
        return size


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def classify_leaf(value: Any) -> Tuple[LeafKind, int]:
    """
    Classify a scalar leaf by kind and byte width.

    Parameters
    ----------
    value : scalar
        Leaf value

    Returns
    -------
    tuple
        (kind, width)

    Examples
    --------
    >>> classify_leaf(np.int8(3))
    (<LeafKind.INTEGRAL: 0>, 1)
    >>> classify_leaf(3)
    (<LeafKind.INTEGRAL: 0>, 4)
    >>> classify_leaf(2**40)
    (<LeafKind.INTEGRAL: 0>, 8)
    >>> classify_leaf(1.5)
    (<LeafKind.FLOATING: 1>, 8)
    """
    if is_text_value(value):
        return LeafKind.TEXT, DType.OBJECT.itemsize

    if isinstance(value, (np.integer, np.bool_)):
        return LeafKind.INTEGRAL, _integral_width(int(value), value.dtype.itemsize)

    if isinstance(value, numbers.Integral):
        # Python ints carry no width of their own
        return LeafKind.INTEGRAL, _integral_width(int(value), Config.get("inference.int_width", 4))

    if isinstance(value, np.floating):
        return LeafKind.FLOATING, value.dtype.itemsize

    if isinstance(value, float):
        return LeafKind.FLOATING, 8

    raise UnsupportedDataTypeError(
        f"Unsupported element {value!r} of type {type(value).__name__}"
    )


def _integral_width(value: int, minimum: int) -> int:
    for width in sorted(INTEGRAL_BY_SIZE):
        if width < minimum:
            continue
        dtype = INTEGRAL_BY_SIZE[width]
        if dtype.min <= value <= dtype.max:
            return width
    raise UnsupportedDataTypeError(f"Integer {value} does not fit in 64 bits")


def resolve_dtype(kinds: set, width: int) -> DType:
    """Pick the dtype for a set of leaf kinds and the widest leaf width."""
    if not kinds:
        return EMPTY_DTYPE
    if LeafKind.TEXT in kinds:
        return DType.OBJECT
    if LeafKind.FLOATING in kinds:
        return DType.from_size(width, floating=True)
    return DType.from_size(width)


def infer_shape(source: Any) -> ShapeInfo:
    """
    Infer (ndim, shape, dtype) of a nested literal.

    Parameters
    ----------
    source : scalar or nested list/tuple
        Literal input

    Returns
    -------
    ShapeInfo

    Raises
    ------
    ShapeError
        If siblings at some depth differ in length, or sequences and
        scalars are mixed at the same depth
    UnsupportedDataTypeError
        If a leaf is not a number or text

    Examples
    --------
    >>> infer_shape([[2, 5], [4, 6], [3, 5]])
    ShapeInfo(ndim=2, shape=(3, 2), dtype=<DType.INT32: 'int32'>)
    >>> infer_shape(7)
    ShapeInfo(ndim=0, shape=(), dtype=<DType.INT32: 'int32'>)
    """
    shape: List[int] = []
    kinds = set()
    widest = 0
    leaf_depth: Optional[int] = None

    stack = [(source, 0)]
    while stack:
        node, depth = stack.pop()

        if is_sequence(node):
            if leaf_depth is not None and depth >= leaf_depth:
                raise ShapeError.inhomogeneous(shape, leaf_depth)

            length = len(node)
            if depth < len(shape):
                if shape[depth] != length:
                    raise ShapeError.inhomogeneous(shape, depth)
            else:
                shape.append(length)

            # Reversed so that siblings are visited left to right
            for child in reversed(node):
                stack.append((child, depth + 1))
            continue

        if leaf_depth is None:
            if depth < len(shape):
                # Scalar where a sibling branch already went deeper
                raise ShapeError.inhomogeneous(shape, depth)
            leaf_depth = depth
        elif depth != leaf_depth:
            raise ShapeError.inhomogeneous(shape, min(depth, leaf_depth))

        kind, width = classify_leaf(node)
        kinds.add(kind)
        widest = max(widest, width)

    dtype = resolve_dtype(kinds, widest)
    return ShapeInfo(ndim=len(shape), shape=tuple(shape), dtype=dtype)


def iter_leaves(source: Any) -> Iterator[Any]:
    """
    Yield the leaves of a validated nested literal in row-major order.

    Examples
    --------
    >>> list(iter_leaves([[1, 2], [3, 4]]))
    [1, 2, 3, 4]
    """
    if not is_sequence(source):
        yield source
        return

    stack = [iter(source)]
    while stack:
        for item in stack[-1]:
            if is_sequence(item):
                stack.append(iter(item))
                break
            yield item
        else:
            stack.pop()
