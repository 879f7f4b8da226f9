"""Base utilities for shapes, strides, broadcasting and labelled export."""

from ndengine.base.array_wrapper import ArrayWrapper
from ndengine.base.reshape_fns import (
    broadcast,
    broadcast_shapes,
    broadcast_offsets,
    transpose_offsets,
    normalize_shape,
    row_major_strides,
    shape_size,
)

__all__ = [
    "ArrayWrapper",
    "broadcast",
    "broadcast_shapes",
    "broadcast_offsets",
    "transpose_offsets",
    "normalize_shape",
    "row_major_strides",
    "shape_size",
]
