"""Array core: element types, shape inference and the NDArray class."""

from ndengine.core.dtype import DType, INTEGRAL_BY_SIZE, FLOATING_BY_SIZE
from ndengine.core.enums import OperationType, LeafKind
from ndengine.core.shape_inference import ShapeInfo, infer_shape, iter_leaves
from ndengine.core.ndarray import NDArray, array, as_ndarray, transpose

__all__ = [
    "DType",
    "INTEGRAL_BY_SIZE",
    "FLOATING_BY_SIZE",
    "OperationType",
    "LeafKind",
    "ShapeInfo",
    "infer_shape",
    "iter_leaves",
    "NDArray",
    "array",
    "as_ndarray",
    "transpose",
]
