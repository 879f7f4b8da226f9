"""
ndengine - N-dimensional numeric array engine

Shape/dtype inference from nested literals, row-major buffers, layout
transforms and broadcasting elementwise arithmetic with explicit type
promotion.
"""

__version__ = "0.1.0"

from ndengine.core.dtype import DType
from ndengine.core.enums import OperationType
from ndengine.core.ndarray import NDArray, array, transpose
from ndengine.base.reshape_fns import broadcast, broadcast_shapes
from ndengine.ops.creation import zeros, ones, empty, eye, arange
from ndengine.ops.elementwise import (
    operate,
    add,
    subtract,
    multiply,
    divide,
    modulo,
    bitwise_and,
    bitwise_or,
    bitwise_xor,
    invert,
)
from ndengine.utils.config import Config
from ndengine.errors import (
    NDEngineError,
    ShapeError,
    ShapeMismatchError,
    NegativeSizeError,
    NegativeStepError,
    InvalidArgumentError,
    UnsupportedOperationError,
    UnsupportedDataTypeError,
    DivisionByZeroError,
)

__all__ = [
    "DType",
    "OperationType",
    "NDArray",
    "array",
    "transpose",
    "broadcast",
    "broadcast_shapes",
    # Creation
    "zeros",
    "ones",
    "empty",
    "eye",
    "arange",
    # Arithmetic
    "operate",
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulo",
    "bitwise_and",
    "bitwise_or",
    "bitwise_xor",
    "invert",
    "Config",
    # Errors
    "NDEngineError",
    "ShapeError",
    "ShapeMismatchError",
    "NegativeSizeError",
    "NegativeStepError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "UnsupportedDataTypeError",
    "DivisionByZeroError",
]
