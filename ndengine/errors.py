"""
Exception taxonomy for the array engine.

Every error derives from NDEngineError and from the builtin a caller would
naturally catch (ValueError for bad shapes and arguments, TypeError for
dtype problems), so generic handlers keep working.
"""

from typing import Optional, Sequence, Tuple


class NDEngineError(Exception):
    """Base class for all ndengine errors."""


class ShapeError(NDEngineError, ValueError):
    """
    Structural shape failure.

    Raised for non-rectangular nested literals and for shapes that cannot be
    broadcast together.

    Attributes
    ----------
    shape : tuple or None
        Partial shape committed before the inhomogeneous depth
    depth : int or None
        Nesting depth at which the inhomogeneity was detected
    shapes : tuple or None
        The two shapes that failed to broadcast
    """

    def __init__(
        self,
        message: str,
        shape: Optional[Tuple[int, ...]] = None,
        depth: Optional[int] = None,
        shapes: Optional[Tuple[Tuple[int, ...], Tuple[int, ...]]] = None,
    ):
        super().__init__(message)
        self.shape = shape
        self.depth = depth
        self.shapes = shapes

    @classmethod
    def inhomogeneous(cls, shape: Sequence[int], depth: int) -> "ShapeError":
        partial = tuple(shape[:depth])
        return cls(
            f"The requested array has an inhomogeneous shape after {depth} "
            f"dimensions. The detected shape was {partial} + inhomogeneous part.",
            shape=partial,
            depth=depth,
        )

    @classmethod
    def incompatible(cls, shape1: Sequence[int], shape2: Sequence[int]) -> "ShapeError":
        shape1, shape2 = tuple(shape1), tuple(shape2)
        return cls(
            f"Shapes cannot be broadcast together: {shape1} and {shape2}",
            shapes=(shape1, shape2),
        )


class ShapeMismatchError(ShapeError):
    """Requested element count differs from the available element count."""

    def __init__(self, size: int, shape: Sequence[int], message: Optional[str] = None):
        shape = tuple(shape)
        if message is None:
            message = f"Cannot reshape array of size {size} into shape {shape}"
        super().__init__(message, shape=shape)
        self.size = size


class NegativeSizeError(NDEngineError, ValueError):
    """Array length or computed element count is negative."""

    def __init__(self, size: int):
        super().__init__(f"Size ({size}) of the array cannot be negative")
        self.size = size


class NegativeStepError(NDEngineError, ValueError):
    """Range step is negative."""

    def __init__(self, step):
        super().__init__(f"Step value ({step}) cannot be negative")
        self.step = step


class InvalidArgumentError(NDEngineError, ValueError):
    """Argument outside its valid domain."""


class UnsupportedOperationError(NDEngineError, TypeError):
    """Operation is not defined for the given dtype combination."""


class UnsupportedDataTypeError(NDEngineError, TypeError):
    """Value cannot be represented by any (or the requested) dtype."""


class DivisionByZeroError(NDEngineError, ZeroDivisionError):
    """Integral division or modulo by zero."""
