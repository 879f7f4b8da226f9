"""
Text rendering of arrays.

Nested brackets, one row per line for arrays of rank 2 and above. Axes
longer than ``display.threshold`` show only ``display.edgeitems`` entries
at each end around ``...``.
"""

from typing import Any, List, Optional

from ndengine.utils.config import Config


def _format_scalar(value: Any) -> str:
    if isinstance(value, (str, bytes)):
        return repr(value)
    return str(value)


def summarised_positions(n: int, threshold: int, edgeitems: int) -> List[Optional[int]]:
    """
    Positions to display along an axis of length ``n``; None marks the gap.

    Examples
    --------
    >>> summarised_positions(5, 40, 10)
    [0, 1, 2, 3, 4]
    >>> summarised_positions(6, 4, 2)
    [0, 1, None, 4, 5]
    """
    if n > threshold and 2 * edgeitems < n:
        return list(range(edgeitems)) + [None] + list(range(n - edgeitems, n))
    return list(range(n))


def _format_block(block, depth: int, ndim: int, indent: int, threshold: int, edgeitems: int) -> str:
    positions = summarised_positions(len(block), threshold, edgeitems)

    if depth == ndim - 1:
        parts = ["..." if p is None else _format_scalar(block[p]) for p in positions]
        return "[" + ", ".join(parts) + "]"

    parts = [
        "..." if p is None
        else _format_block(block[p], depth + 1, ndim, indent, threshold, edgeitems)
        for p in positions
    ]
    separator = "," + "\n" * (ndim - depth - 1) + " " * (indent + depth + 1)
    return "[" + separator.join(parts) + "]"


def format_array(arr, indent: int = 0) -> str:
    """
    Render an NDArray as nested brackets.

    Parameters
    ----------
    arr : NDArray
        Array to render
    indent : int
        Column at which the first bracket is printed (continuation lines
        are aligned to it)

    Returns
    -------
    str

    Examples
    --------
    >>> print(format_array(array([[1, 2], [3, 4]])))
    [[1, 2],
     [3, 4]]
    """
    if arr.ndim == 0:
        return _format_scalar(arr.buffer[0])

    threshold = Config.get("display.threshold", 40)
    edgeitems = Config.get("display.edgeitems", 10)
    nested = arr.buffer.reshape(arr.shape)
    return _format_block(nested, 0, arr.ndim, indent, threshold, edgeitems)
