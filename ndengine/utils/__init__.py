"""Utility functions and helpers."""

from ndengine.utils.config import Config
from ndengine.utils.jit import Kernel, kernel
from ndengine.utils.formatting import format_array

__all__ = [
    "Config",
    "Kernel",
    "kernel",
    "format_array",
]
