"""
Numba compilation helpers.

Loop kernels are written once with ``numba.prange`` and compiled as a
serial variant (where ``prange`` degrades to ``range``) or a parallel one.
The variant and its compile options (``numba.fastmath``, ``numba.cache``)
are read from the global Config on every call, so changing them takes
effect on the next call.
"""

import functools
import logging
from typing import Any, Dict, Tuple

import numba

from ndengine.utils.config import Config


logger = logging.getLogger(__name__)


class Kernel:
    """
    A loop kernel compiled on demand for each set of options.

    By convention the last positional argument is the output array; its
    length decides whether the parallel variant is worth dispatching to.
    Dispatchers are created lazily and kept per option set.
    """

    def __init__(self, py_func, **options):
        self.py_func = py_func
        self._options = options
        self._dispatchers: Dict[Tuple, Any] = {}
        functools.update_wrapper(self, py_func)

    def options(self, parallel: bool = False) -> Dict[str, Any]:
        """``numba.jit`` options for the current configuration."""
        fastmath = bool(Config.get("numba.fastmath", False))
        jit_options = {"nopython": True, "fastmath": fastmath}
        if parallel:
            jit_options["parallel"] = True
        else:
            # The on-disk cache does not tell fastmath builds apart
            jit_options["cache"] = bool(Config.get("numba.cache", True)) and not fastmath
        jit_options.update(self._options)
        return jit_options

    def dispatcher(self, parallel: bool = False):
        """Compiled dispatcher for the current configuration."""
        jit_options = self.options(parallel)
        key = tuple(sorted(jit_options.items()))
        if key not in self._dispatchers:
            self._dispatchers[key] = numba.jit(**jit_options)(self.py_func)
        return self._dispatchers[key]

    @property
    def serial(self):
        return self.dispatcher(parallel=False)

    @property
    def parallel(self):
        return self.dispatcher(parallel=True)

    def use_parallel(self, n: int) -> bool:
        return bool(Config.get("numba.parallel", False)) and n >= Config.get(
            "numba.parallel_threshold", 0
        )

    def __call__(self, *args):
        n = len(args[-1])
        if self.use_parallel(n):
            logger.debug(f"{self.__name__}: parallel variant for {n} elements")
            return self.parallel(*args)
        return self.serial(*args)


def kernel(**options):
    """
    Decorator turning a loop function into a Kernel.

    Parameters
    ----------
    **options
        Extra ``numba.jit`` options (e.g. ``error_model="numpy"``)

    Examples
    --------
    >>> @kernel()
    ... def _fill_nb(value, out):
    ...     for i in numba.prange(out.shape[0]):
    ...         out[i] = value
    """
    def decorator(py_func):
        return Kernel(py_func, **options)

    return decorator
