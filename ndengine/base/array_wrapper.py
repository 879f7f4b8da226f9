"""
Array wrapper that attaches index/column labels to NDArrays.

NDArrays carry no labels. The wrapper keeps the labels alongside so that
1-D and 2-D arrays can be exported to pandas and read back:
- axis 0: rows (Series/DataFrame index)
- axis 1: columns (DataFrame columns)
"""

import numpy as np
import pandas as pd
from typing import Optional, Tuple, Union


class ArrayWrapper:
    """
    Wraps NDArrays with index and column information.

    Only ranks 1 (Series) and 2 (DataFrame) have a pandas counterpart.
    """

    def __init__(
        self,
        index: Optional[pd.Index] = None,
        columns: Optional[pd.Index] = None,
        ndim: int = 2,
    ):
        """
        Parameters
        ----------
        index : pd.Index, optional
            Row labels
        columns : pd.Index, optional
            Column labels (2-D only)
        ndim : int
            Number of dimensions (1 or 2)
        """
        self._index = index
        self._columns = columns
        self._ndim = ndim

    @property
    def index(self) -> Optional[pd.Index]:
        """Row labels."""
        return self._index

    @property
    def columns(self) -> Optional[pd.Index]:
        """Column labels."""
        return self._columns

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return self._ndim

    @property
    def shape(self) -> Tuple[int, ...]:
        """Shape derived from index/columns."""
        if self.ndim == 1:
            return (len(self.index),) if self.index is not None else (0,)
        elif self.ndim == 2:
            return (
                len(self.index) if self.index is not None else 0,
                len(self.columns) if self.columns is not None else 0,
            )
        else:
            raise ValueError(f"Unsupported ndim: {self.ndim}")

    def wrap(self, arr) -> Union[pd.Series, pd.DataFrame]:
        """
        Convert an NDArray to a labelled pandas object.

        Parameters
        ----------
        arr : NDArray
            Array to wrap (shape must match wrapper dimensions)

        Returns
        -------
        pd.Series or pd.DataFrame
        """
        if arr.ndim != self.ndim:
            raise ValueError(
                f"Array ndim {arr.ndim} doesn't match wrapper ndim {self.ndim}"
            )
        if arr.shape != self.shape:
            raise ValueError(
                f"Array shape {arr.shape} doesn't match wrapper shape {self.shape}"
            )

        data = arr.buffer.reshape(arr.shape)
        if self.ndim == 1:
            return pd.Series(data, index=self.index)
        return pd.DataFrame(data, index=self.index, columns=self.columns)

    @staticmethod
    def unwrap(obj: Union[pd.Series, pd.DataFrame]):
        """
        Convert a pandas Series or DataFrame back to an NDArray.

        Labels are dropped; the values keep their numpy dtype where ndengine
        supports it.
        """
        from ndengine.core.ndarray import array

        if not isinstance(obj, (pd.Series, pd.DataFrame)):
            raise TypeError(f"Expected Series or DataFrame, got {type(obj).__name__}")
        return array(np.ascontiguousarray(obj.to_numpy()))

    @classmethod
    def from_shape(
        cls,
        shape: Tuple[int, ...],
        index: Optional[pd.Index] = None,
        columns: Optional[pd.Index] = None,
    ) -> "ArrayWrapper":
        """
        Create wrapper from shape, generating default indices if needed.

        Parameters
        ----------
        shape : tuple
            Array shape
        index : pd.Index, optional
            Row index
        columns : pd.Index, optional
            Column index

        Returns
        -------
        ArrayWrapper
        """
        ndim = len(shape)
        if ndim not in (1, 2):
            raise ValueError(f"Only 1-D and 2-D arrays map to pandas, got {ndim}-D")

        if index is None:
            index = pd.RangeIndex(shape[0])
        if columns is None and ndim == 2:
            columns = pd.RangeIndex(shape[1])

        return cls(index=index, columns=columns, ndim=ndim)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "ArrayWrapper":
        """Create wrapper from existing DataFrame."""
        return cls(
            index=df.index,
            columns=df.columns,
            ndim=2,
        )

    def __repr__(self) -> str:
        return (
            f"ArrayWrapper(shape={self.shape}, "
            f"index={'[...]' if self.index is not None else None}, "
            f"columns={'[...]' if self.columns is not None else None})"
        )
