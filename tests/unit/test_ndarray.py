"""
Unit tests for the NDArray core.

Tests construction, introspection, layout transforms and element access.
"""

import numpy as np
import pytest

from ndengine import DType, NDArray, array, transpose
from ndengine.errors import (
    NegativeSizeError,
    ShapeMismatchError,
    UnsupportedDataTypeError,
)


class TestConstruction:
    """Tests for array() and the direct constructor."""

    def test_from_literal(self, matrix):
        """Test shape, ndim, size and dtype of a nested literal."""
        assert matrix.shape == (3, 2)
        assert matrix.ndim == 2
        assert matrix.size == 6
        assert matrix.dtype is DType.INT32
        assert matrix.tolist() == [[2, 5], [4, 6], [3, 5]]

    def test_from_scalar(self):
        """Test a 0-dimensional array."""
        a = array(3.5)
        assert a.shape == ()
        assert a.size == 1
        assert a.dtype is DType.FLOAT64
        assert a.tolist() == 3.5

    def test_empty_literal(self):
        """Test that [] is a float64 array of size 0."""
        a = array([])
        assert a.shape == (0,)
        assert a.size == 0
        assert a.dtype is DType.FLOAT64

    def test_explicit_dtype(self):
        """Test storing literals as a requested dtype."""
        a = array([[1, 2], [3, 4]], dtype="float32")
        assert a.dtype is DType.FLOAT32
        assert a.tolist() == [[1.0, 2.0], [3.0, 4.0]]

    def test_explicit_dtype_never_truncates(self):
        """Test that lossy conversions fail."""
        with pytest.raises(UnsupportedDataTypeError):
            array([1.5, 2.5], dtype=DType.INT32)
        with pytest.raises(UnsupportedDataTypeError):
            array([1, 200], dtype=DType.INT8)

    def test_text(self, text_matrix):
        """Test object arrays of strings."""
        assert text_matrix.dtype is DType.OBJECT
        assert text_matrix.tolist() == [["a", "b"], ["c", "d"]]

    def test_from_numpy(self):
        """Test that numpy arrays keep shape and dtype."""
        source = np.arange(6, dtype=np.int16).reshape(2, 3)
        a = array(source)
        assert a.shape == (2, 3)
        assert a.dtype is DType.INT16
        assert a.tolist() == source.tolist()

    def test_from_numpy_bool(self):
        """Test that bool ndarrays agree with bool literals."""
        from_numpy = array(np.array([True, False, True]))
        from_literal = array([np.bool_(True), np.bool_(False), np.bool_(True)])
        assert from_numpy.dtype is DType.INT8
        assert from_numpy == from_literal
        assert from_numpy.tolist() == [1, 0, 1]

    def test_from_numpy_is_copied(self):
        """Test that later writes to the source do not leak in."""
        source = np.zeros(3, dtype=np.float64)
        a = array(source)
        source[0] = 9.0
        assert a.tolist() == [0.0, 0.0, 0.0]

    def test_from_ndarray_copies(self, matrix):
        """Test that array(NDArray) makes an equal, distinct copy."""
        b = array(matrix)
        assert b == matrix
        assert b.buffer is not matrix.buffer

    def test_direct_constructor(self):
        """Test NDArray(buffer, shape, dtype)."""
        a = NDArray([1, 2, 3, 4, 5, 6], (2, 3), DType.INT64)
        assert a.tolist() == [[1, 2, 3], [4, 5, 6]]
        assert a.dtype is DType.INT64

    def test_direct_constructor_size_mismatch(self):
        """Test that buffer length must match the shape."""
        with pytest.raises(ShapeMismatchError):
            NDArray([1, 2, 3], (2, 2), DType.INT32)

    def test_negative_shape(self):
        """Test that negative lengths fail."""
        with pytest.raises(NegativeSizeError):
            NDArray([], (0, -1), DType.INT32)


class TestIntrospection:
    """Tests for properties and strides."""

    def test_size_matches_shape(self, ranges):
        """Test size == product(shape) and ndim == len(shape)."""
        for a in ranges:
            assert a.size == int(np.prod(a.shape))
            assert a.ndim == len(a.shape)
            assert len(a.strides()) == a.ndim
            assert len(a.buffer) == a.size

    def test_strides_use_itemsize(self, matrix):
        """Test byte strides of an int32 matrix."""
        assert matrix.strides() == (8, 4)
        assert matrix.element_strides() == (2, 1)

    def test_strides_for_explicit_shape(self, matrix):
        """Test that explicit shapes use 8-byte elements."""
        assert matrix.strides((3, 2)) == (16, 8)
        assert matrix.strides((2, 3, 4)) == (96, 32, 8)

    def test_strides_three_dimensional(self, cube):
        """Test strides of a 2x2x2 int32 array."""
        assert cube.strides() == (16, 8, 4)

    def test_scalar_strides(self):
        """Test that 0-d arrays have no strides."""
        assert array(1).strides() == ()

    def test_nbytes(self, int8_row, float32_row):
        """Test itemsize and nbytes."""
        assert int8_row.itemsize == 1
        assert int8_row.nbytes == 3
        assert float32_row.nbytes == 12

    def test_len(self, matrix):
        """Test len() of the first axis."""
        assert len(matrix) == 3
        with pytest.raises(TypeError):
            len(array(1))

    def test_buffer_is_read_only(self, matrix):
        """Test that the buffer cannot be written."""
        with pytest.raises(ValueError):
            matrix.buffer[0] = 100


class TestReshape:
    """Tests for reshape and flatten."""

    def test_reshape_varargs_and_tuple(self):
        """Test both call forms."""
        a = array([[1, 2, 3], [4, 5, 6]])
        assert a.reshape(3, 2).tolist() == [[1, 2], [3, 4], [5, 6]]
        assert a.reshape((6,)).tolist() == [1, 2, 3, 4, 5, 6]
        assert a.reshape([1, 6]).shape == (1, 6)

    def test_reshape_mismatch(self):
        """Test the error message names both size and shape."""
        a = array([1, 2, 3, 4, 5, 6])
        with pytest.raises(ShapeMismatchError) as exc_info:
            a.reshape(2, 4)
        assert "size 6" in str(exc_info.value)
        assert "(2, 4)" in str(exc_info.value)
        assert exc_info.value.size == 6

    def test_reshape_negative(self):
        """Test that -1 is not an inferred length."""
        with pytest.raises(NegativeSizeError):
            array([1, 2]).reshape(-1, 2)

    def test_reshape_to_scalar(self):
        """Test reshaping a single element to ()."""
        assert array([5]).reshape(()).tolist() == 5

    def test_reshape_keeps_source(self, matrix):
        """Test that the source is unchanged."""
        matrix.reshape(2, 3)
        assert matrix.shape == (3, 2)

    def test_flatten(self, cube):
        """Test row-major flattening."""
        flat = cube.flatten()
        assert flat.shape == (8,)
        assert flat.tolist() == [1, 2, 3, 4, 5, 6, 7, 8]
        assert flat.dtype is cube.dtype

    def test_reshape_then_flatten(self, ranges):
        """Test A.reshape(S).flatten() == A.flatten()."""
        for a in ranges:
            assert a.reshape(a.size, 1).flatten() == a.flatten()
            assert a.reshape(1, a.size).flatten() == a.flatten()

    def test_flatten_then_reshape(self, ranges):
        """Test A.flatten().reshape(A.shape) == A."""
        for a in ranges:
            assert a.flatten().reshape(a.shape) == a


class TestTranspose:
    """Tests for full axis reversal."""

    def test_matrix(self):
        """Test a 2x3 transpose."""
        a = array([[1, 2, 3], [4, 5, 6]])
        t = a.transpose()
        assert t.shape == (3, 2)
        assert t.tolist() == [[1, 4], [2, 5], [3, 6]]

    def test_property_and_function(self, matrix):
        """Test the T property and the module-level function."""
        assert matrix.T == matrix.transpose()
        assert transpose([[1, 2]]).tolist() == [[1], [2]]

    def test_matches_axis_reversal(self, ranges):
        """Test element placement against numpy's axis reversal."""
        for a in ranges:
            expected = np.array(a.tolist()).transpose()
            assert a.transpose().tolist() == expected.tolist()

    def test_double_transpose(self, ranges):
        """Test that transposing twice is the identity."""
        for a in ranges:
            assert a.transpose().transpose() == a

    def test_text(self, text_matrix):
        """Test transposing an object array."""
        assert text_matrix.T.tolist() == [["a", "c"], ["b", "d"]]

    def test_rank_one_and_scalar(self):
        """Test that ranks 0 and 1 are unchanged."""
        assert array([1, 2, 3]).T.tolist() == [1, 2, 3]
        assert array(4).T.tolist() == 4


class TestIndexing:
    """Tests for integer indexing."""

    def test_full_index(self, cube):
        """Test scalar access."""
        assert cube[1, 0, 1] == 6
        assert cube[0, 1, 0] == 3

    def test_negative_index(self, matrix):
        """Test counting from the end."""
        assert matrix[-1, -1] == 5

    def test_partial_index(self, cube):
        """Test sub-array access."""
        sub = cube[1]
        assert isinstance(sub, NDArray)
        assert sub.tolist() == [[5, 6], [7, 8]]
        assert cube[1, 1].tolist() == [7, 8]

    def test_out_of_bounds(self, matrix):
        """Test IndexError on bad positions and too many indices."""
        with pytest.raises(IndexError):
            matrix[3, 0]
        with pytest.raises(IndexError):
            matrix[0, 0, 0]

    def test_slices_rejected(self, matrix):
        """Test that slicing is not supported."""
        with pytest.raises(TypeError):
            matrix[0:2]


class TestEquality:
    """Tests for structural equality."""

    def test_equal(self):
        """Test equal arrays."""
        assert array([[1, 2]]) == array([[1, 2]])

    def test_shape_dtype_and_values_matter(self):
        """Test each component of equality."""
        a = array([1, 2])
        assert a != array([[1, 2]])
        assert a != array([1, 2], dtype="int64")
        assert a != array([1, 3])

    def test_not_hashable(self, matrix):
        """Test that arrays cannot be hashed."""
        with pytest.raises(TypeError):
            hash(matrix)


class TestRendering:
    """Tests for repr and str."""

    def test_str(self):
        """Test nested bracket rendering."""
        assert str(array([[1, 2], [3, 4]])) == "[[1, 2],\n [3, 4]]"

    def test_repr(self):
        """Test repr alignment and dtype suffix."""
        assert repr(array([[1, 2], [3, 4]])) == (
            "NDArray([[1, 2],\n         [3, 4]], dtype=int32)"
        )

    def test_text_repr(self):
        """Test that strings are quoted."""
        assert repr(array(["a", "b"])) == "NDArray(['a', 'b'], dtype=object)"
