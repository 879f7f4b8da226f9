"""
Pytest fixtures for array engine tests.
"""

import numpy as np
import pytest

from ndengine import DType, array, arange
from ndengine.utils.config import Config


@pytest.fixture(autouse=True)
def reset_config():
    """Restore default configuration after every test."""
    yield
    Config.reset()


@pytest.fixture
def cube():
    """2x2x2 int32 array holding 1..8."""
    return array([[[1, 2], [3, 4]], [[5, 6], [7, 8]]])


@pytest.fixture
def matrix():
    """3x2 int32 array from the canonical nested literal."""
    return array([[2, 5], [4, 6], [3, 5]])


@pytest.fixture
def int8_row():
    """1-D int8 array built from numpy scalars."""
    return array([np.int8(1), np.int8(2), np.int8(3)])


@pytest.fixture
def float32_row():
    """1-D float32 array built from numpy scalars."""
    return array([np.float32(0.5), np.float32(1.5), np.float32(2.5)])


@pytest.fixture
def text_matrix():
    """2x2 object array of strings."""
    return array([["a", "b"], ["c", "d"]])


@pytest.fixture
def ranges():
    """Arrays of assorted shapes filled with distinct values."""
    return [
        arange(6, shape=(6,)),
        arange(12, shape=(3, 4)),
        arange(24, shape=(2, 3, 4)),
        arange(24, shape=(1, 2, 3, 4)),
        arange(5, dtype=DType.FLOAT64, shape=(5, 1)),
    ]
