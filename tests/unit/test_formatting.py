"""
Unit tests for array text rendering.
"""

from ndengine import arange, array
from ndengine.utils.config import Config
from ndengine.utils.formatting import format_array, summarised_positions


class TestSummarisedPositions:
    """Tests for axis summarisation."""

    def test_short_axis(self):
        """Test that short axes are shown in full."""
        assert summarised_positions(5, 40, 10) == [0, 1, 2, 3, 4]

    def test_long_axis(self):
        """Test edge items around the gap."""
        assert summarised_positions(6, 4, 2) == [0, 1, None, 4, 5]

    def test_threshold_is_exclusive(self):
        """Test that an axis of exactly threshold entries is not summarised."""
        assert None not in summarised_positions(40, 40, 10)
        assert None in summarised_positions(41, 40, 10)


class TestFormatArray:
    """Tests for nested bracket output."""

    def test_vector(self):
        """Test a 1-D array."""
        assert format_array(array([1, 2, 3])) == "[1, 2, 3]"

    def test_scalar(self):
        """Test a 0-d array."""
        assert format_array(array(7)) == "7"

    def test_three_dimensional(self, cube):
        """Test blank lines between 2-D blocks."""
        assert format_array(cube) == "[[[1, 2],\n  [3, 4]],\n\n [[5, 6],\n  [7, 8]]]"

    def test_floats(self):
        """Test float rendering."""
        assert format_array(array([0.5, 1.0])) == "[0.5, 1.0]"

    def test_empty(self):
        """Test a zero-length axis."""
        assert format_array(array([])) == "[]"

    def test_long_vector_is_summarised(self):
        """Test that 100 elements render as 10 + ... + 10."""
        text = format_array(arange(100))
        assert text.startswith("[0, 1, 2, 3, 4, 5, 6, 7, 8, 9, ...")
        assert text.endswith("..., 90, 91, 92, 93, 94, 95, 96, 97, 98, 99]")

    def test_display_settings(self):
        """Test that display.* keys change the output."""
        Config.set("display.threshold", 3)
        Config.set("display.edgeitems", 1)
        assert format_array(arange(5)) == "[0, ..., 4]"

    def test_summarised_rows(self):
        """Test that long leading axes drop whole rows."""
        Config.set("display.threshold", 2)
        Config.set("display.edgeitems", 1)
        assert format_array(arange(4, shape=(4, 1))) == "[[0],\n ...,\n [3]]"
