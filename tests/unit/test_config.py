"""
Unit tests for the global configuration.
"""

from ndengine.utils.config import Config


class TestConfig:
    """Tests for dotted-key access."""

    def test_defaults(self):
        """Test the shipped defaults."""
        assert Config.get("numba.parallel") is False
        assert Config.get("numba.parallel_threshold") == 100_000
        assert Config.get("defaults.dtype") == "int32"
        assert Config.get("inference.int_width") == 4
        assert Config.get("display.threshold") == 40
        assert Config.get("display.edgeitems") == 10

    def test_missing_key_returns_default(self):
        """Test lookups of unknown keys."""
        assert Config.get("numba.unknown", 7) == 7
        assert Config.get("numba.parallel.deeper", "x") == "x"

    def test_set_and_reset(self):
        """Test that reset restores defaults."""
        Config.set("display.threshold", 5)
        Config.set("custom.section.value", 1)
        assert Config.get("display.threshold") == 5
        assert Config.get("custom.section.value") == 1

        Config.reset()
        assert Config.get("display.threshold") == 40
        assert Config.get("custom.section.value") is None
