"""Global configuration settings."""

import copy
from typing import Dict, Any


_DEFAULTS: Dict[str, Any] = {
    # Kernel compilation settings
    "numba": {
        "parallel": False,  # Dispatch to the prange-parallel kernel variants
        "parallel_threshold": 100_000,  # Minimum output length for parallel dispatch
        "cache": True,  # Cache compiled functions
        "fastmath": False,  # Keep IEEE inf/nan semantics for float division
    },
    # Creation defaults
    "defaults": {
        "dtype": "int32",
    },
    # Literal inference
    "inference": {
        "int_width": 4,  # Minimum byte width assigned to Python int literals
    },
    # Text rendering
    "display": {
        "threshold": 40,  # Axes longer than this are summarised
        "edgeitems": 10,  # Entries kept at each end of a summarised axis
    },
}


class Config:
    """
    Global configuration for ndengine.

    Values are addressed with dotted keys, e.g. ``Config.get("numba.parallel")``.
    """

    _config: Dict[str, Any] = copy.deepcopy(_DEFAULTS)

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        keys = key.split(".")
        value = cls._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k, default)
            else:
                return default
        return value

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set configuration value."""
        keys = key.split(".")
        config = cls._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    @classmethod
    def reset(cls) -> None:
        """Reset to default configuration."""
        cls._config = copy.deepcopy(_DEFAULTS)
