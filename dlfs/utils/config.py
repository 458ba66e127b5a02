"""
Configuration utilities.
"""

import logging
import yaml
import numpy as np
from typing import Dict, Any
from pathlib import Path

logger = logging.getLogger(__name__)


_DTYPES = {
    "float32": np.float32,
    "float64": np.float64,
}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Sections missing from the file are filled in from the defaults.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}
    logger.debug(f"Loaded config from {config_path}")

    config = get_default_config()
    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def save_config(config: Dict[str, Any], config_path: str):
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Path to save config
    """
    Path(config_path).parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False)


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Default configuration dictionary
    """
    return {
        "data": {
            "data_dir": "./dataset",
            "base_url": "https://ossci-datasets.s3.amazonaws.com/mnist/",
            "dtype": "float32",
            "show_progress": False,
        },
        "training": {
            "batch_size": 100,
        },
    }


def resolve_dtype(name) -> np.dtype:
    """
    Map a dtype name from the configuration to a NumPy floating dtype.

    Args:
        name: "float32" or "float64" (a NumPy dtype is passed through)

    Returns:
        The corresponding dtype
    """
    if not isinstance(name, str):
        dtype = np.dtype(name)
        if dtype.type not in _DTYPES.values():
            raise ValueError(f"Unsupported dtype {dtype}; use float32 or float64")
        return dtype
    try:
        return np.dtype(_DTYPES[name])
    except KeyError:
        raise ValueError(f"Unsupported dtype '{name}'; use float32 or float64") from None
