"""
Combinator configuration loader.

Reads combinator/config/defaults.yaml. Override via COMBINATOR_CONFIG env var.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_PATH = Path(__file__).parent / "config" / "defaults.yaml"
_CONFIG: Optional[Dict[str, Any]] = None

# cross_product keys and their expected types; int keys must also be >= 0
_CROSS_PRODUCT_KEYS = {
    'require_repeatable': bool,
    'max_materialize': int,
    'log_every': int,
}


def validate_config(config: Any, source: str = "<config>") -> Dict[str, Any]:
    """
    Check the top-level shape and the cross_product section of a loaded config.

    Unknown sections and keys are left alone. Missing keys fall back to the
    defaults at the call site.

    Raises:
        ValueError: On a non-mapping document or a mistyped cross_product value.
    """
    if not isinstance(config, dict):
        raise ValueError(f"{source}: top level must be a mapping, got {type(config).__name__}")

    section = config.get('cross_product')
    if section is None:
        return config
    if not isinstance(section, dict):
        raise ValueError(f"{source}: 'cross_product' must be a mapping")

    for key, expected in _CROSS_PRODUCT_KEYS.items():
        if key not in section:
            continue
        value = section[key]
        # bool is an int subclass; keep the two apart
        if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"{source}: cross_product.{key} must be an integer, got {value!r}")
        if expected is bool and not isinstance(value, bool):
            raise ValueError(f"{source}: cross_product.{key} must be true or false, got {value!r}")
        if expected is int and value < 0:
            raise ValueError(f"{source}: cross_product.{key} must be >= 0, got {value}")
    return config


def get_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load, validate and cache config.

    Args:
        config_path: Optional path to config file. If not provided,
                     uses COMBINATOR_CONFIG env var or default path.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ValueError: If the cross_product section has mistyped values.
    """
    global _CONFIG
    if _CONFIG is None or config_path is not None:
        path = Path(
            config_path or os.environ.get("COMBINATOR_CONFIG", str(_DEFAULT_PATH))
        )
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            loaded = yaml.safe_load(f)
        _CONFIG = validate_config(loaded if loaded is not None else {}, str(path))
        logger.debug(f"Loaded config from {path}")
    return _CONFIG


def get(section: str, key: str, default: Any = None) -> Any:
    """
    Convenience accessor for nested config values.

    Example:
        limit = get('cross_product', 'max_materialize', 1000000)
    """
    return (get_config().get(section) or {}).get(key, default)


def reset() -> None:
    """
    Reset cached config. For testing.
    """
    global _CONFIG
    _CONFIG = None
