"""
Parameter grid generation (combinator/param_grid.py).

Expands {name: [values...]} grids into one dict per combination, streamed
from the cross product so large grids are never held in memory unless
asked for.
"""

from collections.abc import Hashable, Sized
from typing import Any, Dict, Iterable, Iterator, List

import pandas as pd

from combinator.cross_product import CrossProduct, count_combinations
from utils.collection_helpers import put


def iter_param_grid(params: Dict[str, Iterable[Any]]) -> Iterator[Dict[str, Any]]:
    """
    Lazily yield every parameter combination.

    Keys vary in insertion order with the last key fastest.

    Args:
        params: Dict mapping param names to lists of values
                e.g., {'fast': [5, 8], 'slow': [21, 34]}

    Yields:
        {'fast': 5, 'slow': 21}, {'fast': 5, 'slow': 34}, {'fast': 8, 'slow': 21}, ...
    """
    keys = list(params.keys())
    for combo in CrossProduct([params[k] for k in keys]):
        yield dict(zip(keys, combo))


def expand_param_grid(params: Dict[str, Iterable[Any]]) -> List[Dict[str, Any]]:
    """
    Expand parameter grid to list of parameter dicts.

    An empty grid expands to [{}].
    """
    return list(iter_param_grid(params))


def expand_component_grid(component_config: dict) -> List[dict]:
    """
    Expand a single component config to all parameter variants.

    List-valued params are grid axes, everything else is held fixed.

    Args:
        component_config: {'type': 'ema_cross', 'params': {'fast': [5, 8], 'window': 21}}

    Returns:
        [
            {'type': 'ema_cross', 'params': {'window': 21, 'fast': 5}},
            {'type': 'ema_cross', 'params': {'window': 21, 'fast': 8}},
        ]
    """
    comp_type = component_config['type']
    params = component_config.get('params', {})

    # Separate scalar params from list params
    scalar_params = {}
    grid_params = {}

    for key, value in params.items():
        if isinstance(value, list):
            grid_params[key] = value
        else:
            scalar_params[key] = value

    return [
        {'type': comp_type, 'params': {**scalar_params, **combo}}
        for combo in iter_param_grid(grid_params)
    ]


def count_param_grid(params: Dict[str, Iterable[Any]]) -> int:
    """
    Number of combinations in the grid, without expanding it.

    Raises:
        TypeError: If a value list has no len() (e.g. a generator). Counting
            never consumes the grid.
    """
    sizes = []
    for key, values in params.items():
        if not isinstance(values, Sized):
            raise TypeError(
                f"Param '{key}' values ({type(values).__name__}) have no length; "
                f"pass a list, tuple or range to count the grid"
            )
        sizes.append(len(values))
    return count_combinations(sizes)


def param_grid_frame(params: Dict[str, Iterable[Any]]) -> pd.DataFrame:
    """
    Grid as a DataFrame, one column per param and one row per combination.

    Subject to cross_product.max_materialize.
    """
    keys = list(params.keys())
    return CrossProduct([params[k] for k in keys]).to_frame(columns=keys)


def group_by_key(configs: Iterable[Dict[str, Any]], key: str) -> Dict[Hashable, List[Dict[str, Any]]]:
    """
    Bucket configs by the value of one field, keeping input order per bucket.

    Configs without the field are grouped under None.

    Raises:
        TypeError: If a config's value for the field is unhashable.
    """
    groups: Dict[Hashable, List[Dict[str, Any]]] = {}
    for cfg in configs:
        value = cfg.get(key)
        if not isinstance(value, Hashable):
            raise TypeError(
                f"Cannot group by '{key}': value {value!r} "
                f"({type(value).__name__}) is unhashable"
            )
        put(groups, value, cfg)
    return groups
