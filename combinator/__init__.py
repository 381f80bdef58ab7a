"""Lazy cross-product combinator and parameter grid expansion."""

from .sequence_adapter import Cursor, SequenceAdapter
from .odometer import GeneratorState, OdometerGenerator
from .cross_product import CrossProduct, streamed_cross_product, count_combinations
from .param_grid import (
    iter_param_grid,
    expand_param_grid,
    expand_component_grid,
    count_param_grid,
    param_grid_frame,
    group_by_key,
)

__all__ = [
    'Cursor',
    'SequenceAdapter',
    'GeneratorState',
    'OdometerGenerator',
    'CrossProduct',
    'streamed_cross_product',
    'count_combinations',
    'iter_param_grid',
    'expand_param_grid',
    'expand_component_grid',
    'count_param_grid',
    'param_grid_frame',
    'group_by_key',
]
