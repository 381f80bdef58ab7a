"""Utility modules for the combinator library."""

from .errors import CombinatorError, InvalidStateError, IterationError
from .collection_helpers import (
    get_any, get_single, get_single_or_null, as_set, put,
    map_list, map_indexed, create_null_filled_list
)
from .reason_codes import (
    E_EMPTY, E_NOT_SINGLE, E_TOO_MANY, E_EXHAUSTED, E_ADVANCE_FAILED,
    E_REOPEN_FAILED, E_NOT_REPEATABLE, REASON_CODES
)

__all__ = [
    'CombinatorError', 'InvalidStateError', 'IterationError',
    'get_any', 'get_single', 'get_single_or_null', 'as_set', 'put',
    'map_list', 'map_indexed', 'create_null_filled_list',
    'E_EMPTY', 'E_NOT_SINGLE', 'E_TOO_MANY', 'E_EXHAUSTED', 'E_ADVANCE_FAILED',
    'E_REOPEN_FAILED', 'E_NOT_REPEATABLE', 'REASON_CODES'
]
