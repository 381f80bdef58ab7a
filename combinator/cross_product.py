"""
Cross-product view (combinator/cross_product.py).

Public facade over OdometerGenerator. Every traversal request builds a new
generator over freshly opened adapters, so the view can be iterated any
number of times (and by independent consumers) without touching the input
sequences.

    >>> list(streamed_cross_product([[1, 2], ['a', 'b', 'c']]))
    [(1, 'a'), (1, 'b'), (1, 'c'), (2, 'a'), (2, 'b'), (2, 'c')]

The product of zero sequences contains exactly one empty combination:

    >>> list(streamed_cross_product([]))
    [()]
"""

import logging
from collections.abc import Sequence as AbstractSequence, Sized
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from combinator import config
from combinator.odometer import OdometerGenerator
from combinator.sequence_adapter import SequenceAdapter
from utils import reason_codes
from utils.errors import IterationError

logger = logging.getLogger(__name__)


def count_combinations(sizes: Iterable[int]) -> int:
    """
    Number of combinations for dimensions of the given sizes.

    Empty sizes -> 1 (the single empty combination). Any zero size -> 0.
    """
    total = 1
    for n in sizes:
        if n < 0:
            raise ValueError(f"Dimension size must be >= 0, got {n}")
        total *= n
    return total


def _unravel_large(index: int, shape: Tuple[int, ...]) -> Tuple[int, ...]:
    """C-order unravel for products beyond intp, on Python ints."""
    positions = []
    for n in reversed(shape):
        index, p = divmod(index, n)
        positions.append(p)
    return tuple(reversed(positions))


class CrossProduct:
    """
    Lazy, restartable cross product of K sequences in odometer order.

    Each input should be iterable more than once (list, tuple, range, ...).
    A one-shot iterator is detected either at construction
    (require_repeatable=True) or when it first has to be re-opened, which
    raises IterationError(E_REOPEN_FAILED) and aborts that traversal.
    """

    def __init__(
        self,
        sequences: Iterable[Iterable[Any]],
        require_repeatable: Optional[bool] = None,
        log_every: Optional[int] = None
    ):
        self._sequences = list(sequences)
        if require_repeatable is None:
            require_repeatable = config.get('cross_product', 'require_repeatable', False)
        if log_every is None:
            log_every = config.get('cross_product', 'log_every', 0)
        self.require_repeatable = bool(require_repeatable)
        self.log_every = int(log_every)

        # Validates iterability of every source up front.
        adapters = self._adapters()
        if self.require_repeatable:
            for d, adapter in enumerate(adapters):
                if not adapter.is_repeatable:
                    raise IterationError(
                        f"Dimension {d} ({type(adapter.source).__name__}) is a "
                        f"single-pass iterator and cannot be re-opened",
                        reason_codes.E_NOT_REPEATABLE
                    )

    @property
    def dimensions(self) -> int:
        return len(self._sequences)

    def _adapters(self) -> List[SequenceAdapter]:
        return [SequenceAdapter(s) for s in self._sequences]

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        return OdometerGenerator(self._adapters(), log_every=self.log_every)

    def size(self) -> Optional[int]:
        """Total number of combinations, or None if any dimension is unsized."""
        sizes = []
        for s in self._sequences:
            if not isinstance(s, Sized):
                return None
            sizes.append(len(s))
        return count_combinations(sizes)

    def combination_at(self, index: int) -> Tuple[Any, ...]:
        """
        Random access to the combination at a flat odometer index.

        The component for dimension d is element (index // P_d) % n_d, where
        P_d is the product of the sizes to the right of d. This is the
        C-order unravelling of index over the dimension sizes.

        Raises:
            TypeError: If any dimension is not an indexable sequence.
            IndexError: If index is outside [0, size()).
        """
        for d, s in enumerate(self._sequences):
            if not isinstance(s, AbstractSequence):
                raise TypeError(
                    f"Dimension {d} ({type(s).__name__}) does not support random access"
                )
        total = self.size()
        if index < 0 or index >= total:
            raise IndexError(f"Combination index {index} out of range [0, {total})")
        if not self._sequences:
            return ()

        shape = tuple(len(s) for s in self._sequences)
        if total <= np.iinfo(np.intp).max:
            positions = np.unravel_index(index, shape)
        else:
            positions = _unravel_large(index, shape)
        return tuple(s[int(p)] for s, p in zip(self._sequences, positions))

    def to_frame(self, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """
        Materialize the product as a DataFrame, one row per combination.

        Args:
            columns: Column names, one per dimension. Defaults to 0..K-1.

        Raises:
            ValueError: If the product is larger than
                cross_product.max_materialize, or columns has the wrong length.
        """
        if columns is not None and len(columns) != self.dimensions:
            raise ValueError(
                f"Expected {self.dimensions} column names, got {len(columns)}"
            )
        limit = config.get('cross_product', 'max_materialize', 1000000)
        total = self.size()
        if total is not None and total > limit:
            logger.warning(f"Refusing to materialize {total} combinations (limit {limit})")
            raise ValueError(
                f"Cross product has {total} combinations, exceeds max_materialize={limit}"
            )

        if not self._sequences:
            return pd.DataFrame(index=pd.RangeIndex(1))

        rows = []
        for combo in self:
            rows.append(combo)
            if len(rows) > limit:
                raise ValueError(
                    f"Cross product exceeds max_materialize={limit}"
                )
        column_names = list(columns) if columns is not None else list(range(self.dimensions))
        return pd.DataFrame.from_records(rows, columns=column_names)

    def __repr__(self) -> str:
        return f"CrossProduct(dimensions={self.dimensions}, size={self.size()})"


def streamed_cross_product(sequences: Iterable[Iterable[Any]]) -> CrossProduct:
    """
    Lazy cross product of the given sequences.

    Args:
        sequences: Ordered dimensions; each should be iterable multiple times.

    Returns:
        A CrossProduct that yields tuples in odometer order on every iteration.
    """
    return CrossProduct(sequences)
