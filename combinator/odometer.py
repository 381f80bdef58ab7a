"""
Odometer combination generator (combinator/odometer.py).

Owns one cursor per dimension and advances them with a mixed-radix carry:
the rightmost dimension moves every step, and each dimension to its left
moves only after the one to its right has completed a full cycle. This is
the order of nested for-loops with the last dimension innermost.

States:
    INIT -> ACTIVE -> EXHAUSTED (terminal)

Edge cases:
- K = 0 yields exactly one empty tuple, then ends.
- Any empty dimension yields nothing at all.
- A dimension that cannot be re-opened (one-shot source) raises
  IterationError(E_REOPEN_FAILED) on the carry that needs it.
"""

import logging
from enum import Enum
from typing import Any, List, Sequence, Tuple

from combinator.sequence_adapter import Cursor, SequenceAdapter
from utils import reason_codes
from utils.errors import IterationError

logger = logging.getLogger(__name__)


class GeneratorState(Enum):
    INIT = 'init'
    ACTIVE = 'active'
    EXHAUSTED = 'exhausted'


class OdometerGenerator:
    """
    Lazy iterator over every combination of its dimensions.

    Each combination is a new tuple holding references to the current element
    of every dimension, indexed like the adapters. Not safe for concurrent use
    from several threads: cursors and current values are mutated in place.
    """

    def __init__(self, adapters: Sequence[SequenceAdapter], log_every: int = 0):
        self._adapters = list(adapters)
        self._cursors: List[Cursor] = []
        self._current: List[Any] = []
        self.log_every = log_every
        self.state = GeneratorState.INIT
        self.produced = 0

    @property
    def dimensions(self) -> int:
        return len(self._adapters)

    def __iter__(self) -> 'OdometerGenerator':
        return self

    def __next__(self) -> Tuple[Any, ...]:
        if self.state is GeneratorState.EXHAUSTED:
            raise StopIteration

        try:
            if self.state is GeneratorState.INIT:
                started = self._start()
            else:
                started = self._advance()
        except IterationError:
            self._finish()
            raise

        if not started:
            self._finish()
            raise StopIteration

        self.produced += 1
        if self.log_every and self.produced % self.log_every == 0:
            logger.debug(f"Odometer produced {self.produced} combinations")
        return tuple(self._current)

    def _start(self) -> bool:
        """Open and seed every dimension left to right. False if any is empty."""
        self.state = GeneratorState.ACTIVE
        for adapter in self._adapters:
            cursor = adapter.open()
            self._cursors.append(cursor)
            if not cursor.has_next():
                logger.debug(
                    f"Dimension {len(self._cursors) - 1} is empty, "
                    f"product of {self.dimensions} dimensions has no combinations"
                )
                return False
            self._current.append(cursor.next_element())
        # K = 0 falls through: one zero-length combination.
        return True

    def _advance(self) -> bool:
        """
        Carry from the rightmost dimension leftward. False once the carry passes index 0.

        The carry stops at the rightmost dimension that can still move; every
        exhausted dimension to its right is then re-opened and reset to its
        first element. Nothing is re-opened on the final carry.
        """
        for d in range(self.dimensions - 1, -1, -1):
            cursor = self._cursors[d]
            if cursor.has_next():
                self._current[d] = cursor.next_element()
                for r in range(d + 1, self.dimensions):
                    self._reopen(r)
                return True
        return False

    def _reopen(self, d: int) -> None:
        cursor = self._adapters[d].open()
        if not cursor.has_next():
            raise IterationError(
                f"Dimension {d} could not be re-opened after {self.produced} "
                f"combinations (single-pass source?)",
                reason_codes.E_REOPEN_FAILED
            )
        self._cursors[d] = cursor
        self._current[d] = cursor.next_element()

    def _finish(self) -> None:
        self.state = GeneratorState.EXHAUSTED
        self._cursors = []
        self._current = []
        logger.debug(
            f"Odometer exhausted after {self.produced} combinations "
            f"over {self.dimensions} dimensions"
        )

    def __repr__(self) -> str:
        return (
            f"OdometerGenerator(dimensions={self.dimensions}, "
            f"state={self.state.value}, produced={self.produced})"
        )
