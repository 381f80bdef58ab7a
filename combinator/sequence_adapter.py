"""
Sequence adapter (combinator/sequence_adapter.py).

Wraps one input sequence so it can be re-opened into a fresh forward
cursor on demand. The wrapped source is never mutated.
"""

from typing import Any, Generic, Iterable, Iterator, TypeVar

from utils import reason_codes
from utils.errors import IterationError

T = TypeVar('T')

_NOTHING = object()


class Cursor(Generic[T]):
    """
    Forward-only cursor over one opened iterator.

    Holds a one-element lookahead so has_next() can answer without
    consuming. Failures raised by the underlying iterator while advancing
    surface as IterationError(E_ADVANCE_FAILED).
    """

    def __init__(self, iterator: Iterator[T]):
        self._iterator = iterator
        self._lookahead: Any = _NOTHING
        self._done = False

    def _fill(self) -> None:
        if self._lookahead is not _NOTHING or self._done:
            return
        try:
            self._lookahead = next(self._iterator)
        except StopIteration:
            self._done = True
        except Exception as e:
            self._done = True
            raise IterationError(
                f"Advancing cursor failed: {e!r}", reason_codes.E_ADVANCE_FAILED
            ) from e

    def has_next(self) -> bool:
        self._fill()
        return self._lookahead is not _NOTHING

    def next_element(self) -> T:
        """
        Return the next element.

        Raises:
            IterationError: If the cursor is already exhausted.
        """
        self._fill()
        if self._lookahead is _NOTHING:
            raise IterationError("Cursor is exhausted", reason_codes.E_EXHAUSTED)
        element = self._lookahead
        self._lookahead = _NOTHING
        return element

    def __iter__(self) -> 'Cursor[T]':
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.next_element()


class SequenceAdapter(Generic[T]):
    """
    Re-openable view of one dimension's source.

    The source is opened once per traversal and once more per carry-triggered
    reset of this dimension. Lists, tuples, ranges, sets, dict views and any
    object whose __iter__ returns a fresh iterator qualify as repeatable.
    Generators and other one-shot iterators do not.
    """

    def __init__(self, source: Iterable[T]):
        if not isinstance(source, Iterable):
            raise TypeError(f"Dimension source must be iterable, got {type(source).__name__}")
        self.source = source
        self.opened = 0

    @property
    def is_repeatable(self) -> bool:
        """False when iterating the source returns the source itself (one-shot iterator)."""
        return not isinstance(self.source, Iterator)

    def open(self) -> Cursor[T]:
        """Return a fresh cursor positioned before the first element."""
        self.opened += 1
        return Cursor(iter(self.source))

    def __repr__(self) -> str:
        return f"SequenceAdapter({type(self.source).__name__}, opened={self.opened})"
