"""
Tests for combinator/sequence_adapter.py

Verifies:
- open() returns independent fresh cursors
- Cursor lookahead and exhaustion semantics
- Failures in the source surface as IterationError
- is_repeatable distinguishes containers from one-shot iterators
"""

import pytest

from combinator.sequence_adapter import Cursor, SequenceAdapter
from utils.errors import IterationError
from utils import reason_codes


class TestCursor:
    """Tests for Cursor."""

    def test_walks_elements(self):
        cursor = Cursor(iter([1, 2]))
        assert cursor.has_next()
        assert cursor.next_element() == 1
        assert cursor.next_element() == 2
        assert not cursor.has_next()

    def test_has_next_does_not_consume(self):
        cursor = Cursor(iter(['a']))
        assert cursor.has_next()
        assert cursor.has_next()
        assert cursor.next_element() == 'a'

    def test_next_after_exhaustion_raises(self):
        cursor = Cursor(iter([]))
        with pytest.raises(IterationError, match="exhausted") as exc:
            cursor.next_element()
        assert exc.value.reason_code == reason_codes.E_EXHAUSTED

    def test_iterator_protocol(self):
        assert list(Cursor(iter('abc'))) == ['a', 'b', 'c']

    def test_none_is_a_valid_element(self):
        cursor = Cursor(iter([None]))
        assert cursor.has_next()
        assert cursor.next_element() is None
        assert not cursor.has_next()

    def test_source_failure_wrapped(self):
        def broken():
            yield 1
            raise KeyError('gone')

        cursor = Cursor(broken())
        assert cursor.next_element() == 1
        with pytest.raises(IterationError, match="Advancing cursor failed") as exc:
            cursor.has_next()
        assert exc.value.reason_code == reason_codes.E_ADVANCE_FAILED
        assert isinstance(exc.value.__cause__, KeyError)


class TestSequenceAdapter:
    """Tests for SequenceAdapter."""

    def test_open_returns_fresh_cursors(self):
        adapter = SequenceAdapter([1, 2, 3])
        first = adapter.open()
        first.next_element()
        second = adapter.open()
        assert second.next_element() == 1
        assert first.next_element() == 2
        assert adapter.opened == 2

    def test_source_not_mutated(self):
        source = [1, 2]
        adapter = SequenceAdapter(source)
        list(adapter.open())
        list(adapter.open())
        assert source == [1, 2]

    def test_containers_are_repeatable(self):
        for source in ([1], (1,), range(3), {1}, 'ab', {'k': 1}.values()):
            assert SequenceAdapter(source).is_repeatable

    def test_generator_not_repeatable(self):
        adapter = SequenceAdapter(x for x in [1, 2])
        assert not adapter.is_repeatable
        assert list(adapter.open()) == [1, 2]
        assert list(adapter.open()) == []

    def test_non_iterable_rejected(self):
        with pytest.raises(TypeError, match="must be iterable"):
            SequenceAdapter(42)
