"""
Tests for combinator/odometer.py

Tests:
- Odometer order (rightmost fastest) and state transitions
- K = 0 and empty-dimension edge cases
- Carry re-opens exhausted dimensions
- Single-pass dimensions fail with IterationError on re-open
"""

import logging

import pytest

from combinator.odometer import GeneratorState, OdometerGenerator
from combinator.sequence_adapter import SequenceAdapter
from utils.errors import IterationError
from utils import reason_codes


def make_generator(*sources, **kwargs) -> OdometerGenerator:
    return OdometerGenerator([SequenceAdapter(s) for s in sources], **kwargs)


class TestStates:
    """State machine INIT -> ACTIVE -> EXHAUSTED."""

    def test_initial_state(self):
        gen = make_generator([1])
        assert gen.state is GeneratorState.INIT
        assert gen.produced == 0

    def test_active_then_exhausted(self):
        gen = make_generator([1, 2])
        assert next(gen) == (1,)
        assert gen.state is GeneratorState.ACTIVE
        assert next(gen) == (2,)
        with pytest.raises(StopIteration):
            next(gen)
        assert gen.state is GeneratorState.EXHAUSTED
        assert gen.produced == 2

    def test_exhausted_stays_exhausted(self):
        gen = make_generator([])
        assert list(gen) == []
        with pytest.raises(StopIteration):
            next(gen)
        with pytest.raises(StopIteration):
            next(gen)


class TestOrdering:
    """Odometer order."""

    def test_rightmost_fastest(self):
        gen = make_generator([1, 2], ['a', 'b', 'c'])
        assert list(gen) == [
            (1, 'a'), (1, 'b'), (1, 'c'),
            (2, 'a'), (2, 'b'), (2, 'c'),
        ]

    def test_three_dimensions(self):
        gen = make_generator('ab', [0, 1], 'xy')
        result = [''.join(map(str, c)) for c in gen]
        assert result == [
            'a0x', 'a0y', 'a1x', 'a1y',
            'b0x', 'b0y', 'b1x', 'b1y',
        ]

    def test_matches_nested_loops(self):
        dims = [range(3), range(1), range(4), range(2)]
        expected = [
            (a, b, c, d)
            for a in dims[0] for b in dims[1] for c in dims[2] for d in dims[3]
        ]
        assert list(make_generator(*dims)) == expected


class TestEdgeCases:
    """Zero dimensions and empty dimensions."""

    def test_zero_dimensions_yield_one_empty_tuple(self):
        gen = OdometerGenerator([])
        assert list(gen) == [()]
        assert gen.produced == 1

    def test_empty_first_dimension(self):
        assert list(make_generator([], [1, 2])) == []

    def test_empty_last_dimension(self):
        assert list(make_generator([1, 2], [3], [])) == []

    def test_empty_dimension_stops_opening(self):
        adapters = [SequenceAdapter([]), SequenceAdapter([1])]
        list(OdometerGenerator(adapters))
        assert adapters[1].opened == 0

    def test_single_dimension(self):
        assert list(make_generator(['only'])) == [('only',)]


class TestCarry:
    """Carry propagation re-opens exhausted dimensions."""

    def test_reopen_counts(self):
        adapters = [SequenceAdapter([1, 2, 3]), SequenceAdapter('ab')]
        list(OdometerGenerator(adapters))
        # Rightmost opened once per leftmost element; no re-open on the final carry.
        assert adapters[0].opened == 1
        assert adapters[1].opened == 3

    def test_leftmost_never_reopened(self):
        adapters = [SequenceAdapter([1, 2]), SequenceAdapter([1])]
        list(OdometerGenerator(adapters))
        assert adapters[0].opened == 1

    def test_single_pass_leftmost_is_fine(self):
        gen = make_generator(iter([1, 2]), [3, 4])
        assert list(gen) == [(1, 3), (1, 4), (2, 3), (2, 4)]

    def test_single_pass_inner_dimension_fails(self):
        gen = make_generator([1, 2], iter(['a', 'b']))
        assert next(gen) == (1, 'a')
        assert next(gen) == (1, 'b')
        with pytest.raises(IterationError, match="could not be re-opened") as exc:
            next(gen)
        assert exc.value.reason_code == reason_codes.E_REOPEN_FAILED
        assert gen.state is GeneratorState.EXHAUSTED
        with pytest.raises(StopIteration):
            next(gen)

    def test_single_pass_inner_dimension_without_carry(self):
        """A single pass suffices when the dimension never has to be reset."""
        assert list(make_generator([1], iter(['a', 'b']))) == [(1, 'a'), (1, 'b')]

    def test_source_failure_mid_traversal(self):
        """A dimension whose iterator raises aborts the traversal."""
        class Flaky:
            def __iter__(self):
                yield 'a'
                raise OSError('device went away')

        gen = make_generator([1, 2], Flaky())
        assert next(gen) == (1, 'a')
        with pytest.raises(IterationError, match="Advancing cursor failed") as exc:
            next(gen)
        assert exc.value.reason_code == reason_codes.E_ADVANCE_FAILED
        assert isinstance(exc.value.__cause__, OSError)
        assert gen.state is GeneratorState.EXHAUSTED
        with pytest.raises(StopIteration):
            next(gen)

    def test_elements_are_borrowed(self):
        shared = {'k': 1}
        combo = next(make_generator([shared], [0]))
        assert combo[0] is shared


class TestLogging:
    """Debug logging."""

    def test_progress_lines(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='combinator.odometer'):
            list(make_generator(range(4), range(5), log_every=10))
        progress = [r for r in caplog.records if 'produced' in r.getMessage()]
        assert len(progress) == 2

    def test_exhaustion_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='combinator.odometer'):
            list(make_generator([1], [2]))
        assert any('exhausted after 1 combinations' in r.getMessage() for r in caplog.records)
