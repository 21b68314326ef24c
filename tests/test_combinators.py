"""Tests for the lazy combinators of `Stream`."""

import pytest

import seqchain as sc
from conftest import PullCounter


class TestMap:
    """Test `Stream.map`."""

    def test_doubles(self) -> None:
        """Test the basic transformation."""
        assert sc.Stream.from_collection([1, 2, 3]).map(lambda x: x * 2).collect() == (
            2,
            4,
            6,
        )

    def test_is_lazy(self, counter: PullCounter) -> None:
        """Test building a pipeline pulls nothing."""
        stream = sc.Stream.from_fn(counter).map(lambda x: x + 1)
        assert counter.pulls == 0
        cursor = stream.cursor()
        assert counter.pulls == 0
        assert cursor.pull() == sc.Yielded(1)
        assert counter.pulls == 1

    def test_failure_propagates_after_partial_output(self) -> None:
        """Test a failing transform surfaces on the pull that triggered it."""

        def _invert(x: int) -> float:
            return 1 / x

        cursor = sc.Stream.from_collection([1, 0, 2]).map(_invert).cursor()
        assert cursor.pull() == sc.Yielded(1.0)
        with pytest.raises(ZeroDivisionError):
            cursor.pull()
        assert cursor.pull() is sc.DONE


class TestFilter:
    """Test `Stream.filter`."""

    def test_even_values(self) -> None:
        """Test only matching values are kept."""
        stream = sc.Stream.from_collection([1, 2, 3, 4, 5, 6])
        assert stream.filter(lambda x: x % 2 == 0).collect() == (2, 4, 6)

    def test_no_match_consumes_everything(self, counter: PullCounter) -> None:
        """Test a single pull may drain the whole upstream."""
        cursor = sc.Stream.from_fn(counter).filter(lambda _: False).cursor()
        assert cursor.pull() is sc.DONE
        assert counter.pulls == 11


class TestTake:
    """Test `Stream.take`."""

    def test_zero_never_pulls_upstream(self, counter: PullCounter) -> None:
        """Test `take(0)` does not even open the upstream session."""
        stream = sc.Stream.from_fn(counter).take(0)
        assert stream.collect() == ()
        assert counter.pulls == 0

    def test_stops_pulling_after_n(self, endless_counter: PullCounter) -> None:
        """Test no extra pull happens once n values were yielded."""
        cursor = sc.Stream.from_fn(endless_counter).take(2).cursor()
        assert [cursor.pull(), cursor.pull()] == [sc.Yielded(0), sc.Yielded(1)]
        assert cursor.pull() is sc.DONE
        assert cursor.pull() is sc.DONE
        assert endless_counter.pulls == 2

    def test_shorter_upstream(self) -> None:
        """Test take stops when upstream ends first."""
        assert sc.Stream.from_collection([1]).take(5).collect() == (1,)

    def test_negative_count_fails_fast(self) -> None:
        """Test a negative count is rejected at construction."""
        with pytest.raises(sc.InvalidArgumentError, match="non-negative"):
            sc.Stream.count().take(-1)

    def test_bounds_infinite_stream(self) -> None:
        """Test take clears the unbounded flag."""
        assert not sc.Stream.count().map(str).take(3).is_unbounded()


class TestSkipAndWhile:
    """Test `skip`, `take_while` and `skip_while`."""

    def test_skip(self) -> None:
        """Test the first values are dropped."""
        assert sc.Stream.from_range(0, 5).skip(2).collect() == (2, 3, 4)
        assert sc.Stream.from_range(0, 5).skip(9).collect() == ()
        with pytest.raises(sc.InvalidArgumentError):
            sc.Stream.empty().skip(-2)

    def test_take_while_bounds(self) -> None:
        """Test take_while on an infinite stream."""
        stream = sc.Stream.count().take_while(lambda x: x < 3)
        assert not stream.is_unbounded()
        assert stream.collect() == (0, 1, 2)

    def test_skip_while(self) -> None:
        """Test skip_while keeps everything after the first failure."""
        stream = sc.Stream.from_collection([0, 0, 1, 0])
        assert stream.skip_while(lambda x: x == 0).collect() == (1, 0)


class TestChain:
    """Test `chain` and `Stream.chain`."""

    def test_concatenates_in_order(self) -> None:
        """Test values of each stream follow each other."""
        left = sc.Stream.from_collection([1, 2])
        right = sc.Stream.from_collection([3, 4])
        assert sc.chain(left, right).collect() == (1, 2, 3, 4)
        assert left.chain(right).collect() == (1, 2, 3, 4)

    def test_empty_input(self) -> None:
        """Test chaining nothing gives an exhausted stream."""
        assert sc.chain().cursor().pull() is sc.DONE

    def test_opens_next_stream_only_when_reached(
        self, counter: PullCounter
    ) -> None:
        """Test the second stream is untouched while the first is consumed."""
        cursor = sc.chain(sc.Stream.once(-1), sc.Stream.from_fn(counter)).cursor()
        assert cursor.pull() == sc.Yielded(-1)
        assert counter.pulls == 0
        assert cursor.pull() == sc.Yielded(0)
        assert counter.pulls == 1

    def test_owns_every_input(self) -> None:
        """Test the chain node keeps its inputs as upstream."""
        a, b, c = sc.Stream.once(1), sc.Stream.once(2), sc.Stream.once(3)
        assert a.chain(b, c).upstream() == (a, b, c)
        assert sc.chain(a, b).upstream() == (a, b)

    def test_unbounded_if_any_input_is(self) -> None:
        """Test an infinite input makes the chain infinite."""
        assert sc.chain(sc.Stream.once(1), sc.Stream.count()).is_unbounded()
        assert not sc.chain(sc.Stream.once(1), sc.Stream.once(2)).is_unbounded()


class TestFlatten:
    """Test `flatten` and `flat_map`."""

    def test_flatten_streams_and_iterables(self) -> None:
        """Test one level of nesting is removed."""
        nested = sc.Stream.from_collection(
            [sc.Stream.from_range(0, 2), [2, 3], (), sc.Stream.once(4)]
        )
        assert nested.flatten().collect() == (0, 1, 2, 3, 4)

    def test_flatten_only_one_level(self) -> None:
        """Test inner nesting is preserved."""
        nested = sc.Stream.from_collection([[[1], [2]], [[3]]])
        assert nested.flatten().collect() == ([1], [2], [3])

    def test_flat_map(self) -> None:
        """Test mapping to a stream then flattening."""
        stream = sc.Stream.from_range(1, 4).flat_map(lambda n: sc.Stream.repeat(n, n))
        assert stream.collect() == (1, 2, 2, 3, 3, 3)

    def test_recursive_delegation(self) -> None:
        """Test flat_map delegating to itself walks a tree in pre-order."""
        tree = {1: [2, 3], 2: [4, 5]}

        def _walk(node: int) -> sc.Stream[int]:
            children = sc.Stream.from_collection(tree.get(node, []))
            return sc.Stream.once(node).chain(children.flat_map(_walk))

        assert _walk(1).collect() == (1, 2, 4, 5, 3)
        assert _walk(1).collect() == sc.Stream.from_tree(
            1, lambda n: tree.get(n, [])
        ).collect()


class TestShapes:
    """Test `enumerate`, `chunks`, `windows` and `inspect_each`."""

    def test_enumerate(self) -> None:
        """Test values are paired with their index."""
        pairs = sc.Stream.from_collection("ab").enumerate().collect()
        assert pairs == (sc.Enumerated(0, "a"), sc.Enumerated(1, "b"))
        assert pairs[1].idx == 1
        assert pairs[1].value == "b"

    def test_chunks(self) -> None:
        """Test fixed-size groups with a shorter tail."""
        assert sc.Stream.from_range(0, 5).chunks(2).collect() == ((0, 1), (2, 3), (4,))
        with pytest.raises(sc.InvalidArgumentError):
            sc.Stream.empty().chunks(0)

    def test_windows(self) -> None:
        """Test overlapping windows."""
        assert sc.Stream.from_range(0, 3).windows(3).collect() == ((0, 1, 2),)
        assert sc.Stream.from_range(0, 2).windows(3).collect() == ()
        with pytest.raises(sc.InvalidArgumentError):
            sc.Stream.empty().windows(0)

    def test_inspect_each(self) -> None:
        """Test the side effect runs once per pulled value."""
        seen: list[int] = []
        stream = sc.Stream.from_range(0, 100).inspect_each(seen.append).take(3)
        assert stream.collect() == (0, 1, 2)
        assert seen == [0, 1, 2]


class TestRepr:
    """Test the pipeline rendering of `Stream`."""

    def test_pipeline(self) -> None:
        """Test each node appears in order."""

        def square(x: int) -> int:
            return x * x

        stream = sc.Stream.from_range(0).map(square).take(5)
        assert repr(stream) == "Stream(from_range(0, inf, 1).map(square).take(5))"

    def test_chain(self) -> None:
        """Test chained inputs are rendered inside the call."""
        stream = sc.chain(sc.Stream.once(1), sc.Stream.empty())
        assert repr(stream) == "Stream(chain(from_collection((1,)), from_collection(())))"
