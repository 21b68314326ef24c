"""Tests for the terminal operations of `Stream`."""

import warnings
from collections.abc import Callable

import pytest

import seqchain as sc


class TestCollect:
    """Test `collect` and `try_collect`."""

    def test_default_is_tuple(self) -> None:
        """Test the default collector."""
        assert sc.Stream.from_range(0, 3).collect() == (0, 1, 2)

    def test_custom_collector(self) -> None:
        """Test list, set and arbitrary callables."""
        stream = sc.Stream.from_collection([3, 1, 3])
        assert stream.collect(list) == [3, 1, 3]
        assert stream.collect(set) == {1, 3}
        assert stream.collect(sorted) == [1, 3, 3]

    def test_failure_propagates_unmodified(self) -> None:
        """Test collect re-raises the callback's own exception."""
        error = KeyError("missing")

        def _lookup(_: int) -> int:
            raise error

        with pytest.raises(KeyError) as info:
            sc.Stream.once(1).map(_lookup).collect()
        assert info.value is error

    def test_try_collect_ok(self) -> None:
        """Test a successful collection is wrapped in Ok."""
        assert sc.Stream.from_range(0, 3).try_collect() == sc.Ok((0, 1, 2))

    def test_try_collect_keeps_partial_values(self) -> None:
        """Test a failing callback returns the values yielded before it."""

        def _parse(text: str) -> int:
            return int(text)

        res = sc.Stream.from_collection(["1", "2", "x", "4"]).map(_parse).try_collect()
        assert res.is_err()
        partial = res.unwrap_err()
        assert partial.values == (1, 2)
        assert isinstance(partial.error, ValueError)

    def test_try_collect_reopening_one_shot_raises(self) -> None:
        """Test a consumed `from_fn` stream raises instead of returning an Err."""
        stream = sc.Stream.from_fn(lambda: sc.DONE)
        assert stream.collect() == ()
        with pytest.raises(sc.StreamConsumedError):
            stream.try_collect()

    def test_try_collect_pattern_matching(self) -> None:
        """Test the Result can be destructured."""
        res = sc.Stream.once(0).map(lambda x: 1 // x).try_collect()
        match res:
            case sc.Err(sc.Partial(values, error)):
                assert values == ()
                assert isinstance(error, ZeroDivisionError)
            case _:
                pytest.fail("expected an Err")


class _Stop(Exception):
    """Raised by callbacks to interrupt an endless consumption."""


def _stop_at(limit: int) -> Callable[[int], int]:
    def _check(x: int) -> int:
        if x >= limit:
            raise _Stop
        return x

    return _check


class TestUnboundedWarning:
    """Test the advisory emitted before consuming an infinite stream."""

    @pytest.mark.parametrize(
        "operation",
        ["collect", "try_collect", "last", "length", "for_each", "fold"],
    )
    def test_warns_before_consuming(self, operation: str) -> None:
        """Test every full consumption warns on a stream known to be infinite."""
        stream = sc.Stream.count().map(str)
        args = {"for_each": (print,), "fold": (0, max)}.get(operation, ())
        with warnings.catch_warnings():
            warnings.simplefilter("error", sc.UnboundedConsumptionWarning)
            with pytest.raises(sc.UnboundedConsumptionWarning, match="take"):
                getattr(stream, operation)(*args)

    def test_bounded_stream_does_not_warn(self) -> None:
        """Test take removes the warning."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert sc.Stream.count().take(2).collect() == (0, 1)

    def test_partial_consumption_does_not_warn(self) -> None:
        """Test first, nth and cursors are fine on infinite streams."""
        stream = sc.Stream.count(1)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert stream.first() == sc.Yielded(1)
            assert stream.nth(9) == sc.Yielded(10)
            assert stream.cursor().pull() == sc.Yielded(1)

    def test_can_be_disabled(self) -> None:
        """Test the warning is controlled by the configuration."""
        with sc.config_context(warn_unbounded=False), warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(_Stop):
                sc.Stream.count().for_each(_stop_at(3))
            res = sc.Stream.count().map(_stop_at(3)).try_collect()
        assert res.unwrap_err().values == (0, 1, 2)
        assert sc.get_config().warn_unbounded


class TestTerminalHelpers:
    """Test `first`, `last`, `nth`, `fold`, `length` and `for_each`."""

    def test_first_pulls_once(self) -> None:
        """Test first only pulls one value."""
        seen: list[int] = []
        stream = sc.Stream.from_range(0, 10).inspect_each(seen.append)
        assert stream.first() == sc.Yielded(0)
        assert seen == [0]

    def test_empty_results(self) -> None:
        """Test the missing cases return DONE."""
        empty = sc.Stream.empty()
        assert empty.first() is sc.DONE
        assert empty.last() is sc.DONE
        assert empty.nth(0) is sc.DONE

    def test_last_and_nth(self) -> None:
        """Test positional access."""
        stream = sc.Stream.from_collection("abc")
        assert stream.last() == sc.Yielded("c")
        assert stream.nth(1) == sc.Yielded("b")
        with pytest.raises(sc.InvalidArgumentError):
            stream.nth(-1)

    def test_none_is_a_value(self) -> None:
        """Test None values are not confused with exhaustion."""
        stream = sc.Stream.from_collection([None])
        assert stream.first() == sc.Yielded(None)
        assert stream.last() == sc.Yielded(None)
        assert stream.nth(0) == sc.Yielded(None)

    def test_fold_and_length(self) -> None:
        """Test reductions."""
        stream = sc.Stream.from_range(1, 6)
        assert stream.fold(0, lambda acc, x: acc + x) == 15
        assert stream.length() == 5
        assert sc.Stream.empty().fold("init", lambda acc, _: acc) == "init"

    def test_for_each(self) -> None:
        """Test side effects run in order."""
        seen: list[int] = []
        sc.Stream.from_range(3, 0, -1).for_each(seen.append)
        assert seen == [3, 2, 1]

    def test_into_and_inspect(self) -> None:
        """Test the piping helpers keep the chain going."""
        seen: list[str] = []
        total = (
            sc.Stream.from_range(0, 4)
            .inspect(lambda s: seen.append(repr(s)))
            .into(lambda s: s.fold(0, lambda acc, x: acc + x))
        )
        assert total == 6
        assert seen == ["Stream(from_range(0, 4, 1))"]
