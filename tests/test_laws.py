import pytest

from lazyfuture import failed, never, succeeded
from lazyfuture.combinators import laws
from lazyfuture.combinators.laws import Outcome, observe

SAMPLES = [succeeded(1), failed("e"), never()]


@pytest.mark.parametrize("future", SAMPLES)
def test_right_identity(future) -> None:
    assert laws.right_identity(future)


@pytest.mark.parametrize("func", [lambda x: succeeded(x + 1), lambda x: failed(x)])
def test_left_identity(func) -> None:
    assert laws.left_identity(1, func)


@pytest.mark.parametrize("future", SAMPLES)
def test_functor_laws(future) -> None:
    assert laws.functor_identity(future)
    assert laws.functor_composition(future, lambda x: x + 1, lambda x: x * 2)


@pytest.mark.parametrize("future", SAMPLES)
def test_concat_identity(future) -> None:
    assert laws.concat_identity(future)


@pytest.mark.parametrize("future", SAMPLES)
def test_swap_involution(future) -> None:
    assert laws.swap_involution(future)


def test_fold_is_total() -> None:
    assert observe(failed(2).fold(lambda r: r * 10, lambda v: v)) == Outcome("resolved", 20, 0, 1)
    assert observe(succeeded(2).fold(lambda r: r * 10, lambda v: -v)) == Outcome("resolved", -2, 0, 1)


def test_observe_pending() -> None:
    outcome = observe(never().map(str))
    assert outcome.channel == "pending"
    assert not outcome.settled_once


def test_pipelines_settle_exactly_once() -> None:
    pipelines = [
        succeeded(1).map(str).chain(lambda s: failed(s)).or_else(lambda r: succeeded(r * 2)),
        failed("x").swap().bimap(str, str.upper).rejected_map(len),
        succeeded(lambda v: v + 1).ap(succeeded(1)).concat(failed("loser")),
        failed("a").concat(succeeded("b")).fold(str, str).swap(),
    ]
    for pipeline in pipelines:
        assert observe(pipeline).settled_once


def test_equivalent_distinguishes_channels() -> None:
    assert not laws.equivalent(succeeded(1), failed(1))
    assert laws.equivalent(never(), never())
