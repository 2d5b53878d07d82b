import random as std_random

import pytest

from genflow.core import Generator, Yield
from genflow.extra import Chain, Maybe, OneOf, Peek, Random, Replay, random
from genflow.state import Completed, Yielded


class _ListGenerator(Generator):
    """Yields by popping from the end of a list."""

    def __init__(self, items):
        self._items = list(items)

    def next(self, rng):
        return Yielded(self._items.pop())


def _i32(rng):
    return rng.getrandbits(32) - 2**31


@pytest.fixture
def rng():
    return std_random.Random(1234)


def test_one_of(rng):
    subject = OneOf([Yield(42).once()])
    assert subject.next(rng) == Yielded(42)
    assert subject.next(rng) == Completed(42)


def test_one_of_empty_completes_with_none(rng):
    subject = OneOf([])
    assert subject.next(rng) == Completed(None)


def test_one_of_picks_every_member_eventually(rng):
    subject = OneOf([Yield(1).once(), Yield(2).once(), Yield(3).once()])
    seen = set()
    for _ in range(100):
        first = subject.next(rng)
        second = subject.next(rng)
        assert second == Completed(first.value)
        seen.add(first.value)
    assert seen == {1, 2, 3}


def test_replay(rng):
    gen = Random(_i32).once().replay(5)
    first = gen.next(rng)
    last = gen.next(rng)
    assert first.is_yielded()
    assert last.is_complete()
    buf = [first, last]

    for _ in range(10):
        for expected in buf:
            assert expected == gen.next(rng)
    assert buf[0] == gen.next(rng)

    for item in buf:
        assert item != gen.next(rng)


def test_replay_forever_repeats_first_run(rng):
    gen = Random(_i32).once().replay_forever()
    first = [gen.next(rng), gen.next(rng)]
    for _ in range(5):
        assert [gen.next(rng), gen.next(rng)] == first


def test_replay_zero_draws_afresh():
    counter = iter(range(100))
    gen = Replay(Random(lambda rng: next(counter)).once(), 0)
    rng = std_random.Random(0)
    states = [gen.next(rng) for _ in range(4)]
    assert states == [Yielded(0), Completed(0), Yielded(1), Completed(1)]


def test_replay_negative_length_rejected():
    with pytest.raises(ValueError):
        Replay(Yield(1).once(), -1)


def test_peek(rng):
    peekable = _ListGenerator([1, 2, 3]).peekable()
    assert peekable.peek(rng) == Yielded(3)
    assert peekable.peek(rng) == Yielded(2)
    assert peekable.peek(rng) == Yielded(1)
    assert peekable.peek_next(rng) == Yielded(3)
    assert peekable.next(rng) == Yielded(3)
    assert peekable.peek_next(rng) == Yielded(2)
    assert peekable.peek_next(rng) == Yielded(2)
    assert peekable.next(rng) == Yielded(2)
    assert peekable.peek_next(rng) == Yielded(1)
    assert peekable.next(rng) == Yielded(1)


def test_peek_passes_through_without_buffer(rng):
    peekable = Peek(_ListGenerator([5, 6]))
    assert peekable.next(rng) == Yielded(6)
    assert peekable.next(rng) == Yielded(5)


def test_chain_runs_in_order_and_restarts(rng):
    chain = Chain([Yield(1).once(), Yield(2).once()])
    assert chain.next(rng) == Yielded(1)
    assert chain.next(rng) == Yielded(2)
    assert chain.next(rng) == Completed([1, 2])
    assert chain.next(rng) == Yielded(1)


def test_empty_chain_completes_with_empty_list(rng):
    assert Chain().next(rng) == Completed([])


def test_chain_extend(rng):
    chain = Chain([Yield("a").once()])
    chain.extend([Yield("b").once()])
    assert chain.complete(rng) == ["a", "b"]


def test_braced_chain_extend(rng):
    braced = Chain().brace(Yield("<").once(), Yield(">").once())
    braced.extend([Yield("x").once()])
    states = [braced.next(rng) for _ in range(4)]
    assert states == [Yielded("<"), Yielded("x"), Yielded(">"), Completed(["x"])]


def test_maybe_either_skips_or_runs(rng):
    outcomes = set()
    for _ in range(200):
        subject = Maybe(Yield(7).once())
        first = subject.next(rng)
        if first == Completed(None):
            outcomes.add("skipped")
        else:
            assert first == Yielded(7)
            assert subject.next(rng) == Completed(7)
            outcomes.add("ran")
    assert outcomes == {"skipped", "ran"}


def test_maybe_method_builds_maybe(rng):
    subject = Yield(3).once().maybe()
    results = {subject.complete(rng) for _ in range(100)}
    assert results == {None, 3}


def test_random_yields_sampled_values():
    gen = random(lambda rng: 7)
    rng = std_random.Random(0)
    assert [gen.next(rng) for _ in range(3)] == [Yielded(7)] * 3


def test_random_is_deterministic_for_seed():
    gen = Random(_i32)
    first = [gen.next(std_random.Random(9)) for _ in range(1)]
    again = [gen.next(std_random.Random(9)) for _ in range(1)]
    assert first == again
    rng_a = std_random.Random(42)
    rng_b = std_random.Random(42)
    assert [gen.next(rng_a) for _ in range(5)] == [gen.next(rng_b) for _ in range(5)]