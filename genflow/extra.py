"""Combinators that replay, peek at, chain, pick among or sample generators."""

from __future__ import annotations

import random as _random
from collections import deque
from typing import Any, Callable, Iterable

from .core import Generator
from .state import Completed, GeneratorState, Yielded

_UNSET: Any = object()


class Replay(Generator):
    """Records one run of the inner generator and plays it back.

    The first run is passed through and recorded. After it, the recorded
    states are yielded again, one run after another. With a length of
    zero nothing is replayed: every run is drawn afresh from the inner
    generator. With any other length, or with ``None``, the recorded run
    is replayed indefinitely.
    """

    def __init__(self, inner: Generator, length: int | None) -> None:
        if length is not None and length < 0:
            raise ValueError("length must not be negative")
        self._inner = inner
        self._length = length
        self._idx = 0
        self._buf: list = []
        self._ret: Any = _UNSET

    def _purge(self) -> None:
        self._buf = []
        self._ret = _UNSET
        self._idx = 0

    def _replays(self) -> bool:
        return self._length is None or self._length > 0

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._ret is not _UNSET:
                if not self._replays():
                    self._purge()
                    continue
                if self._idx < len(self._buf):
                    value = self._buf[self._idx]
                    self._idx += 1
                    return Yielded(value)
                self._idx = 0
                return Completed(self._ret)
            state = self._inner.next(rng)
            if isinstance(state, Yielded):
                self._buf.append(state.value)
            else:
                self._ret = state.value
            return state


class Peek(Generator):
    """Lets callers look at upcoming states without consuming them."""

    def __init__(self, inner: Generator) -> None:
        self._inner = inner
        self._buffer: deque[GeneratorState] = deque()

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._buffer:
            return self._buffer.popleft()
        return self._inner.next(rng)

    def peek(self, rng: _random.Random) -> GeneratorState:
        """Draw one more state from the inner generator and buffer it."""
        state = self._inner.next(rng)
        self._buffer.append(state)
        return state

    def peek_next(self, rng: _random.Random) -> GeneratorState:
        """Return the state the next call to :meth:`next` will produce."""
        if not self._buffer:
            self._buffer.append(self._inner.next(rng))
        return self._buffer[0]


class Chain(Generator):
    """Runs a sequence of generators in turn, returning the list of returns."""

    def __init__(self, generators: Iterable[Generator] = ()) -> None:
        self._inners: list[Generator] = list(generators)
        self._idx = 0
        self._completed: list = []

    def next(self, rng: _random.Random) -> GeneratorState:
        while self._idx < len(self._inners):
            state = self._inners[self._idx].next(rng)
            if isinstance(state, Yielded):
                return state
            self._idx += 1
            self._completed.append(state.value)
        completed, self._completed = self._completed, []
        self._idx = 0
        return Completed(completed)

    def extend(self, generators: Iterable[Generator]) -> None:
        """Append more generators to the chain."""
        self._inners.extend(generators)


class OneOf(Generator):
    """Runs one generator picked at random from a collection.

    Completes with the picked generator's returned value, or with
    ``None`` straight away if the collection is empty.
    """

    def __init__(self, generators: Iterable[Generator] = ()) -> None:
        self._inners: list[Generator] = list(generators)
        self._cursor: tuple[int, Generator] | None = None

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._cursor is None:
            if not self._inners:
                return Completed(None)
            idx = rng.randrange(len(self._inners))
            self._cursor = (idx, self._inners.pop(idx))
        idx, picked = self._cursor
        state = picked.next(rng)
        if state.is_complete():
            self._cursor = None
            self._inners.insert(idx, picked)
        return state


class Maybe(Generator):
    """Randomly either runs the inner generator or completes with ``None``."""

    def __init__(self, inner: Generator) -> None:
        self._inner = inner
        self._include = False

    def next(self, rng: _random.Random) -> GeneratorState:
        if not self._include:
            self._include = bool(rng.getrandbits(1))
            if not self._include:
                return Completed(None)
        state = self._inner.next(rng)
        if state.is_complete():
            self._include = False
        return state


class Random(Generator):
    """Yields values drawn by ``sampler(rng)`` forever."""

    def __init__(self, sampler: Callable[[_random.Random], Any]) -> None:
        self._sampler = sampler

    def next(self, rng: _random.Random) -> GeneratorState:
        return Yielded(self._sampler(rng))


def random(sampler: Callable[[_random.Random], Any]) -> Random:
    """Create a generator of values drawn by ``sampler(rng)``."""
    return Random(sampler)