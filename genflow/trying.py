"""Combinators for generators whose yielded or returned values are results."""

from __future__ import annotations

import random as _random
from typing import Any, Callable

from .core import Generator
from .state import Completed, Err, GeneratorState, Ok, Yielded

_UNSET: Any = object()


def _as_result(value: Any) -> Ok | Err:
    if isinstance(value, (Ok, Err)):
        return value
    raise TypeError(f"value is not a result: {value!r}")


class Unwrap(Generator):
    """Unwraps yielded results; an :class:`Err` ends the stream.

    A yielded ``Ok(v)`` is yielded as ``v``, a yielded ``Err(e)`` completes
    with ``Err(e)``, and a returned value ``r`` completes with ``Ok(r)``.
    """

    def __init__(self, inner: Generator) -> None:
        self._inner = inner

    def next(self, rng: _random.Random) -> GeneratorState:
        match self._inner.next(rng):
            case Yielded(value=value):
                match _as_result(value):
                    case Ok(value=ok):
                        return Yielded(ok)
                    case err:
                        return Completed(err)
            case Completed(value=value):
                return Completed(Ok(value))
        raise TypeError("inner generator produced an unknown state")


class TryOnce(Generator):
    """Yields one value from the inner generator, then returns it in :class:`Ok`.

    The inner generator may only complete with an :class:`Err`, which is
    passed through.
    """

    def __init__(self, inner: Generator) -> None:
        self._inner = inner
        self._output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._output is not _UNSET:
            value, self._output = self._output, _UNSET
            return Completed(Ok(value))
        state = self._inner.next(rng)
        if isinstance(state, Yielded):
            self._output = state.value
            return state
        result = _as_result(state.value)
        if isinstance(result, Ok):
            raise RuntimeError("inner generator of try_once completed without an error")
        return Completed(result)


class AndThenTry(Generator):
    """On an :class:`Ok` return, continues with the generator built from it.

    An :class:`Err` return of the inner generator is passed through.
    """

    def __init__(self, inner: Generator, closure: Callable[[Any], Generator]) -> None:
        self._inner = inner
        self._closure = closure
        self._output: Generator | None = None

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._output is not None:
                state = self._output.next(rng)
                if state.is_complete():
                    self._output = None
                return state
            state = self._inner.next(rng)
            if isinstance(state, Yielded):
                return state
            match _as_result(state.value):
                case Ok(value=value):
                    self._output = self._closure(value)
                case err:
                    return Completed(err)


class OrElseTry(Generator):
    """On an :class:`Err` return, continues with the generator built from it.

    An :class:`Ok` return of the inner generator is passed through.
    """

    def __init__(self, inner: Generator, closure: Callable[[Any], Generator]) -> None:
        self._inner = inner
        self._closure = closure
        self._output: Generator | None = None

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._output is not None:
                state = self._output.next(rng)
                if state.is_complete():
                    self._output = None
                return state
            state = self._inner.next(rng)
            if isinstance(state, Yielded):
                return state
            match _as_result(state.value):
                case Err(error=error):
                    self._output = self._closure(error)
                case ok:
                    return Completed(ok)


class TryAggregate(Generator):
    """Collects yielded values into one list, unless the run ends in an error.

    On an :class:`Ok` return the list is yielded and the result returned on
    the following step; on an :class:`Err` return the collected values are
    dropped and the error is returned at once.
    """

    def __init__(self, inner: Generator) -> None:
        self._inner = inner
        self._output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._output is not _UNSET:
            value, self._output = self._output, _UNSET
            return Completed(value)
        out = []
        while True:
            state = self._inner.next(rng)
            if isinstance(state, Yielded):
                out.append(state.value)
                continue
            result = _as_result(state.value)
            if isinstance(result, Ok):
                self._output = result
                return Yielded(out)
            return Completed(result)