"""The generator protocol and its basic combinators."""

from __future__ import annotations

import enum
import random as _random
from typing import Any, Callable, Generic, Iterable, TypeVar

from .state import Completed, Err, GeneratorState, Ok, Yielded, custom_error

Y = TypeVar("Y")
R = TypeVar("R")

_UNSET: Any = object()


class Generator(Generic[Y, R]):
    """A stateful stream that draws randomness from an rng.

    Each call to :meth:`next` yields a value or completes with a returned
    value. Generators need not complete in finite time.
    """

    def next(self, rng: _random.Random) -> GeneratorState[Y, R]:
        """Step through one item in the stream."""
        raise NotImplementedError(f"{type(self).__name__} does not define next()")

    def complete(self, rng: _random.Random) -> R:
        """Drive the generator until it completes and return that value."""
        while True:
            state = self.next(rng)
            if isinstance(state, Completed):
                return state.value

    def once(self) -> "Once":
        """Turn every yielded value into a returned value as well."""
        return Once(self)

    def infallible(self) -> "Infallible":
        """Wrap returned values in :class:`Ok`."""
        return Infallible(self)

    def map_complete(self, closure: Callable[[Any], Any]) -> "MapComplete":
        """Apply ``closure`` to the values returned by this generator."""
        return MapComplete(self, closure)

    def map_yielded(self, closure: Callable[[Any], Any]) -> "MapYielded":
        """Apply ``closure`` to the values yielded by this generator."""
        return MapYielded(self, closure)

    def and_then(self, closure: Callable[[Any], "Generator"]) -> "AndThen":
        """Run this generator to completion, then the one built from its return."""
        return AndThen(self, closure)

    def concatenate(self, right: "Generator") -> "Concatenate":
        """Run this generator, then ``right``; return both returned values."""
        return Concatenate(self, right)

    def exhaust(self) -> "Exhaust":
        """Complete in one step, discarding everything yielded on the way."""
        return Exhaust(self)

    def prefix(self, prefix: "Generator") -> "Brace":
        """Prefix the stream with another."""
        return self.brace(prefix, Complete())

    def suffix(self, suffix: "Generator") -> "Brace":
        """Suffix the stream with another."""
        return self.brace(Complete(), suffix)

    def brace(self, begin: "Generator", end: "Generator") -> "Brace":
        """Surround the stream with two others."""
        return Brace(begin, self, end)

    def inspect(self, closure: Callable[[GeneratorState], Any]) -> "Inspect":
        """Call ``closure`` on every state produced, passing it through."""
        return Inspect(self, closure)

    def maybe(self) -> "Generator":
        """Randomly either run this generator or complete with ``None``."""
        from .extra import Maybe

        return Maybe(self)

    def shared(self) -> "Generator":
        """Wrap this generator so that clones continue from the same point."""
        from .shared import Shared

        return Shared(self)

    def aggregate(self) -> "Aggregate":
        """Collect all yielded values into a single yielded list."""
        return Aggregate(self)

    def repeat(self, length: int) -> "Repeat":
        """Run this generator ``length`` times, returning all returned values."""
        return Repeat(self, length)

    def replay(self, length: int) -> "Generator":
        """Record one run and replay it ``length`` times before starting anew."""
        from .extra import Replay

        return Replay(self, length)

    def replay_forever(self) -> "Generator":
        """Record one run and replay it forever."""
        from .extra import Replay

        return Replay(self, None)

    def peekable(self) -> "Generator":
        """Allow looking at upcoming states without consuming them."""
        from .extra import Peek

        return Peek(self)

    def unwrap(self) -> "Generator":
        """Unwrap yielded results; complete with the first error."""
        from .trying import Unwrap

        return Unwrap(self)

    def try_once(self) -> "Generator":
        """Like :meth:`once` for generators whose return is a result."""
        from .trying import TryOnce

        return TryOnce(self)

    def and_then_try(self, closure: Callable[[Any], "Generator"]) -> "Generator":
        """On an :class:`Ok` return, continue with ``closure(value)``."""
        from .trying import AndThenTry

        return AndThenTry(self, closure)

    def or_else_try(self, closure: Callable[[Any], "Generator"]) -> "Generator":
        """On an :class:`Err` return, continue with ``closure(error)``."""
        from .trying import OrElseTry

        return OrElseTry(self, closure)

    def try_aggregate(self) -> "Generator":
        """Like :meth:`aggregate`, but an error return ends the stream."""
        from .trying import TryAggregate

        return TryAggregate(self)

    def try_next_yielded(self, rng: _random.Random) -> Any:
        """Return the next yielded value, skipping :class:`Ok` returns.

        An :class:`Err` return is raised: exceptions as they are, other
        error values wrapped in a custom error.
        """
        while True:
            match self.next(rng):
                case Yielded(value=value):
                    return value
                case Completed(value=Ok()):
                    continue
                case Completed(value=Err(error=error)):
                    if isinstance(error, BaseException):
                        raise error
                    raise custom_error(error)
                case Completed(value=other):
                    raise TypeError(f"completed value is not a result: {other!r}")


class Once(Generator):
    """Yields one value from the inner generator, then returns it."""

    def __init__(self, inner: Generator) -> None:
        self._inner = inner
        self._output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._output is not _UNSET:
            value, self._output = self._output, _UNSET
            return Completed(value)
        while True:
            state = self._inner.next(rng)
            if isinstance(state, Yielded):
                self._output = state.value
                return state


class Infallible(Generator):
    """Wraps every returned value of the inner generator in :class:`Ok`."""

    def __init__(self, inner: Generator) -> None:
        self._inner = inner

    def next(self, rng: _random.Random) -> GeneratorState:
        return self._inner.next(rng).map_complete(Ok)


class MapComplete(Generator):
    """Applies a function to the values returned by the inner generator."""

    def __init__(self, inner: Generator, closure: Callable[[Any], Any]) -> None:
        self._inner = inner
        self._closure = closure

    def next(self, rng: _random.Random) -> GeneratorState:
        return self._inner.next(rng).map_complete(self._closure)


class MapYielded(Generator):
    """Applies a function to the values yielded by the inner generator."""

    def __init__(self, inner: Generator, closure: Callable[[Any], Any]) -> None:
        self._inner = inner
        self._closure = closure

    def next(self, rng: _random.Random) -> GeneratorState:
        return self._inner.next(rng).map_yielded(self._closure)


class AndThen(Generator):
    """Runs the inner generator, then the generator built from its return."""

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
            self._output = self._closure(state.value)


class Concatenate(Generator):
    """Runs two generators in turn and returns the pair of their returns."""

    def __init__(self, left: Generator, right: Generator) -> None:
        self._left = left
        self._right = right
        self._left_output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        while self._left_output is _UNSET:
            state = self._left.next(rng)
            if isinstance(state, Yielded):
                return state
            self._left_output = state.value
        state = self._right.next(rng)
        if isinstance(state, Yielded):
            return state
        left, self._left_output = self._left_output, _UNSET
        return Completed((left, state.value))


class Exhaust(Generator):
    """Runs the inner generator to completion in a single step."""

    def __init__(self, inner: Generator) -> None:
        self._inner = inner

    def next(self, rng: _random.Random) -> GeneratorState:
        return Completed(self._inner.complete(rng))


class _BraceState(enum.Enum):
    BEGIN = enum.auto()
    MIDDLE = enum.auto()
    END = enum.auto()


class Brace(Generator):
    """Runs ``begin``, ``inner`` and ``end`` in turn, returning inner's return."""

    def __init__(self, begin: Generator, inner: Generator, end: Generator) -> None:
        self._begin = begin
        self._inner = inner
        self._end = end
        self._state = _BraceState.BEGIN
        self._complete: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._state is _BraceState.BEGIN:
                state = self._begin.next(rng)
                if isinstance(state, Yielded):
                    return state
                self._state = _BraceState.MIDDLE
            elif self._state is _BraceState.MIDDLE:
                state = self._inner.next(rng)
                if isinstance(state, Yielded):
                    return state
                self._complete = state.value
                self._state = _BraceState.END
            else:
                state = self._end.next(rng)
                if isinstance(state, Yielded):
                    return state
                self._state = _BraceState.BEGIN
                value, self._complete = self._complete, _UNSET
                return Completed(value)

    def extend(self, generators: Iterable[Generator]) -> None:
        """Add generators to a braced :class:`Chain`."""
        self._inner.extend(generators)  # type: ignore[attr-defined]


class Inspect(Generator):
    """Calls a function on every state of the inner generator."""

    def __init__(self, inner: Generator, closure: Callable[[GeneratorState], Any]) -> None:
        self._inner = inner
        self._closure = closure

    def next(self, rng: _random.Random) -> GeneratorState:
        state = self._inner.next(rng)
        self._closure(state)
        return state


class Aggregate(Generator):
    """Yields everything the inner generator yields as one list, then returns."""

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
            else:
                self._output = state.value
                return Yielded(out)


class Repeat(Generator):
    """Runs the inner generator ``length`` times and returns all its returns."""

    def __init__(self, inner: Generator, length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        self._inner = inner
        self._length = length
        self._remaining = length
        self._returned: list = []

    def next(self, rng: _random.Random) -> GeneratorState:
        while self._remaining:
            state = self._inner.next(rng)
            if isinstance(state, Yielded):
                return state
            self._remaining -= 1
            self._returned.append(state.value)
        self._remaining = self._length
        returned, self._returned = self._returned, []
        return Completed(returned)


class Yield(Generator):
    """Yields the same value forever."""

    def __init__(self, value: Any) -> None:
        self._value = value

    def next(self, rng: _random.Random) -> GeneratorState:
        return Yielded(self._value)


class Complete(Generator):
    """Completes at every step, returning the same value."""

    def __init__(self, value: Any = None) -> None:
        self._value = value

    def next(self, rng: _random.Random) -> GeneratorState:
        return Completed(self._value)