"""A generator that can be cloned, every clone continuing from the same point."""

from __future__ import annotations

import random as _random
import weakref
from collections import deque
from typing import Any

from .core import Generator
from .state import GeneratorState


class _Star:
    """Drives one generator and fans its states out to registered queues."""

    def __init__(self, generator: Generator) -> None:
        self.inner = generator
        self.routes: dict[int, deque[GeneratorState]] = {}

    def register(self, queue: deque[GeneratorState] | None = None) -> int:
        new_id = max(self.routes) + 1 if self.routes else 0
        self.routes[new_id] = deque() if queue is None else queue
        return new_id

    def register_from(self, route_id: int) -> int:
        return self.register(deque(self.routes[route_id]))

    def unregister(self, route_id: int) -> None:
        self.routes.pop(route_id, None)

    def next_for(self, route_id: int, rng: _random.Random) -> GeneratorState:
        queue = self.routes[route_id]
        if not queue:
            state = self.inner.next(rng)
            for route in self.routes.values():
                route.append(state)
        return queue.popleft()


class Shared(Generator):
    """Wraps a generator so that clones see the same stream of states.

    A clone starts from where the original left off; from then on both
    see every state the wrapped generator produces, each at its own pace.
    """

    def __init__(self, generator: Generator) -> None:
        self._attach(_Star(generator), None)

    def _attach(self, star: _Star, from_id: int | None) -> None:
        self._star = star
        self._id = star.register() if from_id is None else star.register_from(from_id)
        self._finalizer = weakref.finalize(self, star.unregister, self._id)

    def _check_open(self) -> None:
        if not self._finalizer.alive:
            raise ValueError("shared generator is closed")

    def next(self, rng: _random.Random) -> GeneratorState:
        self._check_open()
        return self._star.next_for(self._id, rng)

    def clone(self) -> "Shared":
        """Return a new handle that continues from this one's position."""
        self._check_open()
        other = Shared.__new__(Shared)
        other._attach(self._star, self._id)
        return other

    def __copy__(self) -> "Shared":
        return self.clone()

    def close(self) -> None:
        """Stop receiving states; the handle can no longer be stepped."""
        self._finalizer()

    def __enter__(self) -> "Shared":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def inner(self) -> Generator:
        """The wrapped generator."""
        return self._star.inner