"""Step results of generators, result wrappers and the error types."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

Y = TypeVar("Y")
R = TypeVar("R")
T = TypeVar("T")
E = TypeVar("E")


class GenError(Exception):
    """Base class of every error raised by this package."""

    def _fields(self) -> tuple:
        return self.args

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._fields()))


class TypeMismatchError(GenError):
    """A value of one kind was expected and another was found."""

    def __init__(self, expected: str, got: str) -> None:
        super().__init__(expected, got)
        self.expected = expected
        self.got = got

    def __str__(self) -> str:
        return f"expected {self.expected}, got {self.got}"


class _MessageError(GenError):
    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class DeserializeError(_MessageError):
    """Failure while turning a token stream back into a value."""


class SerializeError(_MessageError):
    """Failure while turning a token stream into serialized output."""


class CustomError(_MessageError):
    """A free-form error carrying only a message."""


def type_error(expected: Any, got: Any) -> TypeMismatchError:
    """Build a type mismatch error from anything that can be stringified."""
    return TypeMismatchError(str(expected), str(got))


def custom_error(msg: Any) -> CustomError:
    """Build a custom error from anything that can be stringified."""
    return CustomError(str(msg))


class Never(enum.Enum):
    """A type that has no values; it marks generators that never complete."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful result."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failed result."""

    error: E


Result = Union[Ok[T], Err[E]]


class GeneratorState(Generic[Y, R]):
    """What one step of a generator produced: a yielded or a returned value."""

    __slots__ = ()

    value: Any

    def is_yielded(self) -> bool:
        """True if the generator yielded a value."""
        return isinstance(self, Yielded)

    def is_complete(self) -> bool:
        """True if the generator completed with a value."""
        return isinstance(self, Completed)

    def into_yielded(self) -> Y:
        """Return the yielded value, or raise if the generator completed."""
        if isinstance(self, Yielded):
            return self.value
        raise custom_error("unexpected EOF")

    def into_complete(self) -> R:
        """Return the completed value, or raise if the generator yielded."""
        if isinstance(self, Completed):
            return self.value
        raise custom_error("unexpected EOF")

    def map_complete(self, closure: Callable[[R], Any]) -> "GeneratorState[Y, Any]":
        """Apply ``closure`` to a completed value; pass yielded values through."""
        match self:
            case Completed(value=value):
                return Completed(closure(value))
            case _:
                return self

    def map_yielded(self, closure: Callable[[Y], Any]) -> "GeneratorState[Any, R]":
        """Apply ``closure`` to a yielded value; pass completed values through."""
        match self:
            case Yielded(value=value):
                return Yielded(closure(value))
            case _:
                return self

    def map_ok(self, closure: Callable[[Any], Any]) -> "GeneratorState[Y, Any]":
        """Apply ``closure`` to the value of a completed :class:`Ok`."""

        def on_result(result: Any) -> Any:
            match result:
                case Ok(value=value):
                    return Ok(closure(value))
                case Err():
                    return result
                case _:
                    raise TypeError(f"completed value is not a result: {result!r}")

        return self.map_complete(on_result)

    def map_err(self, closure: Callable[[Any], Any]) -> "GeneratorState[Y, Any]":
        """Apply ``closure`` to the error of a completed :class:`Err`."""

        def on_result(result: Any) -> Any:
            match result:
                case Err(error=error):
                    return Err(closure(error))
                case Ok():
                    return result
                case _:
                    raise TypeError(f"completed value is not a result: {result!r}")

        return self.map_complete(on_result)


@dataclass(frozen=True)
class Yielded(GeneratorState[Y, Any]):
    """The generator yielded ``value``."""

    value: Y


@dataclass(frozen=True)
class Completed(GeneratorState[Any, R]):
    """The generator completed, returning ``value``."""

    value: R