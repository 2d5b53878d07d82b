# genflow

Composable, stateful generators driven by a random number source.

A generator is stepped with `next(rng)`, where `rng` is a `random.Random`.
Each step either *yields* a value, giving a `Yielded` state, or *completes*
with a return value, giving a `Completed` state. `complete(rng)` steps a
generator until it completes and returns that value. Larger streams are
built by combining small generators.

## Modules

- `genflow.state`: the step results `GeneratorState`, `Yielded` and
  `Completed`; the result wrappers `Ok` and `Err`; the empty `Never` type;
  and the errors `GenError`, `TypeMismatchError`, `DeserializeError`,
  `SerializeError` and `CustomError`, with the helpers `type_error` and
  `custom_error`.
- `genflow.core`: the `Generator` base class and the combinators `Once`,
  `Infallible`, `MapComplete`, `MapYielded`, `AndThen`, `Concatenate`,
  `Exhaust`, `Brace`, `Inspect`, `Aggregate` and `Repeat`, plus the
  constant generators `Yield` (yields one value forever) and `Complete`
  (completes at every step).
- `genflow.extra`: `Replay`, `Peek` (with `peek` and `peek_next`), `Chain`,
  `OneOf`, `Maybe`, `Random` and the `random(sampler)` helper.
- `genflow.trying`: `Unwrap`, `TryOnce`, `AndThenTry`, `OrElseTry` and
  `TryAggregate`, for streams that yield or return `Ok`/`Err` results.
- `genflow.shared`: `Shared`, a handle whose `clone()` continues from the
  same point in the stream.

Every combinator is also reachable as a method on `Generator`:

- `once`, `repeat`, `aggregate`, `concatenate`, `brace`, `prefix`,
  `suffix` and `exhaust` shape the stream.
- `map_yielded`, `map_complete`, `and_then` and `inspect` transform or
  observe it.
- `replay`, `replay_forever`, `peekable` and `shared` buffer what it
  produces.
- `maybe` randomly runs the stream or completes with `None`; `OneOf` and
  `Chain` pick among or join several streams.
- `infallible`, `unwrap`, `try_once`, `and_then_try`, `or_else_try`,
  `try_aggregate` and `try_next_yielded` handle `Ok`/`Err` results.

## Install

```
pip install genflow
```

## Example

```python
import random

from genflow.core import Yield

rng = random.Random(0)

gen = Yield(42).once().repeat(3)
print(gen.next(rng))      # Yielded(value=42)
print(gen.complete(rng))  # [42, 42, 42]
```

```python
import random

from genflow.extra import random as random_gen

rng = random.Random(1)
dice = random_gen(lambda r: r.randint(1, 6)).once().repeat(5).aggregate()
print(dice.complete(rng))  # five rolls, as a list
```

Shared handles see the same states, each at its own pace, and can be
closed explicitly or used as context managers:

```python
import random

from genflow.extra import random as random_gen

rng = random.Random(2)
with random_gen(lambda r: r.random()).shared() as left:
    right = left.clone()
    assert left.next(rng) == right.next(rng)
    right.close()
```

## Errors

Errors from the library are subclasses of `genflow.state.GenError`. For
example, `into_yielded()` on a `Completed` state and `into_complete()` on a
`Yielded` state raise a `CustomError`, and `try_next_yielded` raises the
error carried by an `Err` return. Stepping a closed `Shared` handle raises
`ValueError`.

## What this package does not do

There is no conversion of generated values to or from a serialized form:
`DeserializeError` and `SerializeError` are provided as error types, but
nothing in the package raises them. There is no command-line tool.

## Development

```
pip install -e .[test]
pytest
```