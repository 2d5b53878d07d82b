import pytest

from genflow.state import (
    Completed,
    CustomError,
    DeserializeError,
    Err,
    GenError,
    Never,
    Ok,
    SerializeError,
    TypeMismatchError,
    Yielded,
    custom_error,
    type_error,
)


def test_yielded_predicates():
    state = Yielded(42)
    assert state.is_yielded() is True
    assert state.is_complete() is False


def test_completed_predicates():
    state = Completed(42)
    assert state.is_complete() is True
    assert state.is_yielded() is False


def test_into_yielded_returns_value():
    assert Yielded("a").into_yielded() == "a"


def test_into_yielded_on_completed_raises():
    with pytest.raises(CustomError) as info:
        Completed(1).into_yielded()
    assert info.value.msg == "unexpected EOF"


def test_into_complete_returns_value():
    assert Completed([1, 2]).into_complete() == [1, 2]


def test_into_complete_on_yielded_raises():
    with pytest.raises(GenError) as info:
        Yielded(1).into_complete()
    assert str(info.value) == "unexpected EOF"


def test_map_complete_only_touches_completed():
    assert Completed(42).map_complete(lambda v: v - 42) == Completed(0)
    assert Yielded(42).map_complete(lambda v: v - 42) == Yielded(42)


def test_map_yielded_only_touches_yielded():
    assert Yielded(42).map_yielded(lambda v: v - 42) == Yielded(0)
    assert Completed(42).map_yielded(lambda v: v - 42) == Completed(42)


def test_map_ok_and_map_err():
    assert Completed(Ok(2)).map_ok(lambda v: v * 10) == Completed(Ok(20))
    assert Completed(Err("e")).map_ok(lambda v: v * 10) == Completed(Err("e"))
    assert Completed(Err("e")).map_err(str.upper) == Completed(Err("E"))
    assert Completed(Ok(2)).map_err(str.upper) == Completed(Ok(2))
    assert Yielded(5).map_ok(lambda v: v + 1) == Yielded(5)


def test_map_ok_on_non_result_raises():
    with pytest.raises(TypeError):
        Completed(3).map_ok(lambda v: v)


def test_states_are_distinct():
    assert Yielded(1) == Yielded(1)
    assert not (Yielded(1) == Completed(1))


def test_type_error_stringifies_arguments():
    error = type_error("string", 42)
    assert isinstance(error, TypeMismatchError)
    assert error.expected == "string"
    assert error.got == "42"
    assert error == TypeMismatchError("string", "42")


def test_custom_error_equality_and_message():
    assert custom_error("boom") == CustomError("boom")
    assert custom_error("boom").msg == "boom"
    assert not (CustomError("boom") == SerializeError("boom"))
    assert not (DeserializeError("x") == DeserializeError("y"))


def test_errors_hash_consistently():
    assert {CustomError("a"), CustomError("a")} == {CustomError("a")}


def test_never_cannot_be_constructed():
    with pytest.raises(TypeError):
        Never()


def test_ok_and_err_hold_values():
    assert Ok(3).value == 3
    assert Err("bad").error == "bad"
    assert not (Ok(3) == Err(3))