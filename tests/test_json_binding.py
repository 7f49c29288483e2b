from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pytest

from dimbind.core.common import DISCARDED, dump_json, is_discarded, resize
from dimbind.core.json_binding import (
    Array,
    Identity,
    Integer,
    Member,
    NullAsDiscarded,
    Object,
    Optional,
    Projection,
    String,
    sequence_element,
    sequence_size,
)
from dimbind.errors import JsonTypeMismatchError, OutOfRangeError, UnexpectedMemberError


def _set_size(container: list[Any], size: int) -> None:
    resize(container, size, None)


def test_discarded() -> None:
    assert is_discarded(DISCARDED)
    assert not is_discarded(None)
    assert not is_discarded([])
    assert repr(DISCARDED) == "<discarded>"


@pytest.mark.parametrize(
    ("data", "expected"),
    [(1, "1"), ([1, "a"], '[1, "a"]'), (None, "null"), (DISCARDED, "<discarded>")],
)
def test_dump_json(data: Any, expected: str) -> None:
    assert dump_json(data) == expected


@pytest.mark.parametrize(
    ("initial", "size", "expected"),
    [([1, 2, 3], 1, [1]), ([1], 3, [1, 0, 0]), ([], 0, []), ([4, 5], 2, [4, 5])],
)
def test_resize(initial: list[int], size: int, expected: list[int]) -> None:
    resize(initial, size, 0)
    assert initial == expected


@pytest.mark.parametrize("data", [0, 5, 10, np.int64(7), np.uint8(3), 4.0])
def test_integer_load_valid(data: Any) -> None:
    value = Integer(0, 10).load(data)
    assert value == int(data)
    assert type(value) is int


@pytest.mark.parametrize("data", [-1, 11, np.int32(-5)])
def test_integer_load_out_of_range(data: Any) -> None:
    with pytest.raises(
        OutOfRangeError,
        match=re.escape(f"Expected integer in the range [0, 10], but received: {dump_json(data)}"),
    ) as exc_info:
        Integer(0, 10).load(data)
    assert exc_info.value.value == int(data)


@pytest.mark.parametrize("data", ["3", 2.5, True, None, [1], DISCARDED, float("nan")])
def test_integer_load_invalid_type(data: Any) -> None:
    with pytest.raises(JsonTypeMismatchError, match="Expected integer in the range"):
        Integer(0, 10).load(data)


def test_integer_save() -> None:
    assert Integer(0, 10).save(np.int64(4)) == 4
    assert type(Integer(0, 10).save(np.int64(4))) is int


def test_string() -> None:
    assert String().load("") == ""
    assert String().load("x") == "x"
    assert String().save("x") == "x"
    with pytest.raises(JsonTypeMismatchError, match="Expected string, but received: 1"):
        String().load(1)


def test_identity() -> None:
    value = {"a": [1, 2]}
    assert Identity().load(value) is value
    assert Identity().save(value) is value


def test_array_load_into_new_list() -> None:
    binder = Array(sequence_size, _set_size, sequence_element, Integer(0, 10))
    assert binder.load([1, 2, 3]) == [1, 2, 3]
    assert binder.load((4,)) == [4]


def test_array_load_in_place() -> None:
    binder = Array(sequence_size, _set_size, sequence_element, Integer(0, 10))
    target = [9, 9, 9, 9]
    out = binder.load([1, 2], target)
    assert out is target
    assert target == [1, 2]


@pytest.mark.parametrize("data", [5, "abc", {"a": 1}, None, DISCARDED])
def test_array_load_not_an_array(data: Any) -> None:
    binder = Array(sequence_size, _set_size, sequence_element, Identity())
    with pytest.raises(
        JsonTypeMismatchError, match=re.escape(f"Expected array, but received: {dump_json(data)}")
    ):
        binder.load(data)


def test_array_load_element_error_has_position() -> None:
    binder = Array(sequence_size, _set_size, sequence_element, Integer(0, 10))
    with pytest.raises(OutOfRangeError) as exc_info:
        binder.load([1, 2, 11])
    assert exc_info.value.index == 2
    assert exc_info.value.value == 11
    assert str(exc_info.value).startswith("Error parsing value at position 2: ")


def test_array_set_size_can_reject() -> None:
    def set_size(container: list[Any], size: int) -> None:
        if size > 2:
            raise OutOfRangeError("too long", value=size)
        resize(container, size, None)

    binder = Array(sequence_size, set_size, sequence_element, Identity())
    assert binder.load([1, 2]) == [1, 2]
    with pytest.raises(OutOfRangeError, match="too long"):
        binder.load([1, 2, 3])


def test_array_custom_set_element() -> None:
    stored: dict[int, Any] = {}

    def set_element(container: list[Any], i: int, value: Any) -> None:
        stored[i] = value
        container[i] = value

    binder = Array(sequence_size, _set_size, sequence_element, String(), set_element)
    binder.load(["a", "b"])
    assert stored == {0: "a", 1: "b"}


def test_array_save() -> None:
    binder = Array(sequence_size, _set_size, sequence_element, Integer(0, 10))
    assert binder.save((1, np.int16(2))) == [1, 2]
    assert binder.save([]) == []


@dataclass
class _Point:
    coords: list[int] = field(default_factory=list)
    name: str | None = None


def _point_binder(*, allow_extra_members: bool = False) -> Object[_Point]:
    coords = Array(sequence_size, _set_size, sequence_element, Integer(-10, 10))
    return Object(
        Member("coords", Projection("coords", coords)),
        Member("name", Projection("name", Optional(String()))),
        allow_extra_members=allow_extra_members,
    )


def test_object_load() -> None:
    point = _point_binder().load({"coords": [1, -2], "name": "p"}, _Point())
    assert point == _Point(coords=[1, -2], name="p")


def test_object_load_optional_member_absent() -> None:
    point = _point_binder().load({"coords": []}, _Point())
    assert point == _Point(coords=[], name=None)


def test_object_save_omits_discarded() -> None:
    assert _point_binder().save(_Point(coords=[3])) == {"coords": [3]}
    assert _point_binder().save(_Point(coords=[3], name="q")) == {"coords": [3], "name": "q"}


def test_object_load_not_an_object() -> None:
    with pytest.raises(JsonTypeMismatchError, match=re.escape("Expected object, but received: [1]")):
        _point_binder().load([1], _Point())


def test_object_load_missing_required_member() -> None:
    with pytest.raises(JsonTypeMismatchError) as exc_info:
        _point_binder().load({}, _Point())
    assert str(exc_info.value) == (
        'Error parsing object member "coords": Expected array, but received: <discarded>'
    )


def test_object_load_nested_error_context() -> None:
    with pytest.raises(OutOfRangeError) as exc_info:
        _point_binder().load({"coords": [1, 20]}, _Point())
    assert str(exc_info.value) == (
        'Error parsing object member "coords": Error parsing value at position 1: '
        "Expected integer in the range [-10, 10], but received: 20"
    )


def test_object_load_extra_members() -> None:
    with pytest.raises(UnexpectedMemberError, match="'extra'"):
        _point_binder().load({"coords": [], "extra": 1}, _Point())
    point = _point_binder(allow_extra_members=True).load({"coords": [], "extra": 1}, _Point())
    assert point.coords == []


def test_object_load_requires_target() -> None:
    with pytest.raises(TypeError):
        _point_binder().load({"coords": []})


def test_null_as_discarded() -> None:
    binder = NullAsDiscarded(Optional(String()))
    assert binder.load(None, "kept") == "kept"
    assert binder.load(DISCARDED, "kept") == "kept"
    assert binder.load("x", "kept") == "x"
    assert is_discarded(binder.save(None))
    assert binder.save("x") == "x"
