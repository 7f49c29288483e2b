"""
Generic binders that convert between JSON document values and Python objects.

These are the building blocks that the dimension-indexed binders and ``ArraySchema``
are composed from. Each binder is a ``JsonBinder`` with separate ``load`` and ``save``
operations.
"""

from __future__ import annotations

import numbers
import operator
from collections.abc import Callable, Mapping, MutableSequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

import numpy as np

from dimbind.abc.binder import JsonBinder
from dimbind.core.common import DISCARDED, dump_json, is_discarded
from dimbind.core.config import config
from dimbind.errors import (
    BaseBindingError,
    JsonTypeMismatchError,
    OutOfRangeError,
    UnexpectedMemberError,
)

if TYPE_CHECKING:
    from dimbind.core.common import JSON, DiscardedType

__all__ = [
    "Array",
    "Identity",
    "Integer",
    "Member",
    "NullAsDiscarded",
    "Object",
    "Optional",
    "Projection",
    "String",
]

T = TypeVar("T")
C = TypeVar("C")


class Identity(JsonBinder[Any]):
    """Pass document values through unchanged in both directions."""

    def load(self, data: JSON | DiscardedType, obj: Any = None) -> Any:
        return data

    def save(self, obj: Any) -> JSON | DiscardedType:
        return obj


@dataclass(frozen=True)
class Integer(JsonBinder[int]):
    """Bind an integer constrained to the closed interval ``[min_value, max_value]``."""

    min_value: int
    max_value: int

    def _out_of_range_message(self, data: object) -> str:
        return (
            f"Expected integer in the range [{self.min_value}, {self.max_value}], "
            f"but received: {dump_json(data)}"
        )

    def _parse(self, data: object) -> int | None:
        if isinstance(data, bool):
            return None
        if isinstance(data, numbers.Integral | np.integer):
            return int(data)
        if isinstance(data, float | np.floating):
            if np.isfinite(data) and float(data).is_integer():
                return int(data)
            return None
        if isinstance(data, str) and not config.get("json.strict_integers", True):
            try:
                return int(data.strip())
            except ValueError:
                return None
        return None

    def load(self, data: JSON | DiscardedType, obj: int | None = None) -> int:
        value = self._parse(data)
        if value is None:
            raise JsonTypeMismatchError(self._out_of_range_message(data))
        if not self.min_value <= value <= self.max_value:
            raise OutOfRangeError(self._out_of_range_message(data), value=value)
        return value

    def save(self, obj: int) -> JSON | DiscardedType:
        return int(obj)


class String(JsonBinder[str]):
    """Bind any string, including the empty string."""

    def load(self, data: JSON | DiscardedType, obj: str | None = None) -> str:
        if not isinstance(data, str):
            raise JsonTypeMismatchError("string", dump_json(data))
        return data

    def save(self, obj: str) -> JSON | DiscardedType:
        return str(obj)


class Array(JsonBinder[C]):
    """
    Bind a JSON array to a resizable container.

    The container is accessed only through the supplied callables:

    - ``get_size(container)`` returns the number of elements;
    - ``set_size(container, size)`` validates ``size`` and resizes the container, raising
      to reject the array;
    - ``get_element(container, i)`` returns the current element at ``i``;
    - ``set_element(container, i, value)`` stores an element, defaulting to item assignment.

    When loading into ``obj=None``, a new list is created.
    """

    def __init__(
        self,
        get_size: Callable[[C], int],
        set_size: Callable[[C, int], None],
        get_element: Callable[[C, int], Any],
        element_binder: JsonBinder[Any],
        set_element: Callable[[C, int, Any], None] = operator.setitem,
    ) -> None:
        self.get_size = get_size
        self.set_size = set_size
        self.get_element = get_element
        self.element_binder = element_binder
        self.set_element = set_element

    def load(self, data: JSON | DiscardedType, obj: C | None = None) -> C:
        if not isinstance(data, list | tuple):
            raise JsonTypeMismatchError("array", dump_json(data))
        container: Any = [] if obj is None else obj
        self.set_size(container, len(data))
        for i, item in enumerate(data):
            try:
                value = self.element_binder.load(item, self.get_element(container, i))
            except BaseBindingError as e:
                if isinstance(e, OutOfRangeError) and e.index is None:
                    e.index = i
                e.add_context(f"Error parsing value at position {i}")
                raise
            self.set_element(container, i, value)
        return container

    def save(self, obj: C) -> JSON | DiscardedType:
        out: list[JSON] = []
        for i in range(self.get_size(obj)):
            try:
                out.append(self.element_binder.save(self.get_element(obj, i)))
            except BaseBindingError as e:
                e.add_context(f"Error converting value at position {i}")
                raise
        return out


@dataclass(frozen=True)
class Projection(JsonBinder[Any]):
    """Bind the attribute ``attribute`` of an object with ``binder``."""

    attribute: str
    binder: JsonBinder[Any]

    def load(self, data: JSON | DiscardedType, obj: Any = None) -> Any:
        current = getattr(obj, self.attribute)
        setattr(obj, self.attribute, self.binder.load(data, current))
        return obj

    def save(self, obj: Any) -> JSON | DiscardedType:
        return self.binder.save(getattr(obj, self.attribute))


@dataclass(frozen=True)
class Optional(JsonBinder[Any]):
    """
    Treat a discarded document value as "leave the object unchanged", and an object of
    ``None`` as "omit the value".
    """

    binder: JsonBinder[Any]

    def load(self, data: JSON | DiscardedType, obj: Any = None) -> Any:
        if is_discarded(data):
            return obj
        return self.binder.load(data, obj)

    def save(self, obj: Any) -> JSON | DiscardedType:
        if obj is None:
            return DISCARDED
        return self.binder.save(obj)


@dataclass(frozen=True)
class NullAsDiscarded(JsonBinder[Any]):
    """Load a JSON ``null`` the same way as an absent value. Saving is unchanged."""

    binder: JsonBinder[Any]

    def load(self, data: JSON | DiscardedType, obj: Any = None) -> Any:
        return self.binder.load(DISCARDED if data is None else data, obj)

    def save(self, obj: Any) -> JSON | DiscardedType:
        return self.binder.save(obj)


@dataclass(frozen=True)
class Member:
    """A named member of a JSON object, bound with ``binder``."""

    name: str
    binder: JsonBinder[Any]


class Object(JsonBinder[T]):
    """
    Bind a JSON object to a Python object, member by member.

    Members are loaded in the order they are declared. A member that is absent from the
    document is passed to its binder as ``DISCARDED``, and a member whose binder saves
    ``DISCARDED`` is omitted from the output.
    """

    def __init__(self, *members: Member, allow_extra_members: bool = False) -> None:
        self.members = members
        self.allow_extra_members = allow_extra_members

    def load(self, data: JSON | DiscardedType, obj: T | None = None) -> T:
        if not isinstance(data, Mapping):
            raise JsonTypeMismatchError("object", dump_json(data))
        if obj is None:
            raise TypeError("Object binder requires an object to load into.")
        for member in self.members:
            try:
                member.binder.load(data.get(member.name, DISCARDED), obj)
            except BaseBindingError as e:
                e.add_context(f'Error parsing object member "{member.name}"')
                raise
        if not self.allow_extra_members:
            names = {member.name for member in self.members}
            extra = [key for key in data if key not in names]
            if extra:
                raise UnexpectedMemberError(extra)
        return obj

    def save(self, obj: T) -> JSON | DiscardedType:
        out: dict[str, JSON] = {}
        for member in self.members:
            try:
                value = member.binder.save(obj)
            except BaseBindingError as e:
                e.add_context(f'Error converting object member "{member.name}"')
                raise
            if not is_discarded(value):
                out[member.name] = value
        return out


def sequence_size(container: MutableSequence[Any]) -> int:
    return len(container)


def sequence_element(container: MutableSequence[Any], i: int) -> Any:
    return container[i]
