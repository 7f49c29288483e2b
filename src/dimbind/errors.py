from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self

__all__ = [
    "BaseBindingError",
    "DuplicateLabelError",
    "JsonTypeMismatchError",
    "LengthMismatchError",
    "OutOfRangeError",
    "UnexpectedMemberError",
]


class BaseBindingError(ValueError):
    """
    Base error which all dimbind errors are sub-classed from.

    Binders that delegate to a nested binder prepend a location to ``context`` as the
    error propagates outwards, so the rendered message reads from the outermost
    location to the original failure.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for a template string class
        variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))
        self.context: list[str] = []

    def add_context(self, location: str) -> Self:
        self.context.insert(0, location)
        return self

    def __str__(self) -> str:
        return ": ".join([*self.context, super().__str__()])


class JsonTypeMismatchError(BaseBindingError, TypeError):
    """
    Raised when a document value does not have the JSON type a binder requires,
    for example a number where an array was expected.
    """

    _msg = "Expected {}, but received: {}"


class OutOfRangeError(BaseBindingError):
    """
    Raised when an array length exceeds the maximum rank, or when an element value lies
    outside the bounds of its binder.

    ``index`` is filled in by the enclosing array binder when the offending value is an
    array element.
    """

    def __init__(self, *args: object, value: object = None, index: int | None = None) -> None:
        super().__init__(*args)
        self.value = value
        self.index = index


class LengthMismatchError(BaseBindingError):
    """Raised when an array length disagrees with an already fixed rank."""

    _msg = "Array has length {1} but should have length {0}"

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(expected, actual)
        self.expected = expected
        self.actual = actual

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.expected, self.actual), self.__dict__


class DuplicateLabelError(BaseBindingError):
    """Raised when a non-empty dimension label occurs more than once."""

    _msg = "Dimension label {!r} not unique"

    def __init__(self, label: str) -> None:
        super().__init__(self._msg.format(label))
        self.label = label

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.label,), self.__dict__


class UnexpectedMemberError(BaseBindingError):
    """Raised when a JSON object has members that no binder consumed."""

    _msg = "Object includes extra members: {}"

    def __init__(self, members: Iterable[str]) -> None:
        self.members = tuple(members)
        super().__init__(self._msg.format(", ".join(repr(m) for m in self.members)))

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.members,), self.__dict__
