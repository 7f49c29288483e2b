from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Final, Literal, TypeVar

if TYPE_CHECKING:
    from collections.abc import MutableSequence
    from typing import TypeGuard

# Upper bound on the number of dimensions of any array.
MAX_RANK: Final = 32

JSON = str | int | float | Mapping[str, "JSON"] | Sequence["JSON"] | None

T = TypeVar("T")


class Discarded(Enum):
    """
    Marker for a document value that is absent, e.g. an object member that was not
    specified. This is distinct from both ``None`` (JSON ``null``) and an empty array.
    """

    DISCARDED = "discarded"

    def __repr__(self) -> str:
        return "<discarded>"


DISCARDED: Final = Discarded.DISCARDED
DiscardedType = Literal[Discarded.DISCARDED]


def is_discarded(data: object) -> TypeGuard[DiscardedType]:
    return data is DISCARDED


def dump_json(data: object) -> str:
    """Render a document value for use in an error message."""
    if is_discarded(data):
        return repr(data)
    try:
        return json.dumps(data)
    except (TypeError, ValueError):
        return repr(data)


def resize(container: MutableSequence[T], size: int, fill: T) -> None:
    """Truncate ``container`` to ``size`` elements, or pad it with ``fill``, in place."""
    current = len(container)
    if size < current:
        del container[size:]
    elif size > current:
        container.extend([fill] * (size - current))
