from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from dimbind.core.common import JSON, DiscardedType

__all__ = ["JsonBinder"]

T = TypeVar("T")


class JsonBinder(ABC, Generic[T]):
    """
    A bidirectional conversion between a JSON document value and a Python object.

    The two directions are separate operations with their own contracts. ``load``
    validates a document value and is the only direction that reports malformed input.
    ``save`` renders an in-memory value that is assumed to be valid already.
    """

    @abstractmethod
    def load(self, data: JSON | DiscardedType, obj: T | None = None) -> T:
        """
        Convert ``data`` into a Python object.

        Binders for mutable containers populate ``obj`` in place when it is given and
        create a new container when it is ``None``. Binders for immutable values ignore
        ``obj``. Either way, the loaded object is returned.
        """
        ...

    @abstractmethod
    def save(self, obj: T) -> JSON | DiscardedType:
        """
        Convert ``obj`` into a document value. Returning ``DISCARDED`` means the value
        should be omitted from the enclosing document.
        """
        ...
