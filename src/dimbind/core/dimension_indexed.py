"""
Binders for arrays indexed by dimension, i.e. arrays whose length is the rank of the
array they describe.

All binders accept an optional ``RankCell`` that is shared by the fields of one binding
pass:

```python
rank = RankCell()
schema = Object(
    Member("shape", Projection("shape", shape_vector(rank))),
    Member("chunk_shape", Projection("chunk_shape", chunk_shape_vector(rank))),
)
```

The cell is ignored when saving. When loading, if the cell is still dynamic it is set
to the length of the first array loaded; every later array must have that length.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dimbind.abc.binder import JsonBinder
from dimbind.core.common import DISCARDED, is_discarded, resize
from dimbind.core.json_binding import (
    Array,
    Identity,
    Integer,
    String,
    sequence_element,
    sequence_size,
)
from dimbind.core.labels import validate_labels_are_unique
from dimbind.core.rank import INF_SIZE, validate_rank

if TYPE_CHECKING:
    from collections.abc import MutableSequence

    from dimbind.core.common import JSON, DiscardedType
    from dimbind.core.rank import RankCell

__all__ = [
    "chunk_shape_vector",
    "dimension_indexed_vector",
    "dimension_label_vector",
    "shape_vector",
]


def dimension_indexed_vector(
    rank: RankCell | None, element_binder: JsonBinder[Any] | None = None
) -> Array[MutableSequence[Any]]:
    """
    JSON binder for an array whose length is limited by the maximum rank and, if ``rank``
    is given, unified with the other dimension-indexed arrays of the same pass.

    Parameters
    ----------
    rank : RankCell | None
        Common rank constraint. Ignored when saving.
    element_binder : JsonBinder | None
        Binder used for the elements of the array. Elements are passed through unchanged
        if omitted.
    """

    def set_size(container: MutableSequence[Any], size: int) -> None:
        validate_rank(size)
        if rank is not None:
            rank.constrain(size)
        resize(container, size, None)

    return Array(
        sequence_size,
        set_size,
        sequence_element,
        Identity() if element_binder is None else element_binder,
    )


def shape_vector(
    rank: RankCell | None, max_size: int = INF_SIZE - 1
) -> Array[MutableSequence[int]]:
    """
    JSON binder for a dimension-indexed shape array. Each element must be an integer in
    ``[0, max_size]``.
    """
    return dimension_indexed_vector(rank, Integer(0, max_size))


def chunk_shape_vector(
    rank: RankCell | None, max_size: int = INF_SIZE - 1
) -> Array[MutableSequence[int]]:
    """
    JSON binder for a dimension-indexed chunk shape array. Each element must be an
    integer in ``[1, max_size]``.
    """
    return dimension_indexed_vector(rank, Integer(1, max_size))


class _DimensionLabelVector(JsonBinder["MutableSequence[str]"]):
    def __init__(self, rank: RankCell | None) -> None:
        self.rank = rank

    def load(
        self, data: JSON | DiscardedType, obj: MutableSequence[str] | None = None
    ) -> MutableSequence[str]:
        labels: MutableSequence[str] = [] if obj is None else obj
        if self.rank is not None and not self.rank.is_dynamic and is_discarded(data):
            labels.clear()
            resize(labels, self.rank.value, "")
        else:
            dimension_indexed_vector(self.rank, String()).load(data, labels)
        validate_labels_are_unique(labels)
        return labels

    def save(self, obj: MutableSequence[str]) -> JSON | DiscardedType:
        if all(not label for label in obj):
            return DISCARDED
        return dimension_indexed_vector(None, String()).save(obj)


def dimension_label_vector(rank: RankCell | None) -> JsonBinder[MutableSequence[str]]:
    """
    JSON binder for a dimension-indexed label array, where each element is either empty
    or a non-empty string that is unique within the array.

    When loading, if ``rank`` is given and already fixed, the document value may be
    discarded, in which case the labels are set to ``rank`` empty strings.

    When saving, if all labels are empty, ``DISCARDED`` is returned so that the
    enclosing object omits the member.
    """
    return _DimensionLabelVector(rank)
