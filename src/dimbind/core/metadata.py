from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NotRequired, TypedDict

from typing_extensions import ReadOnly

from dimbind.core.config import config
from dimbind.core.dimension_indexed import (
    chunk_shape_vector,
    dimension_label_vector,
    shape_vector,
)
from dimbind.core.json_binding import Member, NullAsDiscarded, Object, Optional, Projection
from dimbind.core.rank import RankCell

if TYPE_CHECKING:
    from typing import Self

    from dimbind.core.common import JSON

__all__ = ["ArraySchema", "ArraySchemaJSON"]

_logger = logging.getLogger(__name__)


class ArraySchemaJSON(TypedDict):
    """
    A typed dictionary model for the array schema document.
    """

    shape: ReadOnly[list[int]]
    chunk_shape: NotRequired[ReadOnly[list[int]]]
    dimension_names: NotRequired[ReadOnly[list[str]]]


@dataclass
class ArraySchema:
    """
    The shape, chunk shape and dimension names of an N-dimensional array.

    All three are indexed by dimension and share one rank. ``shape`` is bound first, so
    it fixes the rank that the other fields are checked against. ``chunk_shape`` is
    ``None`` when unspecified, and unspecified dimension names are empty strings.

    Loading is not transactional: if ``binder(rank).load`` raises, the target object
    may already be partially populated and should be discarded.
    """

    shape: list[int] = field(default_factory=list)
    chunk_shape: list[int] | None = None
    dimension_names: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.dimension_names:
            self.dimension_names = [""] * self.ndim
        if self.chunk_shape is not None and len(self.chunk_shape) != self.ndim:
            raise ValueError(
                "`chunk_shape` and `shape` need to have the same number of dimensions."
            )
        if len(self.dimension_names) != self.ndim:
            raise ValueError(
                "`dimension_names` and `shape` need to have the same number of dimensions."
            )

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @staticmethod
    def binder(rank: RankCell) -> Object[ArraySchema]:
        return Object(
            Member("shape", Projection("shape", shape_vector(rank))),
            Member("chunk_shape", Projection("chunk_shape", Optional(chunk_shape_vector(rank)))),
            Member(
                "dimension_names",
                Projection("dimension_names", NullAsDiscarded(dimension_label_vector(rank))),
            ),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, JSON]) -> Self:
        """
        Create an instance of the model from a dictionary
        """
        rank = RankCell()
        out = cls.binder(rank).load(data, cls())
        _logger.debug("Loaded array schema with rank %d", rank.value)
        return out

    def to_dict(self) -> dict[str, JSON]:
        out = self.binder(RankCell()).save(self)
        assert isinstance(out, dict)
        return out

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        return cls.from_dict(json.loads(text))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=config.get("json_indent"))
