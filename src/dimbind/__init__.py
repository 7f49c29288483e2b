from dimbind.core.common import DISCARDED, is_discarded
from dimbind.core.config import config
from dimbind.core.dimension_indexed import (
    chunk_shape_vector,
    dimension_indexed_vector,
    dimension_label_vector,
    shape_vector,
)
from dimbind.core.metadata import ArraySchema
from dimbind.core.rank import DYNAMIC_RANK, INF_SIZE, MAX_RANK, RankCell

__all__ = [
    "DISCARDED",
    "DYNAMIC_RANK",
    "INF_SIZE",
    "MAX_RANK",
    "ArraySchema",
    "RankCell",
    "chunk_shape_vector",
    "config",
    "dimension_indexed_vector",
    "dimension_label_vector",
    "is_discarded",
    "shape_vector",
]
