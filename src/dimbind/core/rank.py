from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

import numpy as np

from dimbind.core.common import MAX_RANK
from dimbind.core.config import config, parse_max_rank
from dimbind.errors import LengthMismatchError, OutOfRangeError

_logger = logging.getLogger(__name__)

DYNAMIC_RANK: Final = -1
INF_SIZE: Final = int(np.iinfo(np.int64).max)


def get_max_rank() -> int:
    return parse_max_rank(config.get("max_rank", MAX_RANK))


def validate_rank(size: int) -> None:
    max_rank = get_max_rank()
    if not 0 <= size <= max_rank:
        msg = f"Rank {size} is outside valid range [0, {max_rank}]"
        raise OutOfRangeError(msg, value=size)


def validate_array_length(size: int, expected: int) -> None:
    if size != expected:
        raise LengthMismatchError(expected, size)


@dataclass
class RankCell:
    """
    The rank shared by all dimension-indexed fields of one binding pass.

    A cell starts out as ``DYNAMIC_RANK``. The first dimension-indexed array loaded
    against it fixes its value, and every later array loaded against it must have that
    length. Which field fixes the rank therefore depends on the order in which the
    caller binds fields, so a field whose length is authoritative (normally the shape)
    should come first.

    A cell belongs to a single pass and must not be shared between passes, including
    concurrent ones.
    """

    value: int = DYNAMIC_RANK

    def __post_init__(self) -> None:
        if self.value != DYNAMIC_RANK:
            validate_rank(self.value)

    @property
    def is_dynamic(self) -> bool:
        return self.value == DYNAMIC_RANK

    def constrain(self, size: int) -> None:
        if self.is_dynamic:
            validate_rank(size)
            _logger.debug("Rank fixed to %d", size)
            self.value = size
        else:
            validate_array_length(size, self.value)
