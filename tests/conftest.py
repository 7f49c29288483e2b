from __future__ import annotations

import pytest

from dimbind.core.rank import RankCell


@pytest.fixture
def rank() -> RankCell:
    return RankCell()
