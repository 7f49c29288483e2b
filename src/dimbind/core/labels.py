from __future__ import annotations

from typing import TYPE_CHECKING

from dimbind.errors import DuplicateLabelError

if TYPE_CHECKING:
    from collections.abc import Iterable


def validate_labels_are_unique(labels: Iterable[str]) -> None:
    """
    Check that no non-empty label occurs twice. Empty labels mean "unlabeled" and may
    repeat freely.
    """
    seen: set[str] = set()
    for label in labels:
        if not label:
            continue
        if label in seen:
            raise DuplicateLabelError(label)
        seen.add(label)
