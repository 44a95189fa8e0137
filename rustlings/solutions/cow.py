"""Copy-on-write absolute values: immutable input is copied only when a change is needed."""

from __future__ import annotations

from collections.abc import Sequence


def abs_all(values: Sequence[int]) -> Sequence[int]:
    """Make every element non-negative.

    A list is owned and changed in place. Any other sequence is treated as
    borrowed: it is returned as it is when nothing needs changing, and copied
    into a new list otherwise.
    """
    if isinstance(values, list):
        for index, value in enumerate(values):
            if value < 0:
                values[index] = -value
        return values
    if all(value >= 0 for value in values):
        return values
    return [abs(value) for value in values]