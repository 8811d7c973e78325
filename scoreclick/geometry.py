"""Closest-match search and point-to-rectangle distance helpers."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from scoreclick.layout_models import BoundingBox, Point, Stave

T = TypeVar("T")


@dataclass(frozen=True)
class ClosestMatch(Generic[T]):
    """The closest item of a sequence together with its index."""

    idx: int
    item: T


def get_closest(
    iterable: Sequence[T],
    distance_fn: Callable[[T], float | None],
) -> ClosestMatch[T] | None:
    """
    Return the item with the smallest distance as assigned by *distance_fn*.

    Items for which *distance_fn* returns ``None`` are skipped. The first item
    whose distance is ``<= 0`` is returned immediately, so when several items
    contain the point the earliest one in iteration order wins. Among equal
    positive distances the earliest item is kept.

    Returns:
        The closest match, or ``None`` if nothing could be measured.
    """
    closest: ClosestMatch[T] | None = None
    distance: float | None = None
    for idx, item in enumerate(iterable):
        this_distance = distance_fn(item)
        if this_distance is None:
            continue
        if this_distance <= 0:
            return ClosestMatch(idx=idx, item=item)
        if distance is None or this_distance < distance:
            closest = ClosestMatch(idx=idx, item=item)
            distance = this_distance

    return closest


def abs_outside_range(num: float, min_val: float, max_val: float) -> float:
    """
    Distance from *num* to the range ``[min_val, max_val]``; 0 inside it.

    >>> abs_outside_range(2, 1, 3), abs_outside_range(0, 1, 3), abs_outside_range(4, 1, 3)
    (0, 1, 1)
    """
    if num < min_val:
        return min_val - num
    if num > max_val:
        return num - max_val
    return 0


def get_distance(point: Point, bounding_box: BoundingBox) -> float:
    """Distance from *point* to the nearest edge of *bounding_box*, 0 if within."""
    x_diff = abs_outside_range(point.x, bounding_box.x, bounding_box.x + bounding_box.w)
    y_diff = abs_outside_range(point.y, bounding_box.y, bounding_box.y + bounding_box.h)
    return math.hypot(x_diff, y_diff)


def stave_center_y(stave: Stave) -> float | None:
    return stave.center_y


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def center_line_offset(stave: Stave, point: Point) -> int | None:
    """
    Offset of *point* from the stave's centre line in half line-spaces.

    The space just above the centre line is 1, the line below it is -2.
    Returns ``None`` when the stave has no usable geometry.
    """
    center_y = stave_center_y(stave)
    spacing = stave.spacing_between_lines_px
    if center_y is None or spacing <= 0:
        return None
    return _round_half_up((center_y - point.y) / (spacing / 2))
