"""Hierarchical hit-testing: measure, then stave, then note event."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from scoreclick.geometry import ClosestMatch, get_closest, get_distance, stave_center_y
from scoreclick.layout_models import BoundingBox, Measure, Point, Stave, Voice
from scoreclick.timeline import TickableAndBeat, tickables_and_beats


@dataclass(frozen=True)
class TickableResult:
    """
    Attributes:
        closest:        Closest note event by distance to its bounding box.
        closest_before: Closest note event whose left edge is at or before
                        the click's x position.
    """

    closest: TickableAndBeat | None
    closest_before: TickableAndBeat | None


def _measure_distance(measure: Measure, point: Point) -> float | None:
    height = measure.height
    if measure.x is None or measure.y is None or measure.width is None or height is None:
        return None
    return get_distance(point, BoundingBox(x=measure.x, y=measure.y, w=measure.width, h=height))


def closest_measure(measures: Sequence[Measure], point: Point) -> ClosestMatch[Measure] | None:
    """Find the measure whose bounding box is closest to *point*."""
    return get_closest(measures, lambda measure: _measure_distance(measure, point))


def closest_stave(measure: Measure, point: Point) -> ClosestMatch[Stave] | None:
    """Find the stave of *measure* whose centre line is vertically closest to *point*."""

    def distance(stave: Stave) -> float | None:
        center_y = stave_center_y(stave)
        return abs(point.y - center_y) if center_y is not None else None

    return get_closest([part.stave for part in measure.parts], distance)


def closest_tickables(voice: Voice, x: float) -> list[TickableAndBeat]:
    """
    Return the note events just before and just after *x* in *voice*.

    Either may be missing, so the list holds zero, one or two items. When a
    note event spans *x* it is the only "before" item and no "after" item is
    looked for.
    """
    item_before: TickableAndBeat | None = None
    item_after: TickableAndBeat | None = None

    for tick_and_beat in tickables_and_beats(voice):
        box = tick_and_beat.tickable.bounding_box
        if box is None:
            continue

        if box.x > x:
            item_after = tick_and_beat
            break

        item_before = tick_and_beat
        if box.x + box.w > x:
            break

    return [item for item in (item_before, item_after) if item is not None]


def _tickable_distance(point: Point) -> Callable[[TickableAndBeat], float | None]:
    def distance(item: TickableAndBeat) -> float | None:
        box = item.tickable.bounding_box
        return get_distance(point, box) if box is not None else None

    return distance


def closest_tickable_result(voices: Sequence[Voice], point: Point) -> TickableResult:
    """Reduce the per-voice candidates around *point* to the closest note events."""
    candidates: list[TickableAndBeat] = []
    before_candidates: list[TickableAndBeat] = []

    for voice in voices:
        voice_items = closest_tickables(voice, point.x)
        candidates.extend(voice_items)
        if voice_items:
            first = voice_items[0]
            box = first.tickable.bounding_box
            if box is not None and box.x <= point.x:
                before_candidates.append(first)

    distance = _tickable_distance(point)
    closest = get_closest(candidates, distance)
    closest_before = get_closest(before_candidates, distance)

    return TickableResult(
        closest=closest.item if closest else None,
        closest_before=closest_before.item if closest_before else None,
    )
