"""ScoreMouseEvent: resolves a click on a rendered score into score semantics."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from scoreclick.accidentals import EffectiveAccidentals, get_accidentals
from scoreclick.geometry import center_line_offset
from scoreclick.hit_test import closest_measure, closest_stave, closest_tickable_result
from scoreclick.layout_models import Measure, Note, Point, Stave
from scoreclick.pitch_resolver import NOTE_MAPPING, NoteAndOctave, NoteMapping, get_note_and_octave
from scoreclick.timeline import TickableAndBeat

logger = logging.getLogger(__name__)

#: Clef assumed for rests on a stave that declares none.
DEFAULT_CLEF = "treble"


@dataclass(frozen=True)
class ScoreMouseEvent:
    """
    A mouse event within the context of a score.

    Every field except the mouse position may be ``None`` when the
    corresponding lookup found nothing.

    Attributes:
        accidentals:             Key-signature and measure accidentals in force.
        measure_idx:             Index of the closest measure.
        closest_measure:         The closest measure.
        closest_stave_idx:       Index of the closest stave within the measure.
        closest_stave:           The closest stave.
        closest_tickable:        Closest note event by bounding-box distance.
        closest_tickable_before: Closest note event starting at or before the click.
        center_line_offset:      Half line-spaces above the stave centre line
                                 (1 for the space above it, -2 for the line below).
        effective_pitch:         Pitch at the centre-line offset.
        mouse_x:                 Click x position.
        mouse_y:                 Click y position.
    """

    accidentals: EffectiveAccidentals | None
    measure_idx: int | None
    closest_measure: Measure | None
    closest_stave_idx: int | None
    closest_stave: Stave | None
    closest_tickable: TickableAndBeat | None
    closest_tickable_before: TickableAndBeat | None
    center_line_offset: int | None
    effective_pitch: NoteAndOctave | None
    mouse_x: float
    mouse_y: float

    def summary(self) -> dict[str, Any]:
        """JSON-ready view of the scalar fields of this event."""
        before = self.closest_tickable_before
        accidentals = None
        if self.accidentals is not None:
            accidentals = {
                "key_sig": dict(self.accidentals.key_sig),
                "accidental_overrides": dict(self.accidentals.accidental_overrides),
            }

        return {
            "measure_idx": self.measure_idx,
            "closest_stave_idx": self.closest_stave_idx,
            "center_line_offset": self.center_line_offset,
            "tickable_before_beat": str(before.beat) if before is not None else None,
            "effective_pitch": str(self.effective_pitch) if self.effective_pitch else None,
            "accidentals": accidentals,
            "mouse_x": self.mouse_x,
            "mouse_y": self.mouse_y,
        }


def _pitch_context(item: TickableAndBeat, stave: Stave) -> tuple[str, int]:
    """Clef and octave shift used to resolve a pitch near *item*."""
    tickable = item.tickable
    if isinstance(tickable, Note):
        return tickable.clef, tickable.octave_shift
    return stave.clef or DEFAULT_CLEF, 0


def get_score_mouse_event(
    measures: Sequence[Measure],
    pt: Point,
    note_map: NoteMapping | None = NOTE_MAPPING,
    fetch_accidentals: bool = True,
) -> ScoreMouseEvent:
    """
    Resolve a mouse point against the measures of a score.

    Args:
        measures:          The system measures of the score.
        pt:                The mouse point.
        note_map:          Note lookup table; ``None`` skips pitch resolution.
        fetch_accidentals: Whether to compute accidentals and the effective
                           pitch. This may search every earlier measure for a
                           key signature.

    Returns:
        A populated event; fields that could not be resolved are ``None``.
    """
    measure_idx: int | None = None
    measure: Measure | None = None
    stave_idx: int | None = None
    stave: Stave | None = None
    closest_tickable: TickableAndBeat | None = None
    closest_tickable_before: TickableAndBeat | None = None
    offset: int | None = None
    effective_pitch: NoteAndOctave | None = None
    accidentals: EffectiveAccidentals | None = None

    measure_result = closest_measure(measures, pt)
    if measure_result is not None:
        measure_idx, measure = measure_result.idx, measure_result.item

        stave_result = closest_stave(measure, pt)
        if stave_result is not None:
            stave_idx, stave = stave_result.idx, stave_result.item
            offset = center_line_offset(stave, pt)

            tickables = closest_tickable_result(measure.parts[stave_idx].voices, pt)
            closest_tickable = tickables.closest
            closest_tickable_before = tickables.closest_before

            if (
                fetch_accidentals
                and note_map
                and closest_tickable_before is not None
                and offset is not None
            ):
                accidentals = get_accidentals(
                    measures, stave_idx, measure_idx, closest_tickable_before.beat
                )
                clef, octave_shift = _pitch_context(closest_tickable_before, stave)
                effective_pitch = get_note_and_octave(
                    note_map, clef, offset, octave_shift, accidentals
                )

    logger.debug(
        "Click (%s, %s): measure=%s stave=%s offset=%s pitch=%s",
        pt.x,
        pt.y,
        measure_idx,
        stave_idx,
        offset,
        effective_pitch,
    )

    return ScoreMouseEvent(
        accidentals=accidentals,
        measure_idx=measure_idx,
        closest_measure=measure,
        closest_stave_idx=stave_idx,
        closest_stave=stave,
        closest_tickable=closest_tickable,
        closest_tickable_before=closest_tickable_before,
        center_line_offset=offset,
        effective_pitch=effective_pitch,
        mouse_x=pt.x,
        mouse_y=pt.y,
    )


class ScoreMouseLocator:
    """
    Resolves clicks against score layouts with a fixed configuration.

    Usage:

        locator = ScoreMouseLocator(fetch_accidentals=False)
        event = locator.locate(measures, Point(x=27, y=58))
    """

    def __init__(
        self,
        note_map: NoteMapping = NOTE_MAPPING,
        fetch_accidentals: bool = True,
    ) -> None:
        """
        Args:
            note_map:          Note lookup table shared by every query.
            fetch_accidentals: Whether to resolve accidentals and pitches.
        """
        if not note_map:
            raise ValueError("note_map must contain at least one note letter.")
        self.note_map = note_map
        self.fetch_accidentals = fetch_accidentals

    def locate(self, measures: Sequence[Measure], pt: Point) -> ScoreMouseEvent:
        return get_score_mouse_event(
            measures, pt, note_map=self.note_map, fetch_accidentals=self.fetch_accidentals
        )
