"""Resolve clicks on a rendered score into measures, notes and pitches."""

__version__ = "0.1.0"

from scoreclick.accidentals import EffectiveAccidentals, get_accidentals
from scoreclick.layout_models import (
    BoundingBox,
    Measure,
    Note,
    Point,
    Rest,
    Stave,
    StaveModifier,
    StavePart,
    Voice,
)
from scoreclick.pitch_resolver import NOTE_MAPPING, get_note_and_octave, get_note_map
from scoreclick.score_events import ScoreMouseEvent, ScoreMouseLocator, get_score_mouse_event

__all__ = [
    "BoundingBox",
    "EffectiveAccidentals",
    "Measure",
    "NOTE_MAPPING",
    "Note",
    "Point",
    "Rest",
    "ScoreMouseEvent",
    "ScoreMouseLocator",
    "Stave",
    "StaveModifier",
    "StavePart",
    "Voice",
    "get_accidentals",
    "get_note_and_octave",
    "get_note_map",
    "get_score_mouse_event",
]
