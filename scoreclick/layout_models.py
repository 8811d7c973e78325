"""Read-only views of the layout produced by the notation renderer."""

from dataclasses import dataclass

CLEF_CATEGORY = "clef"
KEY_SIGNATURE_CATEGORY = "keysignature"


@dataclass(frozen=True)
class Point:
    """A click location in the coordinate space of the rendered layout."""

    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class StaveModifier:
    """A clef, key signature or any other modifier attached to a stave."""

    category: str
    value: str = ""


@dataclass(frozen=True)
class Stave:
    """One staff within a measure."""

    center_y: float | None
    spacing_between_lines_px: float = 10
    num_lines: int = 5
    modifiers: tuple[StaveModifier, ...] = ()

    def _first_modifier(self, category: str) -> str | None:
        for modifier in self.modifiers:
            if modifier.category == category:
                return modifier.value
        return None

    @property
    def clef(self) -> str | None:
        return self._first_modifier(CLEF_CATEGORY)

    @property
    def key_signature(self) -> str | None:
        return self._first_modifier(KEY_SIGNATURE_CATEGORY)


@dataclass(frozen=True)
class Rest:
    """A rest: it occupies time but carries no pitch data."""

    ticks: int
    bounding_box: BoundingBox | None = None


@dataclass(frozen=True)
class Note:
    """
    A single note or chord.

    ``keys`` are ``"<letter><accidental?>/<octave>"`` strings (``"c#/5"``).
    ``accidentals[i]`` is the accidental modifier drawn next to ``keys[i]``.
    """

    ticks: int
    keys: tuple[str, ...]
    accidentals: tuple[str | None, ...] = ()
    bounding_box: BoundingBox | None = None
    clef: str = "treble"
    octave_shift: int = 0

    def accidental_at(self, index: int) -> str | None:
        if index < len(self.accidentals):
            return self.accidentals[index]
        return None


NoteEvent = Note | Rest


@dataclass(frozen=True)
class Voice:
    """An ordered line of note events; ``resolution`` is ticks per beat."""

    resolution: int
    tickables: tuple[NoteEvent, ...] = ()


@dataclass(frozen=True)
class StavePart:
    """A stave together with the voices drawn on it."""

    stave: Stave
    voices: tuple[Voice, ...] = ()


@dataclass(frozen=True)
class Measure:
    """A system measure: staves sharing one x position and width."""

    x: float | None
    y: float | None
    width: float | None
    last_y: float | None
    parts: tuple[StavePart, ...] = ()

    @property
    def height(self) -> float | None:
        """Vertical extent from ``y`` to the computed bottom, if positive."""
        if self.y is None or self.last_y is None:
            return None
        height = self.last_y - self.y
        return height if height > 0 else None
