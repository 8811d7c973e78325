"""PitchResolver: maps a staff-line offset under a clef onto a concrete pitch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, Mapping

from scoreclick.notation import NoteName, accidental_offset

if TYPE_CHECKING:
    from scoreclick.accidentals import EffectiveAccidentals

logger = logging.getLogger(__name__)

#: Staff-line steps per octave (one step per note letter).
STEPS_PER_OCTAVE = 7

#: Octave of the note one step above the treble centre line (C5).
BASE_OCTAVE = 5

# ── Reference note table ─────────────────────────────────────────────────────
# (name, letter index above C, semitones above C, accidental)
NOTE_VALUES: Final[tuple[tuple[str, int, int, str | None], ...]] = (
    ("C", 0, 0, None), ("CN", 0, 0, "n"), ("C#", 0, 1, "#"), ("C##", 0, 2, "##"),
    ("CB", 0, -1, "b"), ("CBB", 0, -2, "bb"),
    ("D", 1, 2, None), ("DN", 1, 2, "n"), ("D#", 1, 3, "#"), ("D##", 1, 4, "##"),
    ("DB", 1, 1, "b"), ("DBB", 1, 0, "bb"),
    ("E", 2, 4, None), ("EN", 2, 4, "n"), ("E#", 2, 5, "#"), ("E##", 2, 6, "##"),
    ("EB", 2, 3, "b"), ("EBB", 2, 2, "bb"),
    ("F", 3, 5, None), ("FN", 3, 5, "n"), ("F#", 3, 6, "#"), ("F##", 3, 7, "##"),
    ("FB", 3, 4, "b"), ("FBB", 3, 3, "bb"),
    ("G", 4, 7, None), ("GN", 4, 7, "n"), ("G#", 4, 8, "#"), ("G##", 4, 9, "##"),
    ("GB", 4, 6, "b"), ("GBB", 4, 5, "bb"),
    ("A", 5, 9, None), ("AN", 5, 9, "n"), ("A#", 5, 10, "#"), ("A##", 5, 11, "##"),
    ("AB", 5, 8, "b"), ("ABB", 5, 7, "bb"),
    ("B", 6, 11, None), ("BN", 6, 11, "n"), ("B#", 6, 12, "#"), ("B##", 6, 13, "##"),
    ("BB", 6, 10, "b"), ("BBB", 6, 9, "bb"),
)

#: How far each clef's centre line is shifted from the treble centre line, in lines.
CLEF_LINE_SHIFTS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "treble": 0,
        "bass": 6,
        "tenor": 4,
        "alto": 3,
        "soprano": 1,
        "percussion": 0,
        "mezzo-soprano": 2,
        "baritone-c": 5,
        "baritone-f": 5,
        "subbass": 7,
        "french": -1,
    }
)


@dataclass(frozen=True)
class NoteEntry:
    """
    Attributes:
        semitone_val:    Semitones above C (Eb is 3, B# is 12).
        note_name:       Letter and accidental (natural spelled ``"n"``).
        note_letter_idx: Letter steps above C (E is 2).
    """

    semitone_val: int
    note_name: NoteName
    note_letter_idx: int

    def __str__(self) -> str:
        accidental = self.note_name.accidental
        return self.note_name.note_letter + ("" if accidental == "n" else accidental or "")


@dataclass(frozen=True)
class NoteLetterEntry:
    """All spellings of one note letter, keyed by accidental semitone offset."""

    note_letter: str
    entries: Mapping[int, NoteEntry]


#: Letter index above C -> spellings of that letter.
NoteMapping = Mapping[int, NoteLetterEntry]


@dataclass(frozen=True)
class NoteAndOctave:
    note: NoteEntry
    octave: int

    def __str__(self) -> str:
        return f"{self.note}{self.octave}"


def get_note_map() -> NoteMapping:
    """Build a read-only NoteMapping from the reference note table."""
    letters: dict[int, str] = {}
    entries: dict[int, dict[int, NoteEntry]] = {}
    for name, letter_idx, semitone_val, accidental in NOTE_VALUES:
        note_letter = name[0]
        letters.setdefault(letter_idx, note_letter)
        entries.setdefault(letter_idx, {})[accidental_offset(accidental)] = NoteEntry(
            semitone_val=semitone_val,
            note_name=NoteName(note_letter=note_letter, accidental=accidental or "n"),
            note_letter_idx=letter_idx,
        )

    return MappingProxyType(
        {
            idx: NoteLetterEntry(note_letter=letters[idx], entries=MappingProxyType(by_offset))
            for idx, by_offset in entries.items()
        }
    )


#: Process-wide NoteMapping, built once at import.
NOTE_MAPPING: Final[NoteMapping] = get_note_map()


def get_note_and_octave(
    note_map: NoteMapping,
    clef: str,
    center_line_offset: int,
    octave_shift: int = 0,
    effective_accidentals: EffectiveAccidentals | None = None,
) -> NoteAndOctave | None:
    """
    Determine the pitch at *center_line_offset* on a stave with *clef*.

    A click on the space above the centre line of a treble stave gives C5.
    Without *effective_accidentals* the note is natural; otherwise a
    measure override for the letter and octave wins over the key signature.

    Args:
        note_map:              Lookup of letter index -> spellings.
        clef:                  Clef name, e.g. ``"treble"`` or ``"bass"``.
        center_line_offset:    Half line-spaces above the centre line.
        octave_shift:          Octave shift of the clef (e.g. 1 for an 8vb clef).
        effective_accidentals: Key-signature and measure accidentals in force.

    Returns:
        The note and octave, or ``None`` if the clef or offset is unknown.
    """
    clef_line_shift = CLEF_LINE_SHIFTS.get(clef)
    if clef_line_shift is None:
        logger.debug("Unknown clef %r; no pitch resolved.", clef)
        return None

    line_shift_offset = center_line_offset - clef_line_shift * 2 - 1
    octave = BASE_OCTAVE - octave_shift
    while line_shift_offset < 0:
        line_shift_offset += STEPS_PER_OCTAVE
        octave -= 1
    while line_shift_offset >= STEPS_PER_OCTAVE:
        line_shift_offset -= STEPS_PER_OCTAVE
        octave += 1

    note_letter_entry = note_map.get(line_shift_offset)
    if note_letter_entry is None:
        return None

    note_letter = note_letter_entry.note_letter
    offset = 0
    if effective_accidentals is not None:
        accidental = effective_accidentals.accidental_overrides.get(f"{note_letter}{octave}")
        if not accidental:
            accidental = effective_accidentals.key_sig.get(note_letter)
        offset = accidental_offset(accidental)

    note = note_letter_entry.entries.get(offset)
    if note is None:
        return None
    return NoteAndOctave(note=note, octave=octave)
