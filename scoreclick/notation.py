"""Note-name parsing, accidental offsets and key-signature tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

logger = logging.getLogger(__name__)

NOTE_LETTERS: Final[tuple[str, ...]] = ("C", "D", "E", "F", "G", "A", "B")

#: Semitone difference from the natural note for each accidental token.
ACCIDENTAL_OFFSETS: Final[Mapping[str, int]] = MappingProxyType(
    {"bb": -2, "b": -1, "n": 0, "#": 1, "##": 2}
)

#: Letter -> accidental implied by a key signature, e.g. ``{"B": "b", "E": "b"}``.
KeySigAccidentals = Mapping[str, str]


@dataclass(frozen=True)
class NoteName:
    """A note letter and its accidental, without an octave (e.g. ``Bb``)."""

    note_letter: str
    accidental: str | None = None

    def __str__(self) -> str:
        return format_note(self)


@dataclass(frozen=True)
class ParsedKey:
    """A pitch key such as ``"c#/5"`` split into note name and octave."""

    note: NoteName
    octave: int


def accidental_offset(accidental: str | None) -> int:
    """
    Semitone offset of *accidental* from natural (double sharp is 2, flat -1).

    ``None`` and unknown tokens count as natural.
    """
    if not accidental:
        return 0
    return ACCIDENTAL_OFFSETS.get(accidental.lower(), 0)


def parse_note(note_str: str) -> NoteName | None:
    """
    Parse a note name such as ``"C#"`` or ``"bb"``.

    >>> parse_note("Eb")
    NoteName(note_letter='E', accidental='b')
    >>> parse_note("H") is None
    True
    """
    trimmed = note_str.strip()
    if not trimmed:
        return None

    note_letter = trimmed[0].upper()
    if note_letter not in NOTE_LETTERS:
        logger.debug("Unparseable note letter in %r.", note_str)
        return None

    accidental = trimmed[1:] or None
    if accidental is not None and accidental not in ACCIDENTAL_OFFSETS:
        logger.debug("Unparseable accidental in %r.", note_str)
        return None

    return NoteName(note_letter=note_letter, accidental=accidental)


def format_note(note: NoteName) -> str:
    return note.note_letter + (note.accidental or "")


def parse_note_and_octave(key: str) -> ParsedKey | None:
    """
    Parse a pitch key of the form ``"<note>/<octave>"``.

    >>> parse_note_and_octave("c#/5")
    ParsedKey(note=NoteName(note_letter='C', accidental='#'), octave=5)
    >>> parse_note_and_octave("c#5") is None
    True
    """
    pieces = key.split("/")
    if len(pieces) != 2:
        logger.debug("Pitch key %r is not of the form <note>/<octave>.", key)
        return None

    note = parse_note(pieces[0])
    try:
        octave = int(pieces[1].strip())
    except ValueError:
        logger.debug("Unparseable octave in pitch key %r.", key)
        return None

    if note is None:
        return None
    return ParsedKey(note=note, octave=octave)


# ── Key signatures ───────────────────────────────────────────────────────────

#: Accidentals for each key signature, in the order they are drawn.
KEY_SIGNATURE_ACCIDENTALS: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "C": (),
        "G": ("F#",),
        "D": ("F#", "C#"),
        "A": ("F#", "C#", "G#"),
        "E": ("F#", "C#", "G#", "D#"),
        "B": ("F#", "C#", "G#", "D#", "A#"),
        "F#": ("F#", "C#", "G#", "D#", "A#", "E#"),
        "C#": ("F#", "C#", "G#", "D#", "A#", "E#", "B#"),
        "F": ("Bb",),
        "Bb": ("Bb", "Eb"),
        "Eb": ("Bb", "Eb", "Ab"),
        "Ab": ("Bb", "Eb", "Ab", "Db"),
        "Db": ("Bb", "Eb", "Ab", "Db", "Gb"),
        "Gb": ("Bb", "Eb", "Ab", "Db", "Gb", "Cb"),
        "Cb": ("Bb", "Eb", "Ab", "Db", "Gb", "Cb", "Fb"),
    }
)


def _build_key_signature_map(
    key_sigs: Mapping[str, tuple[str, ...]],
) -> Mapping[str, KeySigAccidentals]:
    """Expand key names into read-only letter -> accidental maps."""
    result: dict[str, KeySigAccidentals] = {}
    for key_str, accidental_strs in key_sigs.items():
        key_note = parse_note(key_str)
        if key_note is None:
            continue

        accidentals: dict[str, str] = {}
        for accidental_str in accidental_strs:
            accidental_note = parse_note(accidental_str)
            if accidental_note is not None and accidental_note.accidental:
                accidentals[accidental_note.note_letter] = accidental_note.accidental

        result[format_note(key_note)] = MappingProxyType(accidentals)

    return MappingProxyType(result)


KEY_SIGNATURE_MAP: Final[Mapping[str, KeySigAccidentals]] = _build_key_signature_map(
    KEY_SIGNATURE_ACCIDENTALS
)


def key_signature_accidentals(key_name: str) -> KeySigAccidentals | None:
    """
    Letter -> accidental map for the key signature named *key_name*.

    Returns ``None`` if the name cannot be parsed or is not a known key.
    """
    key_note = parse_note(key_name)
    if key_note is None:
        return None
    accidentals = KEY_SIGNATURE_MAP.get(format_note(key_note))
    if accidentals is None:
        logger.debug("Unknown key signature %r.", key_name)
    return accidentals
