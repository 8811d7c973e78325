"""AccidentalTracker: key-signature and in-measure accidentals at a beat."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from fractions import Fraction
from types import MappingProxyType

from scoreclick.layout_models import Measure, Note, Voice
from scoreclick.notation import KeySigAccidentals, key_signature_accidentals, parse_note_and_octave
from scoreclick.timeline import tickables_and_beats

logger = logging.getLogger(__name__)

#: ``"<letter><octave>"`` (e.g. ``"C5"``) -> accidental set earlier in the measure.
AccidentalOverrides = Mapping[str, str]


@dataclass(frozen=True)
class EffectiveAccidentals:
    """
    Accidentals in force at one point of one measure.

    Attributes:
        key_sig:              Letter -> accidental from the active key signature.
        accidental_overrides: Letter+octave -> accidental from earlier notes in
                              the measure, which win over the key signature.
    """

    key_sig: KeySigAccidentals = field(default_factory=lambda: MappingProxyType({}))
    accidental_overrides: AccidentalOverrides = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class _KeyAccidental:
    name: str
    accidental: str
    beat: Fraction


def _note_key_accidentals(voices: Iterable[Voice]) -> list[_KeyAccidental]:
    """Every key carrying an accidental in *voices*, with its beat."""
    found: list[_KeyAccidental] = []
    for voice in voices:
        for item in tickables_and_beats(voice):
            note = item.tickable
            if not isinstance(note, Note):
                continue

            for idx, key in enumerate(note.keys):
                parsed = parse_note_and_octave(key)
                if parsed is None:
                    continue
                accidental = parsed.note.accidental or note.accidental_at(idx)
                if not accidental:
                    continue
                found.append(
                    _KeyAccidental(
                        name=f"{parsed.note.note_letter}{parsed.octave}",
                        accidental=accidental,
                        beat=item.beat,
                    )
                )
    return found


def voices_accidentals(voices: Iterable[Voice], stop_beat: Fraction) -> AccidentalOverrides:
    """
    Accidentals set in *voices* from the start of the measure up to *stop_beat*.

    Notes are replayed in beat order so that a later accidental on the same
    letter and octave replaces an earlier one.
    """
    in_range = [entry for entry in _note_key_accidentals(voices) if entry.beat <= stop_beat]
    in_range.sort(key=lambda entry: entry.beat)

    overrides: dict[str, str] = {}
    for entry in in_range:
        overrides[entry.name] = entry.accidental
    return MappingProxyType(overrides)


def _find_key_signature(
    measures: Sequence[Measure], stave_idx: int, measure_idx: int
) -> KeySigAccidentals | None:
    """Walk back from *measure_idx* to the nearest key signature on the stave."""
    for idx in range(measure_idx, -1, -1):
        parts = measures[idx].parts
        if stave_idx >= len(parts):
            continue
        key_name = parts[stave_idx].stave.key_signature
        if key_name is not None:
            logger.debug("Key signature %r found in measure %d.", key_name, idx)
            return key_signature_accidentals(key_name)
    return None


def get_accidentals(
    measures: Sequence[Measure],
    stave_idx: int,
    measure_idx: int,
    measure_beat: Fraction,
) -> EffectiveAccidentals:
    """
    Get the accidentals for one stave of one measure at *measure_beat*.

    Args:
        measures:     All measures of the score.
        stave_idx:    Index of the stave within each measure.
        measure_idx:  Index of the measure being queried.
        measure_beat: Accidentals from notes after this beat are ignored.

    Returns:
        The key-signature accidentals and the measure overrides; both are
        empty when nothing applies.
    """
    if not 0 <= measure_idx < len(measures):
        return EffectiveAccidentals()

    key_sig = _find_key_signature(measures, stave_idx, measure_idx)

    overrides: AccidentalOverrides | None = None
    parts = measures[measure_idx].parts
    if stave_idx < len(parts):
        overrides = voices_accidentals(parts[stave_idx].voices, measure_beat)

    return EffectiveAccidentals(
        key_sig=key_sig if key_sig is not None else MappingProxyType({}),
        accidental_overrides=overrides if overrides is not None else MappingProxyType({}),
    )
