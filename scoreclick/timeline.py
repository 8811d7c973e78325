"""Timeline: places each note event of a voice on an exact beat."""

import logging
from dataclasses import dataclass
from fractions import Fraction

from scoreclick.layout_models import NoteEvent, Voice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickableAndBeat:
    """
    A note event and the beats elapsed before it in its measure.

    Given a quarter and two eighths with a quarter-note resolution, the second
    eighth sits at beat 3/2.
    """

    tickable: NoteEvent
    beat: Fraction


def tickables_and_beats(voice: Voice) -> list[TickableAndBeat]:
    """
    Map every note event of *voice*, in order, to its starting beat.

    Beats are exact fractions of the voice resolution, so two positions
    reached through different duration sums compare equal.
    """
    if voice.resolution <= 0:
        logger.debug("Voice has resolution %s; every beat is 0.", voice.resolution)
        return [TickableAndBeat(tickable=t, beat=Fraction(0)) for t in voice.tickables]

    total = Fraction(0)
    items: list[TickableAndBeat] = []
    for tickable in voice.tickables:
        items.append(TickableAndBeat(tickable=tickable, beat=total))
        total += Fraction(tickable.ticks, voice.resolution)

    return items
