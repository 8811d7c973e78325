"""Unit tests for beat placement of note events."""

from fractions import Fraction

from scoreclick.layout_models import Note, Rest, Voice
from scoreclick.timeline import tickables_and_beats


def test_quarter_and_two_eighths() -> None:
    voice = Voice(
        resolution=4,
        tickables=(
            Note(ticks=4, keys=("c/5",)),
            Note(ticks=2, keys=("d/5",)),
            Note(ticks=2, keys=("e/5",)),
        ),
    )
    beats = [item.beat for item in tickables_and_beats(voice)]
    assert beats == [Fraction(0, 1), Fraction(1, 1), Fraction(3, 2)]


def test_beats_are_exact_for_thirds() -> None:
    voice = Voice(resolution=3, tickables=tuple(Rest(ticks=1) for _ in range(7)))
    items = tickables_and_beats(voice)
    assert items[3].beat == 1
    assert items[6].beat == 2
    assert all(isinstance(item.beat, Fraction) for item in items)


def test_different_duration_sums_compare_equal() -> None:
    eighths = Voice(resolution=8, tickables=(Rest(ticks=4), Rest(ticks=4), Rest(ticks=1)))
    half = Voice(resolution=8, tickables=(Rest(ticks=8), Rest(ticks=1)))
    assert tickables_and_beats(eighths)[2].beat == tickables_and_beats(half)[1].beat


def test_tickables_keep_order_and_identity() -> None:
    notes = (Note(ticks=4, keys=("c/5",)), Rest(ticks=4))
    items = tickables_and_beats(Voice(resolution=4, tickables=notes))
    assert [item.tickable for item in items] == list(notes)


def test_empty_voice() -> None:
    assert tickables_and_beats(Voice(resolution=4)) == []


def test_non_positive_resolution_places_everything_at_zero() -> None:
    voice = Voice(resolution=0, tickables=(Rest(ticks=4), Rest(ticks=4)))
    assert [item.beat for item in tickables_and_beats(voice)] == [0, 0]
