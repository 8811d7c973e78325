"""scoreclick CLI entry point."""

import json
import logging
import sys
from types import MappingProxyType

import click

from scoreclick import __version__
from scoreclick.accidentals import EffectiveAccidentals
from scoreclick.layout_loader import load_layout
from scoreclick.layout_models import Point
from scoreclick.notation import key_signature_accidentals
from scoreclick.pitch_resolver import CLEF_LINE_SHIFTS, NOTE_MAPPING, get_note_and_octave
from scoreclick.score_events import ScoreMouseLocator

_SUMMARY_LABELS: list[tuple[str, str]] = [
    ("accidentals", "Accidentals"),
    ("center_line_offset", "Centerline Offset"),
    ("closest_stave_idx", "Closest Stave Index"),
    ("tickable_before_beat", "Tickable Before Beat"),
    ("effective_pitch", "Effective Pitch"),
    ("measure_idx", "Measure Index"),
    ("mouse_x", "Mouse X"),
    ("mouse_y", "Mouse Y"),
]


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(format="%(levelname)s: %(message)s", level=level)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="scoreclick")
@click.option("--verbose", "-v", is_flag=True, help="Log lookup details to stderr.")
def main(verbose: bool) -> None:
    """scoreclick — resolve clicks on a rendered score into notes and pitches."""
    _configure_logging(verbose)


# ── locate subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("layout_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.option(
    "--no-accidentals",
    is_flag=True,
    help="Skip key-signature and accidental lookup (no effective pitch).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Print a labelled summary or a JSON object.",
)
def locate(layout_file: str, x: float, y: float, no_accidentals: bool, output_format: str) -> None:
    """
    Resolve the click at (X, Y) against a JSON layout file.

    \b
    Examples:
      scoreclick locate minuet.json 27 58
      scoreclick locate minuet.json 140 95 --format json
    """
    try:
        measures = load_layout(layout_file)
    except OSError as exc:
        click.echo(f"  ERROR: Could not read layout file — {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"  ERROR: Invalid layout — {exc}", err=True)
        sys.exit(1)

    locator = ScoreMouseLocator(fetch_accidentals=not no_accidentals)
    summary = locator.locate(measures, Point(x=x, y=y)).summary()

    if output_format.lower() == "json":
        click.echo(json.dumps(summary))
        return

    for key, label in _SUMMARY_LABELS:
        value = summary[key]
        if isinstance(value, dict):
            value = json.dumps(value)
        click.echo(f"{label}: {'' if value is None else value}")


# ── pitch subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("clef", type=click.Choice(sorted(CLEF_LINE_SHIFTS)))
@click.argument("offset", type=int)
@click.option(
    "--octave-shift",
    type=int,
    default=0,
    show_default=True,
    help="Octave shift of the clef (1 for a clef sounding an octave lower).",
)
@click.option("--key", default=None, metavar="KEY", help="Key signature, e.g. Bb or F#.")
def pitch(clef: str, offset: int, octave_shift: int, key: str | None) -> None:
    """
    Print the pitch at OFFSET half line-spaces above the centre line of CLEF.

    \b
    Examples:
      scoreclick pitch treble 1
      scoreclick pitch --key Bb bass -- -3
    """
    accidentals = None
    if key is not None:
        key_sig = key_signature_accidentals(key)
        if key_sig is None:
            click.echo(f"  ERROR: Unknown key signature '{key}'.", err=True)
            sys.exit(1)
        accidentals = EffectiveAccidentals(key_sig=key_sig, accidental_overrides=MappingProxyType({}))

    result = get_note_and_octave(NOTE_MAPPING, clef, offset, octave_shift, accidentals)
    if result is None:
        click.echo("  ERROR: No pitch at that offset.", err=True)
        sys.exit(1)

    click.echo(f"{result}  (semitones above C: {result.note.semitone_val})")
