"""Unit tests for reading JSON layout documents."""

import json
from pathlib import Path
from typing import Any

import pytest

from scoreclick.layout_loader import LayoutError, load_layout, measures_from_dict
from scoreclick.layout_models import BoundingBox, Note, Rest


def _sample_layout() -> dict[str, Any]:
    return {
        "measures": [
            {
                "x": 20,
                "y": 30,
                "width": 150,
                "last_y": 130,
                "parts": [
                    {
                        "stave": {
                            "center_y": 80,
                            "spacing_between_lines_px": 10,
                            "modifiers": [
                                {"category": "clef", "value": "treble"},
                                {"category": "keysignature", "value": "Bb"},
                            ],
                        },
                        "voices": [
                            {
                                "resolution": 4096,
                                "tickables": [
                                    {
                                        "type": "note",
                                        "ticks": 4096,
                                        "keys": ["c/5", "e/5"],
                                        "accidentals": ["#", None],
                                        "bounding_box": {"x": 25, "y": 70, "w": 10, "h": 20},
                                    },
                                    {"type": "rest", "ticks": 4096},
                                ],
                            }
                        ],
                    }
                ],
            }
        ]
    }


def test_measures_from_dict_builds_views() -> None:
    measures = measures_from_dict(_sample_layout())
    assert len(measures) == 1

    measure = measures[0]
    assert (measure.x, measure.y, measure.width, measure.last_y) == (20, 30, 150, 130)
    stave = measure.parts[0].stave
    assert stave.clef == "treble"
    assert stave.key_signature == "Bb"
    assert stave.num_lines == 5

    note, rest = measure.parts[0].voices[0].tickables
    assert isinstance(note, Note)
    assert note.keys == ("c/5", "e/5")
    assert note.accidentals == ("#", None)
    assert note.bounding_box == BoundingBox(x=25, y=70, w=10, h=20)
    assert note.clef == "treble"
    assert isinstance(rest, Rest)
    assert rest.bounding_box is None


def test_missing_geometry_is_kept_as_none() -> None:
    measures = measures_from_dict({"measures": [{"parts": []}]})
    assert measures[0].x is None
    assert measures[0].height is None


def test_empty_document() -> None:
    assert measures_from_dict({}) == []


@pytest.mark.parametrize(
    ("mutate", "message"),
    [
        (lambda doc: doc["measures"][0].update(x="left"), "layout.measures[0].x"),
        (lambda doc: doc["measures"][0]["parts"][0].pop("stave"), "missing stave"),
        (
            lambda doc: doc["measures"][0]["parts"][0]["voices"][0]["tickables"][1].pop("ticks"),
            "tickables[1].ticks",
        ),
        (
            lambda doc: doc["measures"][0]["parts"][0]["voices"][0]["tickables"][0].update(type="chord"),
            "expected 'note' or 'rest'",
        ),
        (
            lambda doc: doc["measures"][0]["parts"][0]["voices"][0]["tickables"][0].update(
                bounding_box={"x": 1}
            ),
            "missing y, w, h",
        ),
    ],
)
def test_invalid_documents_raise_layout_error(mutate: Any, message: str) -> None:
    document = _sample_layout()
    mutate(document)
    with pytest.raises(LayoutError, match=message.replace("[", r"\[").replace("]", r"\]")):
        measures_from_dict(document)


def test_layout_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        measures_from_dict(["not", "an", "object"])


def test_load_layout_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "layout.json"
    path.write_text(json.dumps(_sample_layout()), encoding="utf-8")
    assert len(load_layout(str(path))) == 1


def test_load_layout_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LayoutError, match="invalid JSON"):
        load_layout(str(path))
