"""LayoutLoader: builds layout views from a renderer's JSON layout dump."""

from __future__ import annotations

import json
from typing import Any

from scoreclick.layout_models import (
    BoundingBox,
    Measure,
    Note,
    NoteEvent,
    Rest,
    Stave,
    StaveModifier,
    StavePart,
    Voice,
)


class LayoutError(ValueError):
    """Raised when a layout document does not have the expected shape."""


def _require_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise LayoutError(f"{path}: expected an object, got {type(value).__name__}.")
    return value


def _list(data: dict[str, Any], name: str, path: str) -> list[Any]:
    value = data.get(name, [])
    if not isinstance(value, list):
        raise LayoutError(f"{path}.{name}: expected a list, got {type(value).__name__}.")
    return value


def _number(data: dict[str, Any], name: str, path: str) -> float | None:
    value = data.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutError(f"{path}.{name}: expected a number, got {value!r}.")
    return value


def _int(data: dict[str, Any], name: str, path: str, default: int | None = None) -> int:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutError(f"{path}.{name}: expected an integer, got {value!r}.")
    return value


def _str(data: dict[str, Any], name: str, path: str, default: str) -> str:
    value = data.get(name, default)
    if not isinstance(value, str):
        raise LayoutError(f"{path}.{name}: expected a string, got {value!r}.")
    return value


def _bounding_box(value: Any, path: str) -> BoundingBox | None:
    if value is None:
        return None
    data = _require_dict(value, path)
    coords = {name: _number(data, name, path) for name in ("x", "y", "w", "h")}
    missing = [name for name, coord in coords.items() if coord is None]
    if missing:
        raise LayoutError(f"{path}: missing {', '.join(missing)}.")
    return BoundingBox(**coords)  # type: ignore[arg-type]


def _tickable(value: Any, path: str) -> NoteEvent:
    data = _require_dict(value, path)
    kind = _str(data, "type", path, "note")
    ticks = _int(data, "ticks", path)
    box = _bounding_box(data.get("bounding_box"), f"{path}.bounding_box")

    if kind == "rest":
        return Rest(ticks=ticks, bounding_box=box)
    if kind != "note":
        raise LayoutError(f"{path}.type: expected 'note' or 'rest', got {kind!r}.")

    keys = _list(data, "keys", path)
    accidentals = _list(data, "accidentals", path)
    if not all(isinstance(key, str) for key in keys):
        raise LayoutError(f"{path}.keys: expected a list of strings.")
    if not all(acc is None or isinstance(acc, str) for acc in accidentals):
        raise LayoutError(f"{path}.accidentals: expected a list of strings or nulls.")

    return Note(
        ticks=ticks,
        keys=tuple(keys),
        accidentals=tuple(accidentals),
        bounding_box=box,
        clef=_str(data, "clef", path, "treble"),
        octave_shift=_int(data, "octave_shift", path, 0),
    )


def _voice(value: Any, path: str) -> Voice:
    data = _require_dict(value, path)
    return Voice(
        resolution=_int(data, "resolution", path),
        tickables=tuple(
            _tickable(item, f"{path}.tickables[{idx}]")
            for idx, item in enumerate(_list(data, "tickables", path))
        ),
    )


def _stave(value: Any, path: str) -> Stave:
    data = _require_dict(value, path)
    modifiers = []
    for idx, item in enumerate(_list(data, "modifiers", path)):
        mod_path = f"{path}.modifiers[{idx}]"
        mod = _require_dict(item, mod_path)
        modifiers.append(
            StaveModifier(
                category=_str(mod, "category", mod_path, ""),
                value=_str(mod, "value", mod_path, ""),
            )
        )

    spacing = _number(data, "spacing_between_lines_px", path)
    return Stave(
        center_y=_number(data, "center_y", path),
        spacing_between_lines_px=10 if spacing is None else spacing,
        num_lines=_int(data, "num_lines", path, 5),
        modifiers=tuple(modifiers),
    )


def _measure(value: Any, path: str) -> Measure:
    data = _require_dict(value, path)
    parts = []
    for idx, item in enumerate(_list(data, "parts", path)):
        part_path = f"{path}.parts[{idx}]"
        part = _require_dict(item, part_path)
        if "stave" not in part:
            raise LayoutError(f"{part_path}: missing stave.")
        parts.append(
            StavePart(
                stave=_stave(part["stave"], f"{part_path}.stave"),
                voices=tuple(
                    _voice(voice, f"{part_path}.voices[{v_idx}]")
                    for v_idx, voice in enumerate(_list(part, "voices", part_path))
                ),
            )
        )

    return Measure(
        x=_number(data, "x", path),
        y=_number(data, "y", path),
        width=_number(data, "width", path),
        last_y=_number(data, "last_y", path),
        parts=tuple(parts),
    )


def measures_from_dict(document: Any) -> list[Measure]:
    """
    Build the measures of a layout document.

    Raises:
        LayoutError: If the document does not match the layout schema.
    """
    data = _require_dict(document, "layout")
    return [
        _measure(item, f"layout.measures[{idx}]")
        for idx, item in enumerate(_list(data, "measures", "layout"))
    ]


def load_layout(path: str) -> list[Measure]:
    """
    Read a JSON layout file.

    Raises:
        LayoutError: If the file is not valid JSON or not a layout document.
        OSError: If the file cannot be read.
    """
    with open(path, encoding="utf-8") as fh:
        try:
            document = json.load(fh)
        except json.JSONDecodeError as exc:
            raise LayoutError(f"{path}: invalid JSON ({exc.msg}).") from exc
    return measures_from_dict(document)
