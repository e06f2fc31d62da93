"""Translate ggplot-style styling arguments into Vega-Lite mark properties.

Styling options are passed straight through to the Altair mark, so any
Vega-Lite mark property (`fontSize`, `color`, `dy`, ...) works as-is. The
ggplot spellings below are accepted as aliases.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, Literal

from .defaults import PT_PER_MM

MarkKind = Literal["bar", "text", "point"]

_RENAMES: Final[dict[str, str]] = {
    "colour": "color",
    "family": "font",
    "alpha": "opacity",
    "linewidth": "strokeWidth",
}

_FONTFACES: Final[dict[str, dict[str, str]]] = {
    "plain": {"fontWeight": "normal", "fontStyle": "normal"},
    "bold": {"fontWeight": "bold"},
    "italic": {"fontStyle": "italic"},
    "bold.italic": {"fontWeight": "bold", "fontStyle": "italic"},
}

_HJUST: Final[dict[float, str]] = {0.0: "left", 0.5: "center", 1.0: "right"}
_VJUST: Final[dict[Any, str]] = {
    0.0: "bottom",
    0.5: "middle",
    1.0: "top",
    "bottom": "bottom",
    "middle": "middle",
    "center": "middle",
    "top": "top",
}


def translate_mark_style(style: Mapping[str, Any] | None, *, kind: MarkKind) -> dict[str, Any]:
    """Convert styling arguments into keyword arguments for an Altair mark.

    Args:
        style: Styling arguments (ggplot aliases or Vega-Lite property names).
        kind: Mark type receiving the properties; `size` means font size in
            millimetres for text and a line width for bars.

    Returns:
        Keyword arguments for `mark_bar`/`mark_text`/`mark_point`.

    Raises:
        ValueError: When `fontface`, `hjust` or `vjust` has an unsupported value.
    """

    translated: dict[str, Any] = {}
    for key, value in (style or {}).items():
        if key == "size":
            if kind == "text":
                translated["fontSize"] = value * PT_PER_MM
            elif kind == "bar":
                translated["strokeWidth"] = value
            else:
                translated["size"] = value
        elif key == "fontface":
            if value not in _FONTFACES:
                raise ValueError(f"Unsupported fontface {value!r}.")
            translated.update(_FONTFACES[value])
        elif key == "angle":
            # ggplot rotates counter-clockwise, Vega clockwise.
            translated["angle"] = (-value) % 360
        elif key == "hjust":
            if value not in _HJUST:
                raise ValueError(f"Unsupported hjust {value!r}; expected 0, 0.5 or 1.")
            translated["align"] = _HJUST[value]
        elif key == "vjust":
            if value not in _VJUST:
                raise ValueError(f"Unsupported vjust {value!r}.")
            translated["baseline"] = _VJUST[value]
        else:
            translated[_RENAMES.get(key, key)] = value
    return translated
