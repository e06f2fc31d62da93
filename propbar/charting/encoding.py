"""Altair channel builders for proportion layers.

Orientation is handled by choosing channel classes: a vertical layer puts the
discrete aesthetic on `x` and segment extents on `y`/`y2`, a horizontal layer
swaps them (the coordinate flip). Channels are passed positionally to
`Chart.encode`, which infers the encoding slot from the channel class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

import altair as alt

from propbar.analysis.layer import PropLayer

from .defaults import FILL_PALETTE
from .schema import Orientation

# Aesthetics used as grouping keys that have no dedicated visual channel.
TOOLTIP_AESTHETICS: Final[tuple[str, ...]] = ("x", "fill", "colour", "by", "group", "row", "column")


@dataclass(frozen=True, slots=True)
class AxisChannels:
    """Channel classes for one orientation."""

    discrete: type
    value: type
    value2: type
    offset: type


_VERTICAL = AxisChannels(discrete=alt.X, value=alt.Y, value2=alt.Y2, offset=alt.XOffset)
_HORIZONTAL = AxisChannels(discrete=alt.Y, value=alt.X, value2=alt.X2, offset=alt.YOffset)


def axis_channels(orientation: Orientation) -> AxisChannels:
    """Return the channel classes for an orientation.

    Raises:
        ValueError: When `orientation` is not `vertical` or `horizontal`.
    """

    if orientation == "vertical":
        return _VERTICAL
    if orientation == "horizontal":
        return _HORIZONTAL
    raise ValueError(f"Unknown orientation {orientation!r}; expected 'vertical' or 'horizontal'.")


def discrete_channel(
    layer: PropLayer,
    orientation: Orientation,
    *,
    padding_outer: float | None = None,
) -> Any:
    """Encode the `x` aesthetic on the discrete axis.

    Horizontal layers list categories bottom-to-top, mirroring a flipped
    vertical axis.
    """

    levels = layer.levels("x")
    if orientation == "horizontal":
        levels = levels[::-1]
    scale = alt.Scale(paddingInner=0) if padding_outer is None else alt.Scale(paddingInner=0, paddingOuter=padding_outer)
    return axis_channels(orientation).discrete(
        field="x",
        type="nominal",
        sort=levels,
        title=layer.title("x"),
        scale=scale,
    )


def value_channels(
    layer: PropLayer,
    orientation: Orientation,
    *,
    field: str,
    axis: Any = alt.Undefined,
    scale: Any = alt.Undefined,
    title: Any = alt.Undefined,
    extent: bool = False,
) -> list[Any]:
    """Encode positioned values on the value axis.

    Args:
        layer: Positioned proportion layer.
        orientation: Layer orientation.
        field: Column holding the anchor (`ymin` for bars, `ylabel` for text).
        axis: Optional Altair axis definition.
        scale: Optional Altair scale definition.
        title: Axis title; defaults to the name of the counted variable.
        extent: When True, also encode `ymax` as the second coordinate.

    Returns:
        The value channel, followed by the second coordinate when `extent`.
    """

    channels = axis_channels(orientation)
    if title is alt.Undefined:
        title = "count"
    encoded: list[Any] = [
        channels.value(field=field, type="quantitative", stack=None, axis=axis, scale=scale, title=title)
    ]
    if extent:
        encoded.append(channels.value2(field="ymax"))
    return encoded


def fill_channel(layer: PropLayer, *, reverse_legend: bool = False, show_legend: bool = True) -> alt.Color:
    """Encode the `fill` aesthetic with a stable per-level palette.

    Colours are attached to levels in category order; reversing the legend
    only changes the listing order.
    """

    levels = layer.levels("fill")
    colours = [FILL_PALETTE[idx % len(FILL_PALETTE)] for idx in range(len(levels))]
    if reverse_legend:
        levels = levels[::-1]
        colours = colours[::-1]
    return alt.Color(
        field="fill",
        type="nominal",
        title=layer.title("fill"),
        scale=alt.Scale(domain=levels, range=colours),
        legend=alt.Legend() if show_legend else None,
    )


def tooltip_channel(layer: PropLayer) -> list[alt.Tooltip]:
    """Build tooltips for the grouping aesthetics followed by `count` and `prop`."""

    tooltips = [
        alt.Tooltip(field=name, type="nominal", title=layer.title(name))
        for name in TOOLTIP_AESTHETICS
        if layer.has(name)
    ]
    tooltips.append(alt.Tooltip(field="count", type="quantitative", title="count", format=",.4~g"))
    tooltips.append(alt.Tooltip(field="prop", type="quantitative", title="prop", format=".1%"))
    return tooltips


def facet_channels(layer: PropLayer) -> dict[str, Any]:
    """Return `row`/`column` facet definitions for the facets present."""

    facets: dict[str, Any] = {}
    if layer.has("row"):
        facets["row"] = alt.Row(field="row", type="nominal", title=layer.title("row"), sort=layer.levels("row"))
    if layer.has("column"):
        facets["column"] = alt.Column(
            field="column", type="nominal", title=layer.title("column"), sort=layer.levels("column")
        )
    return facets
